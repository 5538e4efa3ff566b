from __future__ import annotations

import logging

from config import Settings
from domain.repositories import ClientRepository
from infrastructure.db.client_repository_sqlite import SqliteClientRepository


logger = logging.getLogger(__name__)


def create_client_repository(settings: Settings) -> ClientRepository:
    """
    Build the client store for this process.

    Called once by each entry point; the returned repository is then
    passed explicitly to the interface layer.
    """

    if settings.db_backend == "postgres":
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL environment variable is not set.")

        # psycopg2 is only needed for this backend.
        from infrastructure.db.client_repository_postgres import PostgresClientRepository

        logger.info("Using PostgreSQL client store")
        return PostgresClientRepository.connect(settings.database_url)

    logger.info("Using SQLite client store at %s", settings.db_path)
    return SqliteClientRepository.connect(settings.db_path)
