from __future__ import annotations

from typing import Any

import psycopg2

from domain.errors import StoreUnavailable
from domain.models import Client
from infrastructure.db.client_repository_sql import SqlClientRepository


class PostgresClientRepository(SqlClientRepository):
    """
    Postgres-backed implementation of `ClientRepository` using psycopg2.

    psycopg2 opens a transaction implicitly on the first statement; the
    connection is put in autocommit mode instead so that the explicit
    `BEGIN` / `COMMIT` issued by `transaction()` delimit the unit of work
    and plain reads never leave a transaction idle.
    """

    placeholder = "%s"
    begin_statement = "BEGIN"
    create_table_statement = """
        CREATE TABLE IF NOT EXISTS bank_client (
            id BIGSERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            password VARCHAR(60) NOT NULL,
            money BIGINT NOT NULL
        )
    """
    unavailable_errors = (psycopg2.OperationalError, psycopg2.InterfaceError)
    store_errors = (psycopg2.Error,)

    def __init__(self, conn: Any) -> None:
        conn.autocommit = True
        super().__init__(conn)

    @classmethod
    def connect(cls, dsn: str) -> "PostgresClientRepository":
        """Connect to `dsn` and return a repository with its schema in place."""

        try:
            conn = psycopg2.connect(dsn)
        except psycopg2.OperationalError as exc:
            raise StoreUnavailable(str(exc)) from exc
        repo = cls(conn)
        repo.ensure_schema()
        return repo

    def _insert_client(self, cur: Any, client: Client) -> int:
        # psycopg2 has no usable `lastrowid`; ask the server for the id.
        cur.execute(
            """
            INSERT INTO bank_client (name, password, money)
            VALUES (%s, %s, %s)
            RETURNING id
            """,
            (client.name, client.password, client.balance),
        )
        row = cur.fetchone()
        return int(row[0])
