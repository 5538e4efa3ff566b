from __future__ import annotations

import sqlite3

from domain.errors import StoreUnavailable
from infrastructure.db.client_repository_sql import SqlClientRepository


class SqliteClientRepository(SqlClientRepository):
    """
    SQLite-backed implementation of `ClientRepository`.

    The injected connection is switched to autocommit mode
    (`isolation_level = None`) because the repository issues its own
    transaction statements. Transactions start with `BEGIN IMMEDIATE` so
    the write lock is taken before the balance check, not at the first
    update.
    """

    placeholder = "?"
    begin_statement = "BEGIN IMMEDIATE"
    create_table_statement = """
        CREATE TABLE IF NOT EXISTS bank_client (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            password TEXT NOT NULL,
            money INTEGER NOT NULL
        )
    """
    unavailable_errors = (sqlite3.OperationalError, sqlite3.InterfaceError)
    # The driver raises OverflowError when binding an int outside 64 bits.
    store_errors = (sqlite3.DatabaseError, OverflowError)

    def __init__(self, conn: sqlite3.Connection) -> None:
        conn.isolation_level = None
        super().__init__(conn)

    @classmethod
    def connect(cls, db_path: str) -> "SqliteClientRepository":
        """Open `db_path` and return a repository with its schema in place."""

        # The connection is shared by the bot / web worker threads; the
        # repository's lock serialises access to it.
        try:
            conn = sqlite3.connect(db_path, check_same_thread=False)
        except sqlite3.OperationalError as exc:
            raise StoreUnavailable(str(exc)) from exc
        repo = cls(conn)
        repo.ensure_schema()
        return repo
