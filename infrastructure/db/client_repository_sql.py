from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Type

from domain.errors import (
    AuthFailed,
    BankError,
    ClientNotFound,
    DuplicateName,
    InsufficientFunds,
    InvalidAmount,
    InvariantViolation,
    StoreError,
    StoreUnavailable,
)
from domain.models import MAX_BALANCE, Client
from domain.repositories import ClientRepository


logger = logging.getLogger(__name__)

_COLUMNS = "id, name, password, money"


class SqlClientRepository(ClientRepository):
    """
    Driver-neutral implementation of `ClientRepository` over DB-API 2.0.

    The repository owns the `bank_client` table. It works on a single
    connection injected by the caller and drives transactions explicitly
    (`BEGIN` / `COMMIT` / `ROLLBACK`), so the connection must be in
    autocommit mode; the concrete subclasses take care of that.

    All access to the connection is serialised with a re-entrant lock that
    is held for the whole of a transaction, so a unit of work started by
    one thread is never interleaved with statements from another.

    Subclasses provide the dialect specifics: parameter placeholder, DDL,
    how to obtain the id of an inserted row, and which driver exceptions
    mean the store is unreachable (`StoreUnavailable`) or rejected a
    statement (`StoreError`).
    """

    placeholder = "?"
    begin_statement = "BEGIN"
    create_table_statement = ""
    unavailable_errors: Tuple[Type[BaseException], ...] = ()
    store_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self, conn: Any) -> None:
        self._conn = conn
        self._lock = threading.RLock()
        self._depth = 0

    def _sql(self, statement: str) -> str:
        if self.placeholder == "?":
            return statement
        return statement.replace("?", self.placeholder)

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        with self._lock:
            cur = self._conn.cursor()
            try:
                yield cur
            except self.unavailable_errors as exc:
                logger.error("Store failure: %s", exc)
                raise StoreUnavailable(str(exc)) from exc
            except self.store_errors as exc:
                logger.error("Store rejected statement: %s", exc)
                raise StoreError(str(exc)) from exc
            finally:
                cur.close()

    def _execute(self, statement: str, params: Sequence[Any] = ()) -> int:
        with self._cursor() as cur:
            cur.execute(self._sql(statement), tuple(params))
            return cur.rowcount

    def _insert_client(self, cur: Any, client: Client) -> int:
        """Insert `client` and return the id assigned by the store."""

        cur.execute(
            self._sql("INSERT INTO bank_client (name, password, money) VALUES (?, ?, ?)"),
            (client.name, client.password, client.balance),
        )
        return int(cur.lastrowid)

    @staticmethod
    def _to_domain(row: Sequence[Any]) -> Client:
        return Client(
            id=int(row[0]),
            name=row[1],
            password=row[2],
            balance=int(row[3]),
        )

    def _find_one(self, where: str, params: Sequence[Any]) -> Optional[Client]:
        """
        Return the first client matching `where`, ordered by id.

        A well-formed query matches at most one row. When more than one row
        matches, the lowest id wins and the ambiguity is logged.
        """

        with self._cursor() as cur:
            cur.execute(
                self._sql(f"SELECT {_COLUMNS} FROM bank_client WHERE {where} ORDER BY id"),
                tuple(params),
            )
            rows = cur.fetchmany(2)
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning(
                "Query on bank_client (%s) matched several rows; using id=%s",
                where,
                rows[0][0],
            )
        return self._to_domain(rows[0])

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._execute(self.begin_statement)
            self._depth += 1
            try:
                yield
            except BaseException:
                if outermost:
                    self._rollback()
                raise
            else:
                if outermost:
                    self._commit()
            finally:
                self._depth -= 1

    def _commit(self) -> None:
        try:
            self._execute("COMMIT")
        except StoreUnavailable:
            self._rollback()
            raise

    def _rollback(self) -> None:
        try:
            self._execute("ROLLBACK")
        except BankError:
            # The original error keeps propagating.
            logger.exception("Rollback failed")

    def list_all(self) -> List[Client]:
        with self._cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM bank_client ORDER BY id")
            rows = cur.fetchall()
        return [self._to_domain(row) for row in rows]

    def find_by_name(self, name: str) -> Optional[Client]:
        return self._find_one("name = ?", (name,))

    def find_by_id(self, client_id: int) -> Optional[Client]:
        return self._find_one("id = ?", (client_id,))

    def find_id_by_name(self, name: str) -> Optional[int]:
        client = self.find_by_name(name)
        return client.id if client is not None else None

    def validate_credentials(self, name: str, password: str) -> bool:
        return self._find_one("name = ? AND password = ?", (name, password)) is not None

    def has_at_least(self, name: str, amount: int) -> bool:
        client = self.find_by_name(name)
        return client is not None and client.balance >= amount

    def adjust_balance(self, name: str, password: str, delta: int) -> Client:
        if abs(delta) > MAX_BALANCE:
            raise InvalidAmount(delta, f"Amount must not exceed {MAX_BALANCE}.")

        with self.transaction():
            client = self._find_one("name = ? AND password = ?", (name, password))
            if client is None:
                raise AuthFailed(name)

            # Check and write in one statement: the row only changes if the
            # resulting balance stays within [0, MAX_BALANCE]. The bounds are
            # computed here so the database never evaluates an overflowing sum.
            low = max(0, -delta)
            high = min(MAX_BALANCE, MAX_BALANCE - delta)
            updated = self._execute(
                """
                UPDATE bank_client
                SET money = money + ?
                WHERE id = ? AND money BETWEEN ? AND ?
                """,
                (delta, client.id, low, high),
            )

            if updated == 0:
                current = self.find_by_id(client.id)
                if current is not None and current.balance + delta < 0:
                    raise InsufficientFunds(name, current.balance, -delta)
                if current is not None and current.balance + delta > MAX_BALANCE:
                    raise InvalidAmount(
                        delta, f"Balance of {name!r} would exceed {MAX_BALANCE}."
                    )
            if updated != 1:
                logger.error(
                    "Balance update for client id=%s affected %d rows", client.id, updated
                )
                raise InvariantViolation("adjust_balance", updated)

            logger.debug("Adjusted balance of client id=%s by %d", client.id, delta)
            stored = self.find_by_id(client.id)

        return stored or client

    def create(self, client: Client) -> Client:
        if client.balance < 0:
            raise InvalidAmount(client.balance, "Initial balance must not be negative.")
        if client.balance > MAX_BALANCE:
            raise InvalidAmount(client.balance, f"Initial balance must not exceed {MAX_BALANCE}.")

        with self.transaction():
            if self.find_by_name(client.name) is not None:
                raise DuplicateName(client.name)

            with self._cursor() as cur:
                new_id = self._insert_client(cur, client)
                inserted = cur.rowcount

            if inserted != 1:
                logger.error("Insert of client %r affected %d rows", client.name, inserted)
                raise InvariantViolation("create", inserted)

        logger.debug("Created client id=%s", new_id)
        return Client(
            id=new_id,
            name=client.name,
            password=client.password,
            balance=client.balance,
        )

    def delete(self, name: str) -> None:
        with self.transaction():
            if self.find_by_name(name) is None:
                raise ClientNotFound(name)

            deleted = self._execute("DELETE FROM bank_client WHERE name = ?", (name,))
            if deleted != 1:
                logger.error("Delete of client %r affected %d rows", name, deleted)
                raise InvariantViolation("delete", deleted)

        logger.debug("Deleted client %r", name)

    def ensure_schema(self) -> None:
        self._execute(self.create_table_statement)

    def drop_schema(self) -> None:
        self._execute("DROP TABLE IF EXISTS bank_client")

    def close(self) -> None:
        with self._lock:
            self._conn.close()
