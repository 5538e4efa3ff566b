from __future__ import annotations

from typing import ContextManager, List, Optional, Protocol

from .models import Client


class ClientRepository(Protocol):
    """
    Abstraction over bank client persistence.

    Implementations are responsible for:
    - Mapping between `bank_client` rows and the `Client` domain model.
    - Hiding any SQL / driver details from the application layer.
    - Raising the errors from `domain.errors` instead of driver exceptions.
    """

    def transaction(self) -> ContextManager[None]:
        """
        Open a unit of work.

        The outermost scope commits on normal exit and rolls back on any
        exception. Nested scopes join the enclosing one, so every mutation
        made inside it is committed or discarded together.
        """

        ...

    def list_all(self) -> List[Client]:
        """Return every client ordered by id, or an empty list."""

        ...

    def find_by_name(self, name: str) -> Optional[Client]:
        """
        Return the client with the given name, or None.

        Names are expected to be unique. If several rows share a name the
        one with the lowest id is returned.
        """

        ...

    def find_by_id(self, client_id: int) -> Optional[Client]:
        """Return the client with the given id, or None."""

        ...

    def find_id_by_name(self, name: str) -> Optional[int]:
        ...

    def validate_credentials(self, name: str, password: str) -> bool:
        """Return True iff a client with exactly this name and password exists."""

        ...

    def has_at_least(self, name: str, amount: int) -> bool:
        """Return True iff the client exists and its balance covers `amount`."""

        ...

    def adjust_balance(self, name: str, password: str, delta: int) -> Client:
        """
        Add `delta` to the client's balance and return the updated client.

        Raises `AuthFailed` for bad credentials and `InsufficientFunds` when
        the new balance would be negative (nothing is changed in either case).
        Raises `InvariantViolation` if the update touched other than one row.
        """

        ...

    def create(self, client: Client) -> Client:
        """
        Persist a new client and return it with its store-assigned id.

        Raises `DuplicateName` if the name is already taken.
        """

        ...

    def delete(self, name: str) -> None:
        """Remove the named client. Raises `ClientNotFound` if there is none."""

        ...

    def ensure_schema(self) -> None:
        ...

    def drop_schema(self) -> None:
        ...

    def close(self) -> None:
        ...
