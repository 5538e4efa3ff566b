from __future__ import annotations


class BankError(Exception):
    """Base class for every error raised by the bank domain."""

    code = "bank_error"


class OperationRejected(BankError):
    """
    An expected refusal: the request was well formed but cannot be honoured.

    Rejections are returned to callers as unsuccessful results and never
    leave partial changes behind.
    """

    code = "rejected"


class ClientNotFound(OperationRejected):
    code = "not_found"

    def __init__(self, name: str) -> None:
        super().__init__(f"Client {name!r} does not exist.")
        self.name = name


class DuplicateName(OperationRejected):
    code = "duplicate_name"

    def __init__(self, name: str) -> None:
        super().__init__(f"Client {name!r} already exists.")
        self.name = name


class AuthFailed(OperationRejected):
    code = "auth_failed"

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid credentials for client {name!r}.")
        self.name = name


class InsufficientFunds(OperationRejected):
    code = "insufficient_funds"

    def __init__(self, name: str, balance: int, requested: int) -> None:
        super().__init__(
            f"Client {name!r} has {balance}, which does not cover {requested}."
        )
        self.name = name
        self.balance = balance
        self.requested = requested


class InvalidAmount(OperationRejected):
    code = "invalid_amount"

    def __init__(self, amount: int, reason: str = "Amount must be greater than zero.") -> None:
        super().__init__(reason)
        self.amount = amount


class InvalidName(OperationRejected):
    code = "invalid_name"

    def __init__(self, name: str) -> None:
        super().__init__("Client name must not be empty.")
        self.name = name


class InvariantViolation(BankError):
    """
    A mutation touched an unexpected number of rows.

    Signals data corruption or concurrent interference. The enclosing
    transaction is rolled back and the error propagates; it is not retried.
    """

    code = "invariant_violation"

    def __init__(self, operation: str, affected_rows: int) -> None:
        super().__init__(
            f"{operation} affected {affected_rows} rows, expected exactly 1."
        )
        self.operation = operation
        self.affected_rows = affected_rows


class StoreError(BankError):
    """The relational store rejected a statement (constraint, data or driver error)."""

    code = "store_error"


class StoreUnavailable(StoreError):
    """The relational store could not be reached or failed at transport level."""

    code = "store_unavailable"
