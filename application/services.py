from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from domain.errors import (
    AuthFailed,
    BankError,
    ClientNotFound,
    InsufficientFunds,
    InvalidAmount,
    InvalidName,
    OperationRejected,
)
from domain.models import MAX_BALANCE, Client
from domain.repositories import ClientRepository


logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """
    Outcome of an application-level operation.

    Expected rejections come back as `success=False` with the error's
    `code` and message. Store faults are not represented here: they are
    raised to the caller.
    """

    success: bool
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    client: Optional[Client] = None
    clients: List[Client] = field(default_factory=list)
    total_balance: Optional[int] = None

    @classmethod
    def rejected(cls, error: OperationRejected) -> "OperationResult":
        return cls(success=False, error_code=error.code, error_message=str(error))


def _validate_positive_amount(amount: int) -> None:
    if amount <= 0:
        raise InvalidAmount(amount)
    if amount > MAX_BALANCE:
        raise InvalidAmount(amount, f"Amount must not exceed {MAX_BALANCE}.")


def _log_hard_failure(operation: str, error: BankError) -> None:
    logger.error("%s aborted (%s): %s", operation, error.code, error)


def transfer_money(
    sender_name: str,
    sender_password: str,
    recipient_name: str,
    amount: int,
    client_repo: ClientRepository,
) -> OperationResult:
    """
    Move `amount` from the sender to the named recipient.

    All checks and both legs (debit sender, credit recipient) run in one
    transaction. If any step fails nothing is written, so the total amount
    of money held by all clients is unchanged by a failed transfer and by
    a successful one. Success is reported only after the commit.
    """

    try:
        _validate_positive_amount(amount)

        with client_repo.transaction():
            recipient = client_repo.find_by_name(recipient_name)
            if recipient is None:
                raise ClientNotFound(recipient_name)

            if not client_repo.validate_credentials(sender_name, sender_password):
                raise AuthFailed(sender_name)

            if not client_repo.has_at_least(sender_name, amount):
                sender = client_repo.find_by_name(sender_name)
                balance = sender.balance if sender is not None else 0
                raise InsufficientFunds(sender_name, balance, amount)

            sender = client_repo.adjust_balance(sender_name, sender_password, -amount)
            client_repo.adjust_balance(recipient.name, recipient.password, amount)
    except OperationRejected as exc:
        logger.info("Transfer from %r to %r rejected: %s", sender_name, recipient_name, exc.code)
        return OperationResult.rejected(exc)
    except BankError as exc:
        _log_hard_failure("Transfer", exc)
        raise

    logger.info("Transferred %d from %r to %r", amount, sender_name, recipient_name)
    return OperationResult(success=True, client=sender)


def register_client(
    name: str,
    password: str,
    balance: int,
    client_repo: ClientRepository,
) -> OperationResult:
    """Create a new client with a starting balance."""

    name = name.strip()
    try:
        if not name:
            raise InvalidName(name)
        client = client_repo.create(Client(name=name, password=password, balance=balance))
    except OperationRejected as exc:
        logger.info("Registration of %r rejected: %s", name, exc.code)
        return OperationResult.rejected(exc)
    except BankError as exc:
        _log_hard_failure("Registration", exc)
        raise

    logger.info("Registered client %r (id=%s)", client.name, client.id)
    return OperationResult(success=True, client=client)


def get_balance(name: str, password: str, client_repo: ClientRepository) -> OperationResult:
    """Return the client (and so its balance) if the credentials match."""

    try:
        client = client_repo.find_by_name(name)
        if client is None:
            raise ClientNotFound(name)
        if not client_repo.validate_credentials(name, password):
            raise AuthFailed(name)
    except OperationRejected as exc:
        logger.info("Balance lookup for %r rejected: %s", name, exc.code)
        return OperationResult.rejected(exc)
    except BankError as exc:
        _log_hard_failure("Balance lookup", exc)
        raise

    return OperationResult(success=True, client=client)


def delete_client(
    name: str,
    client_repo: ClientRepository,
    password: Optional[str] = None,
) -> OperationResult:
    """
    Remove a client.

    Interfaces that act on behalf of the client pass its `password`, which
    must then match. Administrative callers omit it.
    """

    try:
        with client_repo.transaction():
            if password is not None and client_repo.find_by_name(name) is not None:
                if not client_repo.validate_credentials(name, password):
                    raise AuthFailed(name)
            client_repo.delete(name)
    except OperationRejected as exc:
        logger.info("Deletion of %r rejected: %s", name, exc.code)
        return OperationResult.rejected(exc)
    except BankError as exc:
        _log_hard_failure("Deletion", exc)
        raise

    logger.info("Deleted client %r", name)
    return OperationResult(success=True)


def list_clients(client_repo: ClientRepository) -> OperationResult:
    try:
        clients = client_repo.list_all()
    except BankError as exc:
        _log_hard_failure("Client listing", exc)
        raise

    return OperationResult(
        success=True,
        clients=clients,
        total_balance=sum(c.balance for c in clients),
    )


def find_client(name: str, client_repo: ClientRepository) -> Optional[Client]:
    return client_repo.find_by_name(name)


def find_client_by_id(client_id: int, client_repo: ClientRepository) -> Optional[Client]:
    return client_repo.find_by_id(client_id)


def reset_schema(client_repo: ClientRepository) -> None:
    """Drop the client table and create it again, empty."""

    client_repo.drop_schema()
    client_repo.ensure_schema()
    logger.warning("Client table was reset")
