from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


class FormError(ValueError):
    """A submitted form is missing a field or carries a malformed value."""


@dataclass
class TransferForm:
    sender_name: str
    sender_password: str
    recipient_name: str
    amount: int


@dataclass
class RegistrationForm:
    name: str
    password: str
    balance: int


def _require(data: Mapping[str, str], key: str) -> str:
    value = data.get(key)
    if value is None:
        raise FormError(f"Missing form field: {key}")
    return value


def _parse_int(data: Mapping[str, str], key: str) -> int:
    raw = _require(data, key).strip()
    try:
        return int(raw)
    except ValueError:
        raise FormError(f"Field {key} must be a whole number, got {raw!r}") from None


def parse_transfer_form(data: Mapping[str, str]) -> TransferForm:
    """
    Read the money transfer form.

    Fields: senderName, senderPass, count, nameTo. Names are trimmed,
    the password is taken as-is.
    """

    return TransferForm(
        sender_name=_require(data, "senderName").strip(),
        sender_password=_require(data, "senderPass"),
        recipient_name=_require(data, "nameTo").strip(),
        amount=_parse_int(data, "count"),
    )


def parse_registration_form(data: Mapping[str, str]) -> RegistrationForm:
    """Read the registration form: name, password, money."""

    return RegistrationForm(
        name=_require(data, "name"),
        password=_require(data, "password"),
        balance=_parse_int(data, "money"),
    )
