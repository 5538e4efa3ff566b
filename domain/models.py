from dataclasses import dataclass, field
from typing import Optional


# Largest value a BIGINT / SQLite INTEGER `money` column can hold.
MAX_BALANCE = 2**63 - 1


@dataclass(eq=False)
class Client:
    """
    Domain representation of a bank client.

    Two clients are equal when their names are equal; `id` and `balance`
    are state, not identity. The `id` is assigned by the store on creation
    and stays `None` until then.
    """

    name: str
    password: str = field(repr=False)
    balance: int = 0
    id: Optional[int] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Client):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)
