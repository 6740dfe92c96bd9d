"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stockalloc.domain.exceptions import InvalidQuantityError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Used both for link multipliers and for requested reservation amounts;
    neither may be zero or negative.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidQuantityError(
                f"Quantity must be greater than 0, got {self.value}"
            )

    def __str__(self) -> str:
        return str(self.value)


class ConsistencyMode(Enum):
    """How the engine tracks stock for the whole process.

    SIMPLE keeps a single counter on the variant.  LEDGER fans out through
    variant/item links to an external inventory ledger with real
    reservation records.
    """

    SIMPLE = "simple"
    LEDGER = "ledger"

    @classmethod
    def for_ledger(cls, ledger: object | None) -> ConsistencyMode:
        return cls.SIMPLE if ledger is None else cls.LEDGER


@dataclass(frozen=True)
class ReservationContext:
    """Where and for what a reservation is being made."""

    line_item_id: str
    location_id: str | None = None
    sales_channel_id: str | None = None
