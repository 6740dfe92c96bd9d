"""Records owned by the inventory ledger.

The engine creates, reads, updates and deletes these by id but never
looks past the fields defined here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

ORDER_RESERVATION = "order"


@dataclass(frozen=True)
class InventoryItem:
    id: str
    sku: str = ""


@dataclass(frozen=True)
class StockLocation:
    id: str
    name: str = ""


@dataclass
class StockLevel:
    """Stock of one inventory item at one location."""

    inventory_item_id: str
    location_id: str
    stocked_quantity: int
    reserved_quantity: int = 0

    @property
    def available_quantity(self) -> int:
        return self.stocked_quantity - self.reserved_quantity


@dataclass(frozen=True)
class ReservationInput:
    """Payload for creating a reservation."""

    inventory_item_id: str
    location_id: str
    quantity: int
    line_item_id: str
    type: str = ORDER_RESERVATION


@dataclass
class Reservation:
    """An in-flight claim of item units at a location for a line item."""

    id: str
    inventory_item_id: str
    location_id: str
    quantity: int
    line_item_id: str
    type: str = ORDER_RESERVATION
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
