"""Abstract inventory ledger.

The ledger owns inventory items, per-location stock levels and
reservations.  It is the sole arbiter of whether an item-level
reservation succeeds and must keep available quantity per
(item, location) non-negative under its own locking discipline.
Wiring one in switches the engine to Ledger Mode.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockalloc.domain.model.ledger import (
    InventoryItem,
    Reservation,
    ReservationInput,
    StockLevel,
)


class InventoryLedger(ABC):

    # --- Items ----------------------------------------------------------------

    @abstractmethod
    async def retrieve_inventory_item(self, inventory_item_id: str) -> InventoryItem:
        """Return the item.  Raises EntityNotFoundError if unknown."""

    @abstractmethod
    async def list_inventory_items(self, inventory_item_ids: list[str]) -> list[InventoryItem]:
        """Return the known items among *inventory_item_ids*."""

    # --- Availability ---------------------------------------------------------

    @abstractmethod
    async def confirm_inventory(
        self, inventory_item_id: str, location_ids: list[str], quantity: int
    ) -> bool:
        """True if *quantity* units are available across *location_ids*."""

    @abstractmethod
    async def list_stock_levels(
        self, inventory_item_ids: list[str], location_id: str
    ) -> list[StockLevel]:
        """Return the stock levels of the given items at one location."""

    @abstractmethod
    async def adjust_inventory(
        self, inventory_item_id: str, location_id: str, quantity: int
    ) -> None:
        """Add *quantity* (may be negative) to the stocked quantity."""

    # --- Reservations ---------------------------------------------------------

    @abstractmethod
    async def create_reservation(self, data: ReservationInput) -> Reservation:
        """Create a reservation, failing if the stock is not available."""

    @abstractmethod
    async def list_reservations(
        self, line_item_id: str, newest_first: bool = True
    ) -> tuple[list[Reservation], int]:
        """Return a line item's reservations ordered by ``created_at`` and their count."""

    @abstractmethod
    async def update_reservation(self, reservation_id: str, quantity: int) -> None:
        """Set the quantity of an existing reservation."""

    @abstractmethod
    async def delete_reservation(self, reservation_id: str) -> None:
        """Delete one reservation."""

    @abstractmethod
    async def delete_reservations_by_line_item(self, line_item_id: str) -> None:
        """Delete every reservation held for a line item."""
