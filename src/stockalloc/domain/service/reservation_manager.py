"""Domain service: Reservation Manager.

Creates, adjusts and releases the stock claims behind order line items.
In Simple Mode a claim is nothing more than a change to the variant's
``inventory_quantity`` counter.  In Ledger Mode every linked inventory
item gets its own reservation record in the ledger.

Neither implementation serialises concurrent callers: the variant store
must apply counter updates atomically and the ledger must keep each
(item, location) pair from going below zero.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from stockalloc.domain.exceptions import InvalidQuantityError
from stockalloc.domain.model.ledger import Reservation, ReservationInput
from stockalloc.domain.model.value_objects import Quantity, ReservationContext
from stockalloc.domain.repository.inventory_ledger import InventoryLedger
from stockalloc.domain.repository.variant_store import VariantStore
from stockalloc.domain.service.link_table import VariantInventoryLinkTable
from stockalloc.domain.service.location_resolver import LocationResolver

logger = logging.getLogger(__name__)


class ReservationManager(ABC):

    @abstractmethod
    async def reserve(
        self, variant_id: str, quantity: int, context: ReservationContext
    ) -> None:
        """Claim *quantity* units of a variant for a line item."""

    @abstractmethod
    async def adjust_by_line_item(
        self, line_item_id: str, variant_id: str, location_id: str, delta: int
    ) -> None:
        """Change a line item's claim by *delta* units (negative gives stock back)."""

    @abstractmethod
    async def release(self, line_item_id: str, variant_id: str, quantity: int) -> None:
        """Give back the stock claimed for a cancelled line item."""

    @abstractmethod
    async def adjust_inventory(
        self, variant_id: str, location_id: str, quantity: int
    ) -> None:
        """Add *quantity* (may be negative) to the variant's physical stock."""


class SimpleReservationManager(ReservationManager):
    """Single-counter bookkeeping on the variant record."""

    def __init__(self, variant_store: VariantStore) -> None:
        self._variant_store = variant_store

    async def reserve(
        self, variant_id: str, quantity: int, context: ReservationContext
    ) -> None:
        Quantity(quantity)
        # Backorders are the availability check's concern, not ours
        variant = await self._variant_store.retrieve(variant_id)
        await self._variant_store.update_inventory_quantity(
            variant.id, variant.inventory_quantity - quantity
        )
        logger.info(
            "Reserved %s of variant %s for line item %s",
            quantity, variant_id, context.line_item_id,
        )

    async def adjust_by_line_item(
        self, line_item_id: str, variant_id: str, location_id: str, delta: int
    ) -> None:
        await self._shift_counter(variant_id, -delta)
        logger.info(
            "Adjusted line item %s on variant %s by %s", line_item_id, variant_id, delta
        )

    async def release(self, line_item_id: str, variant_id: str, quantity: int) -> None:
        Quantity(quantity)
        await self._shift_counter(variant_id, quantity)
        logger.info(
            "Released %s of variant %s from line item %s",
            quantity, variant_id, line_item_id,
        )

    async def adjust_inventory(
        self, variant_id: str, location_id: str, quantity: int
    ) -> None:
        await self._shift_counter(variant_id, quantity)

    async def _shift_counter(self, variant_id: str, amount: int) -> None:
        variant = await self._variant_store.retrieve(variant_id)
        if not variant.manage_inventory:
            return
        await self._variant_store.update_inventory_quantity(
            variant.id, variant.inventory_quantity + amount
        )


class LedgerReservationManager(ReservationManager):
    """Per-item reservations in the inventory ledger."""

    def __init__(
        self,
        links: VariantInventoryLinkTable,
        locations: LocationResolver,
        ledger: InventoryLedger,
    ) -> None:
        self._links = links
        self._locations = locations
        self._ledger = ledger

    async def reserve(
        self, variant_id: str, quantity: int, context: ReservationContext
    ) -> None:
        """Reserve every linked item at a single location.

        Item reservations are created concurrently.  If any of them fails
        the ones that succeeded are deleted again before the first failure
        is re-raised, so a failed call leaves no reservations behind.
        """
        Quantity(quantity)
        links = self._links.list_by_variant(variant_id)
        if not links:
            return

        location_id = await self._locations.single_location(
            context.location_id, context.sales_channel_id
        )

        results = await asyncio.gather(
            *(
                self._ledger.create_reservation(
                    ReservationInput(
                        inventory_item_id=link.inventory_item_id,
                        location_id=location_id,
                        quantity=link.item_quantity(quantity),
                        line_item_id=context.line_item_id,
                    )
                )
                for link in links
            ),
            return_exceptions=True,
        )

        created = [r for r in results if isinstance(r, Reservation)]
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.warning(
                "Reserving variant %s for line item %s failed on %d of %d items; "
                "rolling back %d reservations",
                variant_id, context.line_item_id, len(failures), len(links), len(created),
            )
            await self._compensate(created)
            raise failures[0]

        logger.info(
            "Reserved %s of variant %s at %s for line item %s (%d items)",
            quantity, variant_id, location_id, context.line_item_id, len(created),
        )

    async def adjust_by_line_item(
        self, line_item_id: str, variant_id: str, location_id: str, delta: int
    ) -> None:
        """Grow or shrink the reservations held for a line item.

        Each linked inventory item is adjusted on its own, by ``delta``
        times the link quantity.  Among a line item's reservations for that
        item the most recent one is the default target; a reservation at
        *location_id* large enough to absorb the change is preferred so the
        claim is not spread over more locations than needed.

        Every target is checked before any reservation is touched, so a
        change that would drive one of them negative changes nothing.
        """
        if delta == 0:
            return

        reservations, count = await self._ledger.list_reservations(
            line_item_id, newest_first=True
        )
        if not count:
            return

        plan = []
        for link in self._links.list_by_variant(variant_id):
            item_reservations = [
                r for r in reservations if r.inventory_item_id == link.inventory_item_id
            ]
            if not item_reservations:
                continue

            change = link.item_quantity(delta)
            reservation = next(
                (
                    r for r in item_reservations
                    if r.location_id == location_id and r.quantity >= abs(change)
                ),
                item_reservations[0],
            )
            new_quantity = reservation.quantity + change
            if new_quantity < 0:
                raise InvalidQuantityError(
                    f"Cannot adjust reservation {reservation.id} by {change}: "
                    f"only {reservation.quantity} units reserved"
                )
            plan.append((reservation, new_quantity))

        await asyncio.gather(
            *(
                self._apply_adjustment(line_item_id, reservation, new_quantity)
                for reservation, new_quantity in plan
            )
        )

    async def _apply_adjustment(
        self, line_item_id: str, reservation: Reservation, new_quantity: int
    ) -> None:
        if new_quantity == 0:
            await self._ledger.delete_reservation(reservation.id)
            logger.info(
                "Deleted reservation %s of line item %s", reservation.id, line_item_id
            )
        else:
            await self._ledger.update_reservation(reservation.id, new_quantity)
            logger.info(
                "Reservation %s of line item %s now holds %s",
                reservation.id, line_item_id, new_quantity,
            )

    async def release(self, line_item_id: str, variant_id: str, quantity: int) -> None:
        """Drop every reservation of the line item; *quantity* is not used here."""
        _, count = await self._ledger.list_reservations(line_item_id)
        if not count:
            logger.debug("Line item %s holds no reservations", line_item_id)
            return
        await self._ledger.delete_reservations_by_line_item(line_item_id)
        logger.info("Released %d reservations of line item %s", count, line_item_id)

    async def adjust_inventory(
        self, variant_id: str, location_id: str, quantity: int
    ) -> None:
        links = self._links.list_by_variant(variant_id)
        if not links:
            return
        await asyncio.gather(
            *(
                self._ledger.adjust_inventory(
                    link.inventory_item_id, location_id, link.item_quantity(quantity)
                )
                for link in links
            )
        )
        logger.info(
            "Adjusted stock of variant %s at %s by %s", variant_id, location_id, quantity
        )

    async def _compensate(self, reservations: list[Reservation]) -> None:
        outcomes = await asyncio.gather(
            *(self._ledger.delete_reservation(r.id) for r in reservations),
            return_exceptions=True,
        )
        for reservation, outcome in zip(reservations, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Could not roll back reservation %s: %s", reservation.id, outcome
                )
