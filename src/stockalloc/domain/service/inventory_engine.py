"""Inventory Reservation & Allocation Engine.

Single entry point for the order/cart workflow.  The consistency mode is
decided once, here, from whether an inventory ledger was wired in; the
matching availability checker, reservation manager and stock validator
are chosen at the same time so no call site has to branch on the mode.
"""

from __future__ import annotations

import logging

from stockalloc.domain.model.ledger import InventoryItem
from stockalloc.domain.model.link import VariantInventoryLink
from stockalloc.domain.model.value_objects import ConsistencyMode, ReservationContext
from stockalloc.domain.model.variant import LineItem, Variant
from stockalloc.domain.repository.inventory_ledger import InventoryLedger
from stockalloc.domain.repository.link_repository import VariantInventoryLinkRepository
from stockalloc.domain.repository.locations import (
    SalesChannelLocations,
    StockLocationDirectory,
)
from stockalloc.domain.repository.variant_store import VariantStore
from stockalloc.domain.service.availability import (
    AvailabilityChecker,
    LedgerAvailabilityChecker,
    SimpleAvailabilityChecker,
)
from stockalloc.domain.service.link_table import VariantInventoryLinkTable
from stockalloc.domain.service.location_resolver import LocationResolver
from stockalloc.domain.service.reservation_manager import (
    LedgerReservationManager,
    ReservationManager,
    SimpleReservationManager,
)
from stockalloc.domain.service.stock_validator import (
    LedgerStockValidator,
    SimpleStockValidator,
    StockValidator,
)

logger = logging.getLogger(__name__)


class InventoryEngine:

    def __init__(
        self,
        variant_store: VariantStore,
        link_repo: VariantInventoryLinkRepository,
        channel_locations: SalesChannelLocations,
        location_directory: StockLocationDirectory,
        ledger: InventoryLedger | None = None,
    ) -> None:
        self._mode = ConsistencyMode.for_ledger(ledger)
        self._links = VariantInventoryLinkTable(link_repo, variant_store, ledger)

        self._availability: AvailabilityChecker
        self._reservations: ReservationManager
        self._validator: StockValidator

        if ledger is not None:
            locations = LocationResolver(channel_locations, location_directory)
            self._availability = LedgerAvailabilityChecker(
                variant_store, self._links, locations, ledger
            )
            self._reservations = LedgerReservationManager(self._links, locations, ledger)
            self._validator = LedgerStockValidator(self._links, ledger)
        else:
            self._availability = SimpleAvailabilityChecker(variant_store)
            self._reservations = SimpleReservationManager(variant_store)
            self._validator = SimpleStockValidator()

        logger.info("Inventory engine running in %s mode", self._mode.value)

    @property
    def mode(self) -> ConsistencyMode:
        return self._mode

    # --- Availability ---------------------------------------------------------

    async def confirm_inventory(
        self,
        variant_id: str | None,
        quantity: int,
        sales_channel_id: str | None = None,
    ) -> bool:
        return await self._availability.confirm_inventory(
            variant_id, quantity, sales_channel_id
        )

    # --- Reservations ---------------------------------------------------------

    async def reserve(
        self,
        variant_id: str,
        quantity: int,
        line_item_id: str,
        location_id: str | None = None,
        sales_channel_id: str | None = None,
    ) -> None:
        context = ReservationContext(
            line_item_id=line_item_id,
            location_id=location_id,
            sales_channel_id=sales_channel_id,
        )
        await self._reservations.reserve(variant_id, quantity, context)

    async def adjust_by_line_item(
        self, line_item_id: str, variant_id: str, location_id: str, delta: int
    ) -> None:
        await self._reservations.adjust_by_line_item(
            line_item_id, variant_id, location_id, delta
        )

    async def release(self, line_item_id: str, variant_id: str, quantity: int) -> None:
        await self._reservations.release(line_item_id, variant_id, quantity)

    async def adjust_inventory(
        self, variant_id: str, location_id: str, quantity: int
    ) -> None:
        await self._reservations.adjust_inventory(variant_id, location_id, quantity)

    # --- Fulfillment ----------------------------------------------------------

    async def validate_at_location(
        self, line_items: list[LineItem], location_id: str
    ) -> None:
        await self._validator.validate_at_location(line_items, location_id)

    # --- Links ----------------------------------------------------------------

    async def attach(
        self, variant_id: str, inventory_item_id: str, quantity: int | None = None
    ) -> VariantInventoryLink:
        return await self._links.attach(variant_id, inventory_item_id, quantity)

    def detach(self, variant_id: str, inventory_item_id: str) -> None:
        self._links.detach(variant_id, inventory_item_id)

    def retrieve_link(self, variant_id: str, inventory_item_id: str) -> VariantInventoryLink:
        return self._links.retrieve(variant_id, inventory_item_id)

    def list_by_variant(self, variant_ids: str | list[str]) -> list[VariantInventoryLink]:
        return self._links.list_by_variant(variant_ids)

    def list_by_item(self, inventory_item_ids: str | list[str]) -> list[VariantInventoryLink]:
        return self._links.list_by_item(inventory_item_ids)

    async def list_variants_by_item(self, inventory_item_id: str) -> list[Variant]:
        return await self._links.list_variants_by_item(inventory_item_id)

    async def list_inventory_items_by_variant(self, variant_id: str) -> list[InventoryItem]:
        return await self._links.list_inventory_items_by_variant(variant_id)
