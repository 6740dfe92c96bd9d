"""Domain service: Availability Checker.

Answers "can this quantity of a variant be fulfilled right now" with a
single boolean, cheap enough to call on every cart mutation.  The shared
steps (untracked variants, backorders) live in the base class; each
consistency mode supplies the actual stock check.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from stockalloc.domain.model.variant import Variant
from stockalloc.domain.repository.inventory_ledger import InventoryLedger
from stockalloc.domain.repository.variant_store import VariantStore
from stockalloc.domain.service.link_table import VariantInventoryLinkTable
from stockalloc.domain.service.location_resolver import LocationResolver

logger = logging.getLogger(__name__)


class AvailabilityChecker(ABC):

    def __init__(self, variant_store: VariantStore) -> None:
        self._variant_store = variant_store

    async def confirm_inventory(
        self,
        variant_id: str | None,
        quantity: int,
        sales_channel_id: str | None = None,
    ) -> bool:
        if not variant_id:
            return True

        variant = await self._variant_store.retrieve(variant_id)

        # Backorderable or unmanaged variants are never limited by stock
        if not variant.tracks_inventory:
            return True

        available = await self._has_stock(variant, quantity, sales_channel_id)
        logger.debug(
            "Variant %s x%s available=%s", variant_id, quantity, available
        )
        return available

    @abstractmethod
    async def _has_stock(
        self, variant: Variant, quantity: int, sales_channel_id: str | None
    ) -> bool:
        """Mode-specific check for a variant whose inventory is managed."""


class SimpleAvailabilityChecker(AvailabilityChecker):

    async def _has_stock(
        self, variant: Variant, quantity: int, sales_channel_id: str | None
    ) -> bool:
        return variant.inventory_quantity >= quantity


class LedgerAvailabilityChecker(AvailabilityChecker):

    def __init__(
        self,
        variant_store: VariantStore,
        links: VariantInventoryLinkTable,
        locations: LocationResolver,
        ledger: InventoryLedger,
    ) -> None:
        super().__init__(variant_store)
        self._links = links
        self._locations = locations
        self._ledger = ledger

    async def _has_stock(
        self, variant: Variant, quantity: int, sales_channel_id: str | None
    ) -> bool:
        links = self._links.list_by_variant(variant.id)

        # Not tracked at item level
        if not links:
            return True

        location_ids = await self._locations.eligible_locations(
            sales_channel_id=sales_channel_id
        )

        # Every component item must be available on its own
        confirmations = await asyncio.gather(
            *(
                self._ledger.confirm_inventory(
                    link.inventory_item_id,
                    location_ids,
                    link.item_quantity(quantity),
                )
                for link in links
            )
        )
        return all(confirmations)
