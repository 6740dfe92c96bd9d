"""Domain service: Location Stock Validator.

Pre-flight check run before a fulfillment is committed: the chosen
location must hold enough of every item the fulfillment will consume.
Nothing is mutated.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from stockalloc.domain.exceptions import InsufficientStockError
from stockalloc.domain.model.variant import LineItem
from stockalloc.domain.repository.inventory_ledger import InventoryLedger
from stockalloc.domain.service.link_table import VariantInventoryLinkTable

logger = logging.getLogger(__name__)


class StockValidator(ABC):

    @abstractmethod
    async def validate_at_location(
        self, line_items: list[LineItem], location_id: str
    ) -> None:
        """Raise InsufficientStockError if *location_id* cannot serve the lines."""


class SimpleStockValidator(StockValidator):
    """Simple Mode has no per-location stock, so every location passes."""

    async def validate_at_location(
        self, line_items: list[LineItem], location_id: str
    ) -> None:
        return None


class LedgerStockValidator(StockValidator):

    def __init__(
        self, links: VariantInventoryLinkTable, ledger: InventoryLedger
    ) -> None:
        self._links = links
        self._ledger = ledger

    async def validate_at_location(
        self, line_items: list[LineItem], location_id: str
    ) -> None:
        for line in line_items:
            if not line.variant_id:
                continue

            links = self._links.list_by_variant(line.variant_id)
            if not links:
                continue

            levels = await self._ledger.list_stock_levels(
                [link.inventory_item_id for link in links], location_id
            )
            stocked = {level.inventory_item_id: level.stocked_quantity for level in levels}

            for link in links:
                needed = link.item_quantity(line.quantity)
                on_hand = stocked.get(link.inventory_item_id)
                if on_hand is None:
                    raise InsufficientStockError(
                        line.id,
                        f"item '{link.inventory_item_id}' is not stocked at '{location_id}'",
                    )
                if needed > on_hand:
                    raise InsufficientStockError(
                        line.id,
                        f"{line.label} needs {needed} of item '{link.inventory_item_id}', "
                        f"'{location_id}' has {on_hand}",
                    )

        logger.debug("Location %s can serve %d line items", location_id, len(line_items))
