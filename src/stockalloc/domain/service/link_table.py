"""Domain service: Variant-Item Link Table.

Maintains the bill-of-materials mapping from sellable variants to the
inventory items they consume.  Every other engine component reads its
multipliers from here.
"""

from __future__ import annotations

import logging

from stockalloc.domain.exceptions import EntityNotFoundError, ValidationError
from stockalloc.domain.model.ledger import InventoryItem
from stockalloc.domain.model.link import VariantInventoryLink
from stockalloc.domain.model.value_objects import Quantity
from stockalloc.domain.model.variant import Variant
from stockalloc.domain.repository.inventory_ledger import InventoryLedger
from stockalloc.domain.repository.link_repository import VariantInventoryLinkRepository
from stockalloc.domain.repository.variant_store import VariantStore

logger = logging.getLogger(__name__)


def _as_ids(ids: str | list[str]) -> list[str]:
    return [ids] if isinstance(ids, str) else list(ids)


class VariantInventoryLinkTable:

    def __init__(
        self,
        link_repo: VariantInventoryLinkRepository,
        variant_store: VariantStore,
        ledger: InventoryLedger | None = None,
    ) -> None:
        self._link_repo = link_repo
        self._variant_store = variant_store
        self._ledger = ledger

    async def attach(
        self,
        variant_id: str,
        inventory_item_id: str,
        quantity: int | None = None,
    ) -> VariantInventoryLink:
        """Link a variant to an inventory item.

        Both ends must exist.  Attaching a pair that is already linked
        returns the existing link untouched, even when *quantity* differs.
        """
        if self._ledger is None:
            raise ValidationError(
                "Inventory items can only be linked when an inventory ledger is configured"
            )

        await self._variant_store.retrieve(variant_id)
        await self._ledger.retrieve_inventory_item(inventory_item_id)

        existing = self._link_repo.get(variant_id, inventory_item_id)
        if existing is not None:
            logger.debug(
                "Variant %s already linked to item %s", variant_id, inventory_item_id
            )
            return existing

        multiplier = Quantity(1) if quantity is None else Quantity(quantity)
        link = VariantInventoryLink(
            variant_id=variant_id,
            inventory_item_id=inventory_item_id,
            quantity=multiplier,
        )
        self._link_repo.add(link)
        logger.info(
            "Linked variant %s to item %s (x%s)", variant_id, inventory_item_id, multiplier
        )
        return link

    def detach(self, variant_id: str, inventory_item_id: str) -> None:
        """Remove the link if present.  Absent links are not an error."""
        if self._link_repo.get(variant_id, inventory_item_id) is None:
            return
        self._link_repo.remove(variant_id, inventory_item_id)
        logger.info("Unlinked variant %s from item %s", variant_id, inventory_item_id)

    def retrieve(self, variant_id: str, inventory_item_id: str) -> VariantInventoryLink:
        link = self._link_repo.get(variant_id, inventory_item_id)
        if link is None:
            raise EntityNotFoundError(
                f"Inventory item '{inventory_item_id}' is not linked to variant '{variant_id}'"
            )
        return link

    def list_by_variant(self, variant_ids: str | list[str]) -> list[VariantInventoryLink]:
        return self._link_repo.list_by_variants(_as_ids(variant_ids))

    def list_by_item(self, inventory_item_ids: str | list[str]) -> list[VariantInventoryLink]:
        return self._link_repo.list_by_items(_as_ids(inventory_item_ids))

    async def list_variants_by_item(self, inventory_item_id: str) -> list[Variant]:
        """Variants that consume the given item.  Always empty without a ledger."""
        if self._ledger is None:
            return []
        links = self.list_by_item(inventory_item_id)
        if not links:
            return []
        return await self._variant_store.list([link.variant_id for link in links])

    async def list_inventory_items_by_variant(self, variant_id: str) -> list[InventoryItem]:
        """Inventory items the given variant consumes.  Always empty without a ledger."""
        if self._ledger is None:
            return []
        links = self.list_by_variant(variant_id)
        if not links:
            return []
        return await self._ledger.list_inventory_items(
            [link.inventory_item_id for link in links]
        )
