"""Abstract repository for VariantInventoryLink records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockalloc.domain.model.link import VariantInventoryLink


class VariantInventoryLinkRepository(ABC):

    @abstractmethod
    def get(self, variant_id: str, inventory_item_id: str) -> VariantInventoryLink | None:
        """Return the link for the pair, or None."""

    @abstractmethod
    def list_by_variants(self, variant_ids: list[str]) -> list[VariantInventoryLink]:
        """Return every link whose variant is in *variant_ids*."""

    @abstractmethod
    def list_by_items(self, inventory_item_ids: list[str]) -> list[VariantInventoryLink]:
        """Return every link whose inventory item is in *inventory_item_ids*."""

    @abstractmethod
    def add(self, link: VariantInventoryLink) -> None:
        """Persist a new link.  The pair must not already be linked."""

    @abstractmethod
    def remove(self, variant_id: str, inventory_item_id: str) -> None:
        """Delete the link for the pair if it exists."""
