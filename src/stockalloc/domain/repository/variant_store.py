"""Abstract access to the catalog's variant records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockalloc.domain.model.variant import Variant


class VariantStore(ABC):

    @abstractmethod
    async def retrieve(self, variant_id: str) -> Variant:
        """Return the variant.  Raises EntityNotFoundError if unknown."""

    @abstractmethod
    async def list(self, variant_ids: list[str]) -> list[Variant]:
        """Return the known variants among *variant_ids*."""

    @abstractmethod
    async def update_inventory_quantity(self, variant_id: str, quantity: int) -> None:
        """Overwrite the Simple Mode counter of a variant."""
