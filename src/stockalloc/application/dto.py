"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stockalloc.domain.model.link import VariantInventoryLink


@dataclass(frozen=True)
class LineItemSpec:
    """Input: one order line as supplied by the caller."""

    line_item_id: str
    variant_id: str | None
    quantity: int
    title: str = ""


@dataclass(frozen=True)
class LinkDTO:
    """Output: a variant/item link as displayed to the user."""

    variant_id: str
    inventory_item_id: str
    quantity: int

    @staticmethod
    def from_link(link: VariantInventoryLink) -> LinkDTO:
        return LinkDTO(
            variant_id=link.variant_id,
            inventory_item_id=link.inventory_item_id,
            quantity=link.quantity.value,
        )


@dataclass(frozen=True)
class CartAvailabilityDTO:
    """Output: whether every line of a cart can be fulfilled."""

    unavailable_line_item_ids: list[str] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return not self.unavailable_line_item_ids
