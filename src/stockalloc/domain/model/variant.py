"""Variant and line-item records as seen by the inventory engine.

Only the inventory fields of the catalog and order domains are modelled
here; everything else about products and orders lives elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Variant:
    """A concrete sellable unit.

    ``inventory_quantity`` is the Simple Mode counter.  It may go negative
    when the variant allows backorders; the availability check is what
    keeps it non-negative otherwise.
    """

    id: str
    title: str = ""
    allow_backorder: bool = False
    manage_inventory: bool = True
    inventory_quantity: int = 0

    @property
    def tracks_inventory(self) -> bool:
        """True when stock is authoritative for this variant."""
        return self.manage_inventory and not self.allow_backorder


@dataclass(frozen=True)
class LineItem:
    """The slice of an order line the engine works with.

    ``variant_id`` is None for custom lines that are not backed by a
    catalog variant.
    """

    id: str
    variant_id: str | None
    quantity: int
    title: str = ""

    @property
    def label(self) -> str:
        return self.title or self.id
