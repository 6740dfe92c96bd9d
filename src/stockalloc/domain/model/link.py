"""VariantInventoryLink: the bill-of-materials edge between a variant and a stock item.

One unit of variant ``variant_id`` consumes ``quantity`` units of inventory
item ``inventory_item_id``.  Links are stored flat and keyed by the
``(variant_id, inventory_item_id)`` pair; variants and items never hold
references to each other.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockalloc.domain.model.value_objects import Quantity

LinkKey = tuple[str, str]


@dataclass(frozen=True)
class VariantInventoryLink:
    """Immutable link record.

    Re-attaching an existing pair never changes its multiplier, so there is
    nothing to mutate; a different multiplier means detach then attach.
    """

    variant_id: str
    inventory_item_id: str
    quantity: Quantity = Quantity(1)

    @property
    def key(self) -> LinkKey:
        return (self.variant_id, self.inventory_item_id)

    def item_quantity(self, variant_quantity: int) -> int:
        """Units of the linked item consumed by *variant_quantity* variant units."""
        return variant_quantity * self.quantity.value
