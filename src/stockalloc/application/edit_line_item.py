"""Application service: Edit Line Item use case.

An order edit changes a line's quantity; the reservation behind it is
grown or shrunk by the difference.
"""

from __future__ import annotations

from stockalloc.application.dto import LineItemSpec
from stockalloc.domain.model.value_objects import Quantity
from stockalloc.domain.service.inventory_engine import InventoryEngine


class EditLineItemHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    async def handle(
        self, line: LineItemSpec, new_quantity: int, location_id: str
    ) -> int:
        """Apply the edit and return the delta that was reserved (negative if released).

        *new_quantity* must be at least 1.  Removing a line from an order
        is a cancellation and goes through ``CancelOrderHandler``, which
        releases the line's reservations outright.
        """
        Quantity(new_quantity)
        delta = new_quantity - line.quantity
        if delta == 0 or line.variant_id is None:
            return 0
        await self._engine.adjust_by_line_item(
            line.line_item_id, line.variant_id, location_id, delta
        )
        return delta
