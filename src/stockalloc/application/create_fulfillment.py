"""Application service: Create Fulfillment use case.

Checks that the chosen location can serve every line, then converts the
lines' reservations into a physical stock deduction at that location.
"""

from __future__ import annotations

from stockalloc.application.dto import LineItemSpec
from stockalloc.domain.model.variant import LineItem
from stockalloc.domain.service.inventory_engine import InventoryEngine


class CreateFulfillmentHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    async def handle(self, lines: list[LineItemSpec], location_id: str) -> None:
        """Fulfill *lines* from *location_id*.

        Validation runs first and mutates nothing, so a shortage leaves
        both reservations and stock untouched.
        """
        line_items = [
            LineItem(
                id=line.line_item_id,
                variant_id=line.variant_id,
                quantity=line.quantity,
                title=line.title,
            )
            for line in lines
        ]
        await self._engine.validate_at_location(line_items, location_id)

        for line in lines:
            if line.variant_id is None:
                continue
            await self._engine.adjust_by_line_item(
                line.line_item_id, line.variant_id, location_id, -line.quantity
            )
            await self._engine.adjust_inventory(
                line.variant_id, location_id, -line.quantity
            )
