"""Application service: Cancel Order use case.

Gives back the stock claimed by every line of a cancelled order.
Lines that never reserved anything are skipped silently.
"""

from __future__ import annotations

from stockalloc.application.dto import LineItemSpec
from stockalloc.domain.service.inventory_engine import InventoryEngine


class CancelOrderHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    async def handle(self, lines: list[LineItemSpec]) -> None:
        for line in lines:
            if line.variant_id is None:
                continue
            await self._engine.release(line.line_item_id, line.variant_id, line.quantity)
