"""Application service: Place Order use case.

Confirms availability for every line before reserving anything, so a
shortage on one line rejects the order without touching stock.  Lines
are then reserved one by one; a failure part-way is left for the
caller's enclosing transaction to roll back.
"""

from __future__ import annotations

from stockalloc.application.dto import LineItemSpec
from stockalloc.domain.exceptions import InsufficientStockError
from stockalloc.domain.service.inventory_engine import InventoryEngine


class PlaceOrderHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    async def handle(
        self,
        lines: list[LineItemSpec],
        sales_channel_id: str | None = None,
        location_id: str | None = None,
    ) -> None:
        # Phase 1: validate every line
        for line in lines:
            ok = await self._engine.confirm_inventory(
                line.variant_id, line.quantity, sales_channel_id=sales_channel_id
            )
            if not ok:
                raise InsufficientStockError(
                    line.line_item_id, f"{line.title or line.variant_id} is out of stock"
                )

        # Phase 2: reserve
        for line in lines:
            if line.variant_id is None:
                continue
            await self._engine.reserve(
                line.variant_id,
                line.quantity,
                line_item_id=line.line_item_id,
                location_id=location_id,
                sales_channel_id=sales_channel_id,
            )
