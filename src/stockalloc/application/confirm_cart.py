"""Application service: Confirm Cart use case (query)."""

from __future__ import annotations

from stockalloc.application.dto import CartAvailabilityDTO, LineItemSpec
from stockalloc.domain.service.inventory_engine import InventoryEngine


class ConfirmCartHandler:

    def __init__(self, engine: InventoryEngine) -> None:
        self._engine = engine

    async def handle(
        self,
        lines: list[LineItemSpec],
        sales_channel_id: str | None = None,
    ) -> CartAvailabilityDTO:
        """Check every cart line and report the ones that cannot be fulfilled."""
        unavailable: list[str] = []
        for line in lines:
            ok = await self._engine.confirm_inventory(
                line.variant_id, line.quantity, sales_channel_id=sales_channel_id
            )
            if not ok:
                unavailable.append(line.line_item_id)
        return CartAvailabilityDTO(unavailable_line_item_ids=unavailable)
