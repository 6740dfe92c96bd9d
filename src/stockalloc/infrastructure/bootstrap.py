"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Whether the engine
runs in Simple or Ledger Mode is decided here, once, by wiring the
ledger in or leaving it out.
"""

from __future__ import annotations

from stockalloc.domain.service.inventory_engine import InventoryEngine
from stockalloc.infrastructure.config import Settings, get_settings
from stockalloc.infrastructure.persistence.json_inventory_ledger import (
    JsonInventoryLedger,
)
from stockalloc.infrastructure.persistence.json_link_repository import (
    JsonLinkRepository,
)
from stockalloc.infrastructure.persistence.json_locations import (
    JsonLocationRepository,
)
from stockalloc.infrastructure.persistence.json_variant_store import (
    JsonVariantStore,
)


def inventory_engine(settings: Settings | None = None) -> InventoryEngine:
    settings = settings or get_settings()
    data_dir = settings.data_dir

    locations = JsonLocationRepository(data_dir / "locations.json")
    ledger = (
        JsonInventoryLedger(data_dir / "ledger.json")
        if settings.ledger_enabled
        else None
    )

    return InventoryEngine(
        variant_store=JsonVariantStore(data_dir / "variants.json"),
        link_repo=JsonLinkRepository(data_dir / "links.json"),
        channel_locations=locations,
        location_directory=locations,
        ledger=ledger,
    )
