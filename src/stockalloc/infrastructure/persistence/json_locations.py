"""JSON-file-backed stock locations and sales-channel mapping.

File layout::

    {
      "locations": [{"id": "loc_1", "name": "Main warehouse"}],
      "sales_channels": {"sc_web": ["loc_1"]}
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from stockalloc.domain.model.ledger import StockLocation
from stockalloc.domain.repository.locations import (
    SalesChannelLocations,
    StockLocationDirectory,
)


class JsonLocationRepository(SalesChannelLocations, StockLocationDirectory):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    async def list(self) -> list[StockLocation]:
        return [
            StockLocation(id=raw["id"], name=raw.get("name", ""))
            for raw in self._load_raw()["locations"]
        ]

    async def list_locations(self, sales_channel_id: str) -> list[str]:
        return list(self._load_raw()["sales_channels"].get(sales_channel_id, []))

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        raw.setdefault("locations", [])
        raw.setdefault("sales_channels", {})
        return raw

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({"locations": [], "sales_channels": {}}, indent=2) + "\n",
                encoding="utf-8",
            )
