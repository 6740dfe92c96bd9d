"""JSON-file-backed implementation of VariantStore."""

from __future__ import annotations

import json
from pathlib import Path

from stockalloc.domain.exceptions import EntityNotFoundError
from stockalloc.domain.model.variant import Variant
from stockalloc.domain.repository.variant_store import VariantStore


class JsonVariantStore(VariantStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- VariantStore interface -----------------------------------------------

    async def retrieve(self, variant_id: str) -> Variant:
        for raw in self._load_raw():
            if raw["id"] == variant_id:
                return self._to_domain(raw)
        raise EntityNotFoundError(f"Variant with id '{variant_id}' was not found")

    async def list(self, variant_ids: list[str]) -> list[Variant]:
        wanted = set(variant_ids)
        return [self._to_domain(raw) for raw in self._load_raw() if raw["id"] in wanted]

    async def update_inventory_quantity(self, variant_id: str, quantity: int) -> None:
        records = self._load_raw()
        for raw in records:
            if raw["id"] == variant_id:
                raw["inventory_quantity"] = quantity
                self._persist_raw(records)
                return
        raise EntityNotFoundError(f"Variant with id '{variant_id}' was not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Variant:
        return Variant(
            id=raw["id"],
            title=raw.get("title", ""),
            allow_backorder=raw.get("allow_backorder", False),
            manage_inventory=raw.get("manage_inventory", True),
            inventory_quantity=raw.get("inventory_quantity", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
