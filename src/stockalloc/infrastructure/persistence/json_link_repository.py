"""JSON-file-backed implementation of VariantInventoryLinkRepository."""

from __future__ import annotations

import json
from pathlib import Path

from stockalloc.domain.exceptions import ValidationError
from stockalloc.domain.model.link import VariantInventoryLink
from stockalloc.domain.model.value_objects import Quantity
from stockalloc.domain.repository.link_repository import VariantInventoryLinkRepository


class JsonLinkRepository(VariantInventoryLinkRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- VariantInventoryLinkRepository interface ----------------------------

    def get(self, variant_id: str, inventory_item_id: str) -> VariantInventoryLink | None:
        for raw in self._load_raw():
            if raw["variant_id"] == variant_id and raw["inventory_item_id"] == inventory_item_id:
                return self._to_domain(raw)
        return None

    def list_by_variants(self, variant_ids: list[str]) -> list[VariantInventoryLink]:
        wanted = set(variant_ids)
        return [self._to_domain(raw) for raw in self._load_raw() if raw["variant_id"] in wanted]

    def list_by_items(self, inventory_item_ids: list[str]) -> list[VariantInventoryLink]:
        wanted = set(inventory_item_ids)
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["inventory_item_id"] in wanted
        ]

    def add(self, link: VariantInventoryLink) -> None:
        records = self._load_raw()
        for raw in records:
            if (raw["variant_id"], raw["inventory_item_id"]) == link.key:
                raise ValidationError(
                    f"Variant '{link.variant_id}' is already linked to "
                    f"item '{link.inventory_item_id}'"
                )
        records.append(self._to_raw(link))
        self._persist_raw(records)

    def remove(self, variant_id: str, inventory_item_id: str) -> None:
        records = [
            raw
            for raw in self._load_raw()
            if (raw["variant_id"], raw["inventory_item_id"]) != (variant_id, inventory_item_id)
        ]
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(link: VariantInventoryLink) -> dict:
        return {
            "variant_id": link.variant_id,
            "inventory_item_id": link.inventory_item_id,
            "quantity": link.quantity.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> VariantInventoryLink:
        return VariantInventoryLink(
            variant_id=raw["variant_id"],
            inventory_item_id=raw["inventory_item_id"],
            quantity=Quantity(raw.get("quantity", 1)),
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
