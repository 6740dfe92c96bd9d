"""JSON-file-backed implementation of InventoryLedger.

File layout::

    {
      "items": [{"id": "iitem_1", "sku": "SHIRT-BLK"}],
      "levels": [{"inventory_item_id": "iitem_1", "location_id": "loc_1",
                  "stocked_quantity": 10, "reserved_quantity": 0}],
      "reservations": [...]
    }

Every write re-reads and rewrites the whole file, which makes each
call atomic for a single process.  Reserved quantity per level is kept
in step with the reservation records, and a reservation is refused when
it would push a level's available quantity below zero.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path

from stockalloc.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from stockalloc.domain.model.ledger import (
    InventoryItem,
    Reservation,
    ReservationInput,
    StockLevel,
)
from stockalloc.domain.repository.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class JsonInventoryLedger(InventoryLedger):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- Items ----------------------------------------------------------------

    async def retrieve_inventory_item(self, inventory_item_id: str) -> InventoryItem:
        for raw in self._load_raw()["items"]:
            if raw["id"] == inventory_item_id:
                return InventoryItem(id=raw["id"], sku=raw.get("sku", ""))
        raise EntityNotFoundError(f"Inventory item with id '{inventory_item_id}' was not found")

    async def list_inventory_items(self, inventory_item_ids: list[str]) -> list[InventoryItem]:
        wanted = set(inventory_item_ids)
        return [
            InventoryItem(id=raw["id"], sku=raw.get("sku", ""))
            for raw in self._load_raw()["items"]
            if raw["id"] in wanted
        ]

    # --- Availability ---------------------------------------------------------

    async def confirm_inventory(
        self, inventory_item_id: str, location_ids: list[str], quantity: int
    ) -> bool:
        locations = set(location_ids)
        available = sum(
            level.available_quantity
            for level in self._levels(self._load_raw())
            if level.inventory_item_id == inventory_item_id and level.location_id in locations
        )
        return available >= quantity

    async def list_stock_levels(
        self, inventory_item_ids: list[str], location_id: str
    ) -> list[StockLevel]:
        wanted = set(inventory_item_ids)
        return [
            level
            for level in self._levels(self._load_raw())
            if level.inventory_item_id in wanted and level.location_id == location_id
        ]

    async def adjust_inventory(
        self, inventory_item_id: str, location_id: str, quantity: int
    ) -> None:
        data = self._load_raw()
        raw = self._find_level(data, inventory_item_id, location_id)
        if raw is None:
            raw = {
                "inventory_item_id": inventory_item_id,
                "location_id": location_id,
                "stocked_quantity": 0,
                "reserved_quantity": 0,
            }
            data["levels"].append(raw)
        stocked = raw["stocked_quantity"] + quantity
        if stocked < 0:
            raise ValidationError(
                f"Cannot adjust item '{inventory_item_id}' at '{location_id}' by {quantity}: "
                f"only {raw['stocked_quantity']} stocked"
            )
        raw["stocked_quantity"] = stocked
        self._persist_raw(data)

    # --- Reservations ---------------------------------------------------------

    async def create_reservation(self, data: ReservationInput) -> Reservation:
        if data.quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")

        raw_data = self._load_raw()
        level = self._find_level(raw_data, data.inventory_item_id, data.location_id)
        self._claim(level, data.line_item_id, data.inventory_item_id, data.location_id, data.quantity)

        reservation = Reservation(
            id=f"resitem_{uuid.uuid4().hex[:12]}",
            inventory_item_id=data.inventory_item_id,
            location_id=data.location_id,
            quantity=data.quantity,
            line_item_id=data.line_item_id,
            type=data.type,
        )
        raw_data["reservations"].append(self._reservation_to_raw(reservation))
        self._persist_raw(raw_data)
        logger.debug("Created reservation %s", reservation.id)
        return reservation

    async def list_reservations(
        self, line_item_id: str, newest_first: bool = True
    ) -> tuple[list[Reservation], int]:
        reservations = [
            self._reservation_to_domain(raw)
            for raw in self._load_raw()["reservations"]
            if raw["line_item_id"] == line_item_id
        ]
        reservations.sort(key=lambda r: r.created_at, reverse=newest_first)
        return reservations, len(reservations)

    async def update_reservation(self, reservation_id: str, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")

        data = self._load_raw()
        raw = self._find_reservation(data, reservation_id)
        level = self._find_level(data, raw["inventory_item_id"], raw["location_id"])
        difference = quantity - raw["quantity"]
        if difference > 0:
            self._claim(
                level, raw["line_item_id"], raw["inventory_item_id"], raw["location_id"], difference
            )
        elif level is not None:
            level["reserved_quantity"] += difference
        raw["quantity"] = quantity
        self._persist_raw(data)

    async def delete_reservation(self, reservation_id: str) -> None:
        data = self._load_raw()
        raw = self._find_reservation(data, reservation_id)
        self._unclaim(data, raw)
        data["reservations"].remove(raw)
        self._persist_raw(data)

    async def delete_reservations_by_line_item(self, line_item_id: str) -> None:
        data = self._load_raw()
        kept = []
        for raw in data["reservations"]:
            if raw["line_item_id"] == line_item_id:
                self._unclaim(data, raw)
            else:
                kept.append(raw)
        data["reservations"] = kept
        self._persist_raw(data)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _claim(
        level: dict | None,
        line_item_id: str,
        inventory_item_id: str,
        location_id: str,
        quantity: int,
    ) -> None:
        available = 0 if level is None else level["stocked_quantity"] - level["reserved_quantity"]
        if level is None or quantity > available:
            raise InsufficientStockError(
                line_item_id,
                f"item '{inventory_item_id}' at '{location_id}' "
                f"(need {quantity}, have {available} available)",
            )
        level["reserved_quantity"] += quantity

    def _unclaim(self, data: dict, raw: dict) -> None:
        level = self._find_level(data, raw["inventory_item_id"], raw["location_id"])
        if level is not None:
            level["reserved_quantity"] = max(0, level["reserved_quantity"] - raw["quantity"])

    @staticmethod
    def _find_level(data: dict, inventory_item_id: str, location_id: str) -> dict | None:
        for raw in data["levels"]:
            if raw["inventory_item_id"] == inventory_item_id and raw["location_id"] == location_id:
                return raw
        return None

    @staticmethod
    def _find_reservation(data: dict, reservation_id: str) -> dict:
        for raw in data["reservations"]:
            if raw["id"] == reservation_id:
                return raw
        raise EntityNotFoundError(f"Reservation with id '{reservation_id}' was not found")

    @staticmethod
    def _levels(data: dict) -> list[StockLevel]:
        return [
            StockLevel(
                inventory_item_id=raw["inventory_item_id"],
                location_id=raw["location_id"],
                stocked_quantity=raw["stocked_quantity"],
                reserved_quantity=raw.get("reserved_quantity", 0),
            )
            for raw in data["levels"]
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _reservation_to_raw(reservation: Reservation) -> dict:
        return {
            "id": reservation.id,
            "inventory_item_id": reservation.inventory_item_id,
            "location_id": reservation.location_id,
            "quantity": reservation.quantity,
            "line_item_id": reservation.line_item_id,
            "type": reservation.type,
            "created_at": reservation.created_at.isoformat(),
        }

    @staticmethod
    def _reservation_to_domain(raw: dict) -> Reservation:
        return Reservation(
            id=raw["id"],
            inventory_item_id=raw["inventory_item_id"],
            location_id=raw["location_id"],
            quantity=raw["quantity"],
            line_item_id=raw["line_item_id"],
            type=raw.get("type", "order"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        data = json.loads(self._file_path.read_text(encoding="utf-8"))
        for key in ("items", "levels", "reservations"):
            data.setdefault(key, [])
        for level in data["levels"]:
            level.setdefault("reserved_quantity", 0)
        return data

    def _persist_raw(self, data: dict) -> None:
        self._file_path.write_text(
            json.dumps(data, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist_raw({"items": [], "levels": [], "reservations": []})
