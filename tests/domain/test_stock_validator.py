"""Unit tests for validate_at_location."""

import pytest

from stockalloc.domain.exceptions import InsufficientStockError
from stockalloc.domain.model.variant import LineItem, Variant
from tests.fakes import FakeInventoryLedger, build_engine


def _line(line_id="li_1", variant_id="var_1", quantity=2):
    return LineItem(id=line_id, variant_id=variant_id, quantity=quantity, title="Shirt")


class TestValidateAtLocation:

    @pytest.mark.asyncio
    async def test_enough_stock_passes(self):
        ledger = FakeInventoryLedger(stock={("item_1", "loc_1"): 6})
        engine, _, _ = build_engine([Variant(id="var_1")], [("var_1", "item_1", 3)], ledger=ledger)

        await engine.validate_at_location([_line(quantity=2)], "loc_1")

    @pytest.mark.asyncio
    async def test_short_by_one_fails_naming_line_item(self):
        ledger = FakeInventoryLedger(stock={("item_1", "loc_1"): 5})
        engine, _, _ = build_engine([Variant(id="var_1")], [("var_1", "item_1", 3)], ledger=ledger)

        with pytest.raises(InsufficientStockError, match="needs 6") as exc_info:
            await engine.validate_at_location([_line(quantity=2)], "loc_1")

        assert exc_info.value.line_item_id == "li_1"

    @pytest.mark.asyncio
    async def test_item_not_stocked_at_location_fails(self):
        ledger = FakeInventoryLedger(stock={("item_1", "loc_1"): 50, ("item_2", "loc_2"): 50})
        engine, _, _ = build_engine(
            [Variant(id="var_1")],
            [("var_1", "item_1", 1), ("var_1", "item_2", 1)],
            ledger=ledger,
        )

        with pytest.raises(InsufficientStockError, match="not stocked"):
            await engine.validate_at_location([_line(quantity=1)], "loc_1")

    @pytest.mark.asyncio
    async def test_lines_without_variant_or_links_skipped(self):
        ledger = FakeInventoryLedger()
        engine, _, _ = build_engine([Variant(id="var_1")], ledger=ledger)

        await engine.validate_at_location(
            [_line(variant_id=None), _line(line_id="li_2", variant_id="var_1")], "loc_1"
        )

        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_second_line_failure_reported(self):
        ledger = FakeInventoryLedger(stock={("item_1", "loc_1"): 4, ("item_2", "loc_1"): 1})
        engine, _, _ = build_engine(
            [Variant(id="var_1"), Variant(id="var_2")],
            [("var_1", "item_1", 1), ("var_2", "item_2", 1)],
            ledger=ledger,
        )

        with pytest.raises(InsufficientStockError) as exc_info:
            await engine.validate_at_location(
                [_line("li_1", "var_1", 4), _line("li_2", "var_2", 2)], "loc_1"
            )

        assert exc_info.value.line_item_id == "li_2"

    @pytest.mark.asyncio
    async def test_simple_mode_always_passes(self):
        engine, _, _ = build_engine([Variant(id="var_1", inventory_quantity=0)])

        await engine.validate_at_location([_line(quantity=100)], "loc_1")
