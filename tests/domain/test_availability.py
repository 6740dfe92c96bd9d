"""Unit tests for confirm_inventory in both consistency modes."""

import pytest

from stockalloc.domain.exceptions import EntityNotFoundError
from stockalloc.domain.model.variant import Variant
from tests.fakes import FakeInventoryLedger, FakeLocations, build_engine


class TestConfirmInventoryShared:

    @pytest.mark.asyncio
    async def test_missing_variant_id_is_available(self):
        engine, _, _ = build_engine([], ledger=FakeInventoryLedger())

        assert await engine.confirm_inventory(None, 1000) is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ledger", [None, FakeInventoryLedger()])
    async def test_backorder_variant_always_available(self, ledger):
        variant = Variant(id="var_1", allow_backorder=True, inventory_quantity=0)
        engine, _, _ = build_engine([variant], [("var_1", "item_1", 1)], ledger=ledger)

        assert await engine.confirm_inventory("var_1", 10_000) is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ledger", [None, FakeInventoryLedger()])
    async def test_unmanaged_variant_always_available(self, ledger):
        variant = Variant(id="var_1", manage_inventory=False, inventory_quantity=0)
        engine, _, _ = build_engine([variant], [("var_1", "item_1", 1)], ledger=ledger)

        assert await engine.confirm_inventory("var_1", 10_000) is True

    @pytest.mark.asyncio
    async def test_unknown_variant_propagates_not_found(self):
        engine, _, _ = build_engine([])

        with pytest.raises(EntityNotFoundError):
            await engine.confirm_inventory("var_missing", 1)


class TestConfirmInventorySimpleMode:

    @pytest.mark.asyncio
    async def test_enough_on_counter(self):
        engine, _, _ = build_engine([Variant(id="var_1", inventory_quantity=5)])

        assert await engine.confirm_inventory("var_1", 5) is True

    @pytest.mark.asyncio
    async def test_short_on_counter(self):
        engine, _, _ = build_engine([Variant(id="var_1", inventory_quantity=5)])

        assert await engine.confirm_inventory("var_1", 6) is False


class TestConfirmInventoryLedgerMode:

    @pytest.mark.asyncio
    async def test_no_links_is_available(self):
        ledger = FakeInventoryLedger()
        engine, _, _ = build_engine([Variant(id="var_1")], ledger=ledger)

        assert await engine.confirm_inventory("var_1", 10_000) is True
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_multiplier_applied_per_item(self):
        ledger = FakeInventoryLedger(stock={("item_1", "loc_1"): 6, ("item_2", "loc_1"): 3})
        engine, _, _ = build_engine(
            [Variant(id="var_1")],
            [("var_1", "item_1", 2), ("var_1", "item_2", 1)],
            ledger=ledger,
        )

        assert await engine.confirm_inventory("var_1", 3) is True

        requested = {c[1]: c[3] for c in ledger.calls_to("confirm_inventory")}
        assert requested == {"item_1": 6, "item_2": 3}

    @pytest.mark.asyncio
    async def test_one_short_component_makes_variant_unavailable(self):
        ledger = FakeInventoryLedger(stock={("item_1", "loc_1"): 5, ("item_2", "loc_1"): 100})
        engine, _, _ = build_engine(
            [Variant(id="var_1")],
            [("var_1", "item_1", 2), ("var_1", "item_2", 1)],
            ledger=ledger,
        )

        assert await engine.confirm_inventory("var_1", 3) is False
        # every item was still asked
        assert len(ledger.calls_to("confirm_inventory")) == 2

    @pytest.mark.asyncio
    async def test_sales_channel_restricts_locations(self):
        ledger = FakeInventoryLedger(stock={("item_1", "loc_1"): 1, ("item_1", "loc_2"): 10})
        locations = FakeLocations(["loc_1", "loc_2"], {"sc_1": ["loc_1"]})
        engine, _, _ = build_engine(
            [Variant(id="var_1")], [("var_1", "item_1", 1)], ledger=ledger, locations=locations
        )

        assert await engine.confirm_inventory("var_1", 5, sales_channel_id="sc_1") is False
        assert await engine.confirm_inventory("var_1", 5) is True

        location_sets = [c[2] for c in ledger.calls_to("confirm_inventory")]
        assert location_sets == [("loc_1",), ("loc_1", "loc_2")]
