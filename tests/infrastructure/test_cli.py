"""End-to-end tests for the click CLI over JSON files."""

import json

import pytest
from click.testing import CliRunner

from stockalloc.infrastructure.cli.main import cli
from stockalloc.infrastructure.config import reload_settings


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    (tmp_path / "variants.json").write_text(json.dumps([
        {"id": "var_1", "title": "Shirt", "inventory_quantity": 10},
    ]))
    (tmp_path / "locations.json").write_text(json.dumps({
        "locations": [{"id": "loc_1"}, {"id": "loc_2"}],
        "sales_channels": {"sc_web": ["loc_1"]},
    }))
    (tmp_path / "ledger.json").write_text(json.dumps({
        "items": [{"id": "item_1"}],
        "levels": [{"inventory_item_id": "item_1", "location_id": "loc_1", "stocked_quantity": 6}],
        "reservations": [],
    }))
    monkeypatch.setenv("STOCKALLOC_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STOCKALLOC_LEDGER_ENABLED", "true")
    reload_settings()
    yield tmp_path
    monkeypatch.undo()
    reload_settings()


def _run(*args):
    return CliRunner().invoke(cli, list(args))


class TestLinkCommands:

    def test_attach_list_detach(self, data_dir):
        result = _run("link", "attach", "--variant", "var_1", "--item", "item_1", "--quantity", "2")
        assert result.exit_code == 0, result.output
        assert "2 x item 'item_1'" in result.output

        result = _run("link", "list", "--variant", "var_1")
        assert "item_1" in result.output

        result = _run("link", "detach", "--variant", "var_1", "--item", "item_1")
        assert result.exit_code == 0
        assert json.loads((data_dir / "links.json").read_text()) == []

    def test_attach_unknown_item_fails(self, data_dir):
        result = _run("link", "attach", "--variant", "var_1", "--item", "item_9")

        assert result.exit_code != 0
        assert "item_9" in result.output

    def test_list_requires_a_filter(self, data_dir):
        result = _run("link", "list")

        assert result.exit_code != 0


class TestStockCommands:

    def test_order_flow(self, data_dir):
        _run("link", "attach", "--variant", "var_1", "--item", "item_1", "--quantity", "2")

        result = _run("stock", "confirm", "--lines", "li_1=var_1:3", "--channel", "sc_web")
        assert result.exit_code == 0, result.output
        assert "All lines available" in result.output

        result = _run("stock", "reserve", "--lines", "li_1=var_1:3", "--channel", "sc_web")
        assert result.exit_code == 0, result.output

        ledger = json.loads((data_dir / "ledger.json").read_text())
        [reservation] = ledger["reservations"]
        assert (reservation["location_id"], reservation["quantity"]) == ("loc_1", 6)

        result = _run("stock", "confirm", "--lines", "li_2=var_1:1", "--channel", "sc_web")
        assert result.exit_code == 1
        assert "li_2" in result.output

        result = _run("stock", "release", "--lines", "li_1=var_1:3")
        assert result.exit_code == 0
        assert json.loads((data_dir / "ledger.json").read_text())["reservations"] == []

    def test_reserve_without_location_context_fails(self, data_dir):
        _run("link", "attach", "--variant", "var_1", "--item", "item_1")

        result = _run("stock", "reserve", "--lines", "li_1=var_1:1")

        assert result.exit_code != 0
        assert "location" in result.output

    def test_validate_reports_shortage(self, data_dir):
        _run("link", "attach", "--variant", "var_1", "--item", "item_1", "--quantity", "3")

        result = _run("stock", "validate", "--lines", "li_1=var_1:2", "--location", "loc_1")
        assert result.exit_code == 0, result.output

        result = _run("stock", "validate", "--lines", "li_1=var_1:3", "--location", "loc_1")
        assert result.exit_code != 0
        assert "li_1" in result.output

    def test_bad_line_format(self, data_dir):
        result = _run("stock", "confirm", "--lines", "var_1")

        assert result.exit_code != 0
        assert "LineItemId=VariantId:Qty" in result.output


class TestSimpleModeCli:

    def test_reserve_and_adjust_counter(self, data_dir, monkeypatch):
        monkeypatch.setenv("STOCKALLOC_LEDGER_ENABLED", "false")
        reload_settings()

        result = _run("stock", "reserve", "--lines", "li_1=var_1:4")
        assert result.exit_code == 0, result.output

        result = _run(
            "stock", "adjust", "--line-item", "li_1", "--variant", "var_1",
            "--location", "loc_1", "--from", "4", "--to", "2",
        )
        assert result.exit_code == 0, result.output
        assert "-2" in result.output

        [variant] = json.loads((data_dir / "variants.json").read_text())
        assert variant["inventory_quantity"] == 8
