"""CLI commands for availability, reservations and fulfillment."""

from __future__ import annotations

import asyncio

import click

from stockalloc.application.cancel_order import CancelOrderHandler
from stockalloc.application.confirm_cart import ConfirmCartHandler
from stockalloc.application.create_fulfillment import CreateFulfillmentHandler
from stockalloc.application.dto import LineItemSpec
from stockalloc.application.edit_line_item import EditLineItemHandler
from stockalloc.application.place_order import PlaceOrderHandler
from stockalloc.domain.exceptions import DomainException
from stockalloc.domain.model.variant import LineItem
from stockalloc.infrastructure.bootstrap import inventory_engine

LINES_HELP = "Lines as 'LineItemId=VariantId:Qty,LineItemId=VariantId:Qty'."


def _parse_lines(raw: str) -> list[LineItemSpec]:
    """Parse 'li_1=var_1:3,li_2=var_2:5' into LineItemSpec list."""
    specs: list[LineItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        if "=" not in entry or ":" not in entry:
            raise click.BadParameter(
                f"Invalid line format '{entry}'. Expected 'LineItemId=VariantId:Qty'."
            )
        line_id, rest = entry.split("=", 1)
        variant_id, qty_str = rest.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for line item '{line_id}'."
            )
        specs.append(
            LineItemSpec(
                line_item_id=line_id.strip(),
                variant_id=variant_id.strip() or None,
                quantity=qty,
            )
        )
    return specs


@click.command("confirm")
@click.option("--lines", required=True, help=LINES_HELP)
@click.option("--channel", default=None, help="Sales channel ID.")
def stock_confirm(lines: str, channel: str | None) -> None:
    """Check whether every line can be fulfilled."""
    handler = ConfirmCartHandler(inventory_engine())

    try:
        result = asyncio.run(handler.handle(_parse_lines(lines), sales_channel_id=channel))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.available:
        click.echo("All lines available.")
        return
    click.echo("Unavailable lines: " + ", ".join(result.unavailable_line_item_ids))
    raise click.exceptions.Exit(1)


@click.command("reserve")
@click.option("--lines", required=True, help=LINES_HELP)
@click.option("--channel", default=None, help="Sales channel ID.")
@click.option("--location", default=None, help="Stock location ID.")
def stock_reserve(lines: str, channel: str | None, location: str | None) -> None:
    """Reserve stock for the lines of a placed order."""
    specs = _parse_lines(lines)
    handler = PlaceOrderHandler(inventory_engine())

    try:
        asyncio.run(handler.handle(specs, sales_channel_id=channel, location_id=location))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reserved stock for {len(specs)} line(s).")


@click.command("adjust")
@click.option("--line-item", required=True, help="Line item ID.")
@click.option("--variant", required=True, help="Variant ID.")
@click.option("--location", required=True, help="Preferred stock location ID.")
@click.option("--from", "current", required=True, type=int, help="Current line quantity.")
@click.option("--to", "new", required=True, type=int, help="New line quantity.")
def stock_adjust(line_item: str, variant: str, location: str, current: int, new: int) -> None:
    """Resize the reservation of an edited line item."""
    handler = EditLineItemHandler(inventory_engine())
    spec = LineItemSpec(line_item_id=line_item, variant_id=variant, quantity=current)

    try:
        delta = asyncio.run(handler.handle(spec, new_quantity=new, location_id=location))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Line item '{line_item}' adjusted by {delta:+d}.")


@click.command("release")
@click.option("--lines", required=True, help=LINES_HELP)
def stock_release(lines: str) -> None:
    """Release the stock held by cancelled lines."""
    specs = _parse_lines(lines)
    handler = CancelOrderHandler(inventory_engine())

    try:
        asyncio.run(handler.handle(specs))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Released stock for {len(specs)} line(s).")


@click.command("validate")
@click.option("--lines", required=True, help=LINES_HELP)
@click.option("--location", required=True, help="Stock location ID.")
def stock_validate(lines: str, location: str) -> None:
    """Check that a location can serve the lines without changing anything."""
    engine = inventory_engine()
    line_items = [
        LineItem(id=s.line_item_id, variant_id=s.variant_id, quantity=s.quantity)
        for s in _parse_lines(lines)
    ]

    try:
        asyncio.run(engine.validate_at_location(line_items, location))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location '{location}' can serve all lines.")


@click.command("fulfill")
@click.option("--lines", required=True, help=LINES_HELP)
@click.option("--location", required=True, help="Stock location ID.")
def stock_fulfill(lines: str, location: str) -> None:
    """Fulfill lines from a location, consuming their reservations."""
    specs = _parse_lines(lines)
    handler = CreateFulfillmentHandler(inventory_engine())

    try:
        asyncio.run(handler.handle(specs, location_id=location))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Fulfilled {len(specs)} line(s) from '{location}'.")
