"""CLI commands for variant / inventory item links."""

from __future__ import annotations

import asyncio

import click

from stockalloc.application.dto import LinkDTO
from stockalloc.domain.exceptions import DomainException
from stockalloc.infrastructure.bootstrap import inventory_engine


@click.command("attach")
@click.option("--variant", required=True, help="Variant ID.")
@click.option("--item", required=True, help="Inventory item ID.")
@click.option("--quantity", type=int, default=None, help="Item units per variant unit (default 1).")
def link_attach(variant: str, item: str, quantity: int | None) -> None:
    """Link a variant to an inventory item."""
    engine = inventory_engine()

    try:
        link = asyncio.run(engine.attach(variant, item, quantity))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    dto = LinkDTO.from_link(link)
    click.echo(f"Variant '{dto.variant_id}' uses {dto.quantity} x item '{dto.inventory_item_id}'")


@click.command("detach")
@click.option("--variant", required=True, help="Variant ID.")
@click.option("--item", required=True, help="Inventory item ID.")
def link_detach(variant: str, item: str) -> None:
    """Remove a variant / inventory item link."""
    engine = inventory_engine()
    engine.detach(variant, item)
    click.echo(f"Variant '{variant}' no longer linked to item '{item}'")


@click.command("list")
@click.option("--variant", "variants", multiple=True, help="Variant ID (repeatable).")
@click.option("--item", "items", multiple=True, help="Inventory item ID (repeatable).")
def link_list(variants: tuple[str, ...], items: tuple[str, ...]) -> None:
    """List links by variant or by inventory item."""
    if bool(variants) == bool(items):
        raise click.UsageError("Pass either --variant or --item.")

    engine = inventory_engine()
    links = engine.list_by_variant(list(variants)) if variants else engine.list_by_item(list(items))

    if not links:
        click.echo("No links found.")
        return

    click.echo(f"{'Variant':<20} {'Item':<20} {'Qty':>5}")
    click.echo("-" * 47)
    for dto in (LinkDTO.from_link(link) for link in links):
        click.echo(f"{dto.variant_id:<20} {dto.inventory_item_id:<20} {dto.quantity:>5}")
