import click

from stockalloc.infrastructure.cli.link_commands import link_attach, link_detach, link_list
from stockalloc.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_confirm,
    stock_fulfill,
    stock_release,
    stock_reserve,
    stock_validate,
)
from stockalloc.infrastructure.config import get_settings
from stockalloc.infrastructure.logging_setup import configure_logging


@click.group()
def cli() -> None:
    """stockalloc: inventory reservation and allocation."""
    configure_logging(get_settings())


@cli.group()
def link() -> None:
    """Manage variant / inventory item links."""


@cli.group()
def stock() -> None:
    """Check, reserve and release stock."""


# Register subcommands
link.add_command(link_attach)
link.add_command(link_detach)
link.add_command(link_list)
stock.add_command(stock_adjust)
stock.add_command(stock_confirm)
stock.add_command(stock_fulfill)
stock.add_command(stock_release)
stock.add_command(stock_reserve)
stock.add_command(stock_validate)
