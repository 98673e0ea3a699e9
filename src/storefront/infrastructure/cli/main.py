import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.cart_commands import cart_quote
from storefront.infrastructure.cli.change_commands import changes_apply
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_search,
    product_stock,
)
from storefront.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Storefront: catalogue, cart and order-line change processing"""
    config = settings()
    configure_logging(config.log_level, json=config.log_json)


@cli.group()
def product() -> None:
    """Manage the product catalogue."""


@cli.group()
def cart() -> None:
    """Build and check out carts."""


@cli.group()
def changes() -> None:
    """Process order-line change batches."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_search)
product.add_command(product_stock)
cart.add_command(cart_quote)
changes.add_command(changes_apply)
