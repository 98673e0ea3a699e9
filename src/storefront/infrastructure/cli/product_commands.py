"""CLI commands for the product catalogue."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.dto import ProductDTO
from storefront.application.search_products import SearchProductsHandler
from storefront.application.set_stock import SetStockHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


def _display_products(products: list[ProductDTO]) -> None:
    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 46)
    for p in products:
        stock = str(p.stock_quantity) if p.has_stock else "out"
        click.echo(f"{p.id:<6} {p.name:<20} {p.unit_price:>10} {stock:>7}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 9.99).")
@click.option("--stock", default=0, type=int, help="Units in stock.")
def product_add(name: str, price: str, stock: int) -> None:
    """Add a new product to the catalogue."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(name=name, price=price, stock_quantity=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.unit_price} "
        f"({product.stock_quantity} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalogue."""
    handler = SearchProductsHandler(product_repo=product_repository())
    listing = handler.handle(search_term="", in_stock_only=False)

    if listing.error:
        raise click.ClickException(listing.error)
    if not listing.has_products:
        click.echo("No products found.")
        return

    _display_products(listing.products)


@click.command("search")
@click.option("--term", default="", help="Text to look for in product names.")
@click.option(
    "--all", "include_out_of_stock", is_flag=True, default=False,
    help="Include products that are out of stock.",
)
def product_search(term: str, include_out_of_stock: bool) -> None:
    """Search the catalogue by name."""
    handler = SearchProductsHandler(product_repo=product_repository())
    listing = handler.handle(search_term=term, in_stock_only=not include_out_of_stock)

    if listing.error:
        raise click.ClickException(listing.error)
    if not listing.has_products:
        click.echo("No products match your search.")
        return

    _display_products(listing.products)


@click.command("stock")
@click.option("--name", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def product_stock(name: str, quantity: int) -> None:
    """Set the stock level for a product."""
    handler = SetStockHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_name=name, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product.name}' set to {product.stock_quantity}")
