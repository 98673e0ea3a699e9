"""CLI commands for carts.

A CLI invocation is one shopping session: the cart is built from the
``--items`` option, shown, and optionally checked out.  Nothing about
the cart is stored.
"""

from __future__ import annotations

import click

from storefront.application.cart_events import CartEventPublisher
from storefront.application.catalog_session import CatalogSession
from storefront.application.dto import CartItemSpec, CartSummaryDTO
from storefront.domain.exceptions import DomainException, ProductNotFound
from storefront.infrastructure.bootstrap import product_repository, settings


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'Widget:3,Gadget:5' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(CartItemSpec(product_name=name.strip(), quantity=qty))
    return specs


def _display_cart(summary: CartSummaryDTO) -> None:
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in summary.cart_items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<20} {summary.total_items:>5} {summary.total_value:>21}")


class EchoCartEventPublisher(CartEventPublisher):
    """Prints cart notifications to the terminal."""

    def view_cart(self, summary: CartSummaryDTO) -> None:
        click.echo(f"Cart: {summary.total_items} items worth {summary.total_value}")
        _display_cart(summary)

    def checkout(self, summary: CartSummaryDTO) -> None:
        click.echo(
            f"Checkout started: {summary.total_items} items, {summary.total_value}"
        )


@click.command("quote")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option("--checkout", "do_checkout", is_flag=True, default=False, help="Check the cart out.")
def cart_quote(items: str, do_checkout: bool) -> None:
    """Build a cart from catalogue products and show its totals."""
    specs = _parse_items(items)

    session = CatalogSession(
        product_repo=product_repository(),
        publisher=EchoCartEventPublisher(),
        in_stock_only=settings().default_in_stock_only,
    )

    try:
        listing = session.load()
        if listing.error:
            raise click.ClickException(listing.error)

        ids_by_name = {p.name.lower(): p.id for p in listing.products}
        for spec in specs:
            product_id = ids_by_name.get(spec.product_name.lower())
            if product_id is None:
                raise ProductNotFound(spec.product_name)
            session.set_quantity(product_id, spec.quantity)
            session.add_to_cart(product_id)
            click.echo(f"Added {spec.quantity} x {spec.product_name} to cart")

        session.view_cart()
        if do_checkout:
            session.checkout()
    except DomainException as exc:
        raise click.ClickException(str(exc))
