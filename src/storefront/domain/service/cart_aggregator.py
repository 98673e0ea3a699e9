"""Domain service: Cart Aggregator.

Merges an addition into a cart and hands back a brand-new cart.  The
input cart is never touched, so any reader still holding it sees the
state it had before the addition.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import InvalidQuantity, ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.product import Product

logger = structlog.get_logger(__name__)


class CartAggregator:

    @staticmethod
    def add_line(cart: Cart, product: Product, quantity: int) -> Cart:
        """Add *quantity* units of *product* to *cart*.

        A product already in the cart keeps its line (and its position);
        only the quantity grows.  The line keeps the unit price it was
        first added at, even if ``product.unit_price`` has since moved.
        A new line must share the currency of the lines already held.
        """
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        existing = cart.find_line(product.id)
        if existing is None:
            if cart.lines and cart.lines[0].unit_price.currency != product.unit_price.currency:
                raise ValidationError(
                    f"Cannot add {product.unit_price.currency} product '{product.name}' "
                    f"to a {cart.lines[0].unit_price.currency} cart"
                )
            new_line = CartLine(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                unit_price=product.unit_price,
            )
            logger.debug("Cart line added", product_id=product.id, quantity=quantity)
            return Cart(lines=cart.lines + (new_line,))

        merged = existing.with_added_quantity(quantity)
        logger.debug(
            "Cart line merged",
            product_id=product.id,
            added=quantity,
            quantity=merged.quantity,
        )
        return Cart(
            lines=tuple(
                merged if line.product_id == product.id else line
                for line in cart.lines
            )
        )
