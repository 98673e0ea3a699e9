"""Unit tests for the Cart and CartLine value objects."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Money


def _line(pid: str, qty: int, price: str = "10.00") -> CartLine:
    return CartLine(product_id=pid, product_name=f"Product {pid}", quantity=qty, unit_price=Money.of(price))


class TestCartLine:

    def test_line_total_derived(self):
        assert _line("P1", 3, "9.99").line_total == Money.of("29.97")

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _line("P1", 0)

    def test_with_added_quantity_keeps_price(self):
        line = _line("P1", 2, "9.99").with_added_quantity(1)
        assert line.quantity == 3
        assert line.unit_price == Money.of("9.99")
        assert line.line_total == Money.of("29.97")


class TestCartTotals:

    def test_empty_cart(self):
        cart = Cart.empty()
        assert cart.item_count == 0
        assert cart.total == Money.zero()
        assert str(cart.total) == "$0.00"
        assert cart.is_empty

    def test_item_count_sums_quantities(self):
        cart = Cart(lines=(_line("P1", 2), _line("P2", 5)))
        assert cart.item_count == 7

    def test_total_sums_line_totals(self):
        cart = Cart(lines=(_line("P1", 2, "9.99"), _line("P2", 1, "0.02")))
        assert cart.total == Money.of("20.00")

    def test_duplicate_product_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate cart line"):
            Cart(lines=(_line("P1", 1), _line("P1", 2)))

    def test_find_line(self):
        cart = Cart(lines=(_line("P1", 2), _line("P2", 5)))
        assert cart.find_line("P2").quantity == 5
        assert cart.find_line("P3") is None
