"""Unit tests for the Product snapshot."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


class TestProductStockFlags:

    def test_in_stock(self):
        p = Product(id="P1", name="Widget", unit_price=Money.of("9.99"), stock_quantity=5)
        assert p.has_stock is True
        assert p.is_out_of_stock is False

    def test_out_of_stock(self):
        p = Product(id="P1", name="Widget", unit_price=Money.of("9.99"), stock_quantity=0)
        assert p.has_stock is False
        assert p.is_out_of_stock is True

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            Product(id="P1", name="Widget", unit_price=Money.of("9.99"), stock_quantity=-1)

    def test_snapshot_is_immutable(self):
        p = Product(id="P1", name="Widget", unit_price=Money.of("9.99"), stock_quantity=5)
        with pytest.raises(AttributeError):
            p.stock_quantity = 10
