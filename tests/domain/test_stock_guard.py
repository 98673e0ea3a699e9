"""Unit tests for the StockGuard domain service."""

import pytest

from storefront.domain.exceptions import InsufficientStock, InvalidQuantity
from storefront.domain.service.stock_guard import StockGuard


class TestInvalidQuantity:

    @pytest.mark.parametrize("qty", [0, -1, -100])
    def test_non_positive_quantity_fails(self, qty):
        check = StockGuard.validate(qty, 5)
        assert not check.ok
        assert isinstance(check.error, InvalidQuantity)

    def test_zero_fails_even_with_no_stock(self):
        check = StockGuard.validate(0, 0)
        assert isinstance(check.error, InvalidQuantity)


class TestInsufficientStock:

    def test_six_of_five(self):
        check = StockGuard.validate(6, 5)
        assert isinstance(check.error, InsufficientStock)
        assert check.error.available == 5
        assert check.error.requested == 6

    @pytest.mark.parametrize("qty,available", [(1, 0), (11, 10), (1000, 3)])
    def test_reports_exact_available(self, qty, available):
        check = StockGuard.validate(qty, available)
        assert isinstance(check.error, InsufficientStock)
        assert check.error.available == available

    def test_message_mentions_available(self):
        check = StockGuard.validate(6, 5)
        assert str(check.error) == "Only 5 items available"


class TestSuccess:

    @pytest.mark.parametrize("qty,available", [(1, 1), (5, 5), (2, 100)])
    def test_within_stock_succeeds(self, qty, available):
        check = StockGuard.validate(qty, available)
        assert check.ok
        assert check.error is None

    def test_raise_for_error_is_noop_on_success(self):
        StockGuard.validate(1, 1).raise_for_error()

    def test_raise_for_error_raises_typed_error(self):
        with pytest.raises(InsufficientStock, match="Only 5 items available"):
            StockGuard.validate(6, 5).raise_for_error()
