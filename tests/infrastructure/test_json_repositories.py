"""Tests for the JSON-file-backed repositories."""

import json
from decimal import Decimal

import pytest

from storefront.domain.exceptions import UpstreamQueryError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.json_order_totals_repository import (
    JsonOrderTotalsRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def _products(tmp_path) -> JsonProductRepository:
    repo = JsonProductRepository(tmp_path / "products.json")
    repo.save(Product(id="1", name="Widget", unit_price=Money.of("9.99"), stock_quantity=5))
    repo.save(Product(id="2", name="Gadget", unit_price=Money.of("25.00"), stock_quantity=0))
    return repo


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        JsonProductRepository(tmp_path / "nested" / "products.json")
        assert (tmp_path / "nested" / "products.json").read_text(encoding="utf-8") == "[]"

    def test_save_and_reload(self, tmp_path):
        _products(tmp_path)
        reopened = JsonProductRepository(tmp_path / "products.json")
        widget = reopened.get_by_id("1")
        assert widget.unit_price == Money.of("9.99")
        assert widget.stock_quantity == 5

    def test_get_by_name_case_insensitive(self, tmp_path):
        assert _products(tmp_path).get_by_name("GADGET").id == "2"

    def test_get_many_skips_unknown(self, tmp_path):
        found = _products(tmp_path).get_many(["1", "404"])
        assert list(found) == ["1"]

    def test_search_filters_stock(self, tmp_path):
        repo = _products(tmp_path)
        assert [p.id for p in repo.search("", in_stock_only=True)] == ["1"]
        assert [p.id for p in repo.search("dg", in_stock_only=False)] == ["2"]

    def test_corrupt_file_raises_upstream_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json", encoding="utf-8")
        repo = JsonProductRepository(path)
        with pytest.raises(UpstreamQueryError, match="Could not read products"):
            repo.search("", in_stock_only=False)


class TestJsonOrderTotalsRepository:

    def test_unknown_orders_are_zero(self, tmp_path):
        repo = JsonOrderTotalsRepository(tmp_path / "order_totals.json")
        assert repo.get_totals(["O1"]) == {"O1": Money.zero()}

    def test_save_totals_merges(self, tmp_path):
        repo = JsonOrderTotalsRepository(tmp_path / "order_totals.json")
        repo.save_totals({"O1": Money.of("10.00"), "O2": Money.of("3.50")})
        repo.save_totals({"O1": Money.of("12.00")})

        reopened = JsonOrderTotalsRepository(tmp_path / "order_totals.json")
        assert reopened.list_all() == {"O1": Money.of("12.00"), "O2": Money.of("3.50")}

    def test_file_layout(self, tmp_path):
        path = tmp_path / "order_totals.json"
        JsonOrderTotalsRepository(path).save_totals({"O1": Money.of("19.98")})
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw == [{"order_id": "O1", "total": "19.98", "currency": "USD"}]
        assert Decimal(raw[0]["total"]) == Decimal("19.98")
