"""Tests for loading change batches from JSON."""

import json

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order_line import LineStatus
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.json_change_batch import load_change_batch


def _write(tmp_path, document: dict):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


class TestLoadChangeBatch:

    def test_insert_batch(self, tmp_path):
        path = _write(tmp_path, {
            "new_records": [
                {"id": "L1", "order_id": "O1", "product_id": "P1", "quantity": 2, "unit_price": "9.99"},
            ],
        })

        batch = load_change_batch(path)

        assert batch.old_records is None
        record = batch.new_records[0]
        assert record.unit_price == Money.of("9.99")
        assert record.status is LineStatus.PENDING
        assert record.line_total == Money.zero()

    def test_update_batch_with_stored_totals(self, tmp_path):
        line = {"id": "L1", "order_id": "O1", "product_id": "P1", "quantity": 2,
                "unit_price": "9.99", "line_total": "19.98", "status": "Calculated"}
        path = _write(tmp_path, {"old_records": [line], "new_records": [dict(line, quantity=3)]})

        batch = load_change_batch(path)

        old, new = next(batch.pairs())
        assert old.line_total == Money.of("19.98")
        assert old.status is LineStatus.CALCULATED
        assert new.quantity == 3

    def test_missing_price_stays_none(self, tmp_path):
        path = _write(tmp_path, {"new_records": [{"id": "L1", "order_id": "O1", "quantity": 1}]})
        record = load_change_batch(path).new_records[0]
        assert record.unit_price is None
        assert record.product_id is None

    def test_misaligned_batch_rejected(self, tmp_path):
        path = _write(tmp_path, {
            "old_records": [{"id": "L1", "order_id": "O1", "quantity": 1}],
            "new_records": [],
        })
        with pytest.raises(ValidationError, match="misaligned"):
            load_change_batch(path)

    def test_errors_carried_into_record(self, tmp_path):
        path = _write(tmp_path, {"new_records": [
            {"id": "L1", "order_id": "O1", "product_id": "P1", "quantity": 9,
             "unit_price": "1.00", "errors": ["Only 5 items available"]},
        ]})

        record = load_change_batch(path).new_records[0]

        assert record.errors == ["Only 5 items available"]
        assert not record.is_valid

    @pytest.mark.parametrize("quantity", [2.7, "1.5", "two"])
    def test_non_whole_quantity_rejected(self, tmp_path, quantity):
        path = _write(tmp_path, {"new_records": [
            {"id": "L1", "order_id": "O1", "quantity": quantity},
        ]})
        with pytest.raises(ValueError, match="whole number"):
            load_change_batch(path)

    def test_integral_float_quantity_accepted(self, tmp_path):
        path = _write(tmp_path, {"new_records": [
            {"id": "L1", "order_id": "O1", "quantity": 3.0},
        ]})
        assert load_change_batch(path).new_records[0].quantity == 3
