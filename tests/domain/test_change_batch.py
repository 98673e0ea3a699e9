"""Unit tests for ChangeBatch and TriggerContext."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.change_batch import ChangeBatch, Operation, Phase, TriggerContext
from storefront.domain.model.order_line import LineStatus, OrderLineRecord
from storefront.domain.model.value_objects import Money


def _record(rid: str, qty: int = 1) -> OrderLineRecord:
    return OrderLineRecord(
        id=rid, order_id="O1", product_id="P1", quantity=qty, unit_price=Money.of("10.00")
    )


class TestChangeBatchAlignment:

    def test_update_batch_pairs_records(self):
        batch = ChangeBatch.updated([_record("L1"), _record("L2")], [_record("L1", 2), _record("L2", 3)])
        pairs = list(batch.pairs())
        assert [(old.id, new.quantity) for old, new in pairs] == [("L1", 2), ("L2", 3)]

    def test_length_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="misaligned"):
            ChangeBatch.updated([_record("L1")], [_record("L1"), _record("L2")])

    def test_id_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="misaligned"):
            ChangeBatch.updated([_record("L1"), _record("L2")], [_record("L2"), _record("L1")])

    def test_lists_frozen_into_tuples(self):
        records = [_record("L1")]
        batch = ChangeBatch(new_records=records)
        records.append(_record("L2"))
        assert len(batch) == 1
        assert isinstance(batch.new_records, tuple)

    def test_insert_batch_has_no_old_side(self):
        batch = ChangeBatch.inserted([_record("L1")])
        with pytest.raises(ValidationError, match="no old records"):
            batch.require_old()

    def test_delete_batch_has_no_new_side(self):
        batch = ChangeBatch.deleted([_record("L1")])
        assert len(batch) == 1
        with pytest.raises(ValidationError, match="no new records"):
            batch.require_new()


class TestTriggerContext:

    @pytest.mark.parametrize(
        "is_before,operation,phase",
        [
            (True, Operation.INSERT, Phase.BEFORE_INSERT),
            (True, Operation.UPDATE, Phase.BEFORE_UPDATE),
            (False, Operation.INSERT, Phase.AFTER_INSERT),
            (False, Operation.UPDATE, Phase.AFTER_UPDATE),
            (False, Operation.DELETE, Phase.AFTER_DELETE),
        ],
    )
    def test_flags_select_phase(self, is_before, operation, phase):
        assert TriggerContext(is_before, not is_before, operation).phase is phase

    def test_before_delete_has_no_phase(self):
        with pytest.raises(ValidationError, match="No phase handles before delete"):
            TriggerContext(True, False, Operation.DELETE).phase

    @pytest.mark.parametrize("flag", [True, False])
    def test_both_or_neither_flag_rejected(self, flag):
        with pytest.raises(ValidationError, match="Exactly one"):
            TriggerContext(flag, flag, Operation.INSERT).phase

    @pytest.mark.parametrize("phase", list(Phase))
    def test_for_phase_round_trips(self, phase):
        assert TriggerContext.for_phase(phase).phase is phase


class TestOrderLineRecord:

    def test_recalculate_sets_total_and_status(self):
        record = _record("L1", 3)
        assert record.recalculate() == Money.of("30.00")
        assert record.line_total == Money.of("30.00")
        assert record.status is LineStatus.CALCULATED

    def test_add_error_marks_invalid(self):
        record = _record("L1")
        assert record.is_valid
        record.add_error("bad")
        assert not record.is_valid
        assert record.errors == ["bad"]
