"""Domain service: Record Change Pipeline.

Runs one change batch through the phase selected by its trigger
context.  Before-phases validate and reject individual records;
after-phases recalculate line totals and roll them up into the owning
orders' totals.

Every phase makes a single pass over the batch and talks to its
collaborators a fixed number of times, however many records arrive:

  before-phases: one ``ProductRepository.get_many`` call
  after-phases:  one ``OrderTotalsRepository.get_totals`` call and
                  one ``OrderTotalsRepository.save_totals`` call

A phase with nothing to look up or write makes no call at all.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal

import structlog

from storefront.domain.exceptions import (
    InvalidQuantity,
    ProductNotFound,
    ValidationError,
    ValidationFailed,
)
from storefront.domain.model.change_batch import ChangeBatch, Phase, TriggerContext
from storefront.domain.model.order_line import LineStatus, OrderLineRecord
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_totals_repository import OrderTotalsRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_guard import StockGuard

logger = structlog.get_logger(__name__)

VALIDATED_FIELDS = frozenset({"product_id", "quantity", "unit_price"})
# A line moving to another order changes two order totals.
PRICING_FIELDS = VALIDATED_FIELDS | {"order_id"}
_PRODUCT_FIELDS = frozenset({"product_id", "quantity"})


@dataclass(frozen=True)
class RecordOutcome:
    """What the pipeline decided about one record."""

    record_id: str
    valid: bool
    error: ValidationFailed | None = None
    line_total: Money | None = None

    @property
    def reason(self) -> str | None:
        if self.error is None:
            return None
        return "; ".join(self.error.reasons)


@dataclass(frozen=True)
class PipelineResult:
    phase: Phase
    outcomes: tuple[RecordOutcome, ...] = ()
    skipped_ids: tuple[str, ...] = ()
    order_totals: dict[str, Money] = field(default_factory=dict)

    @property
    def valid_ids(self) -> list[str]:
        return [o.record_id for o in self.outcomes if o.valid]

    @property
    def invalid_ids(self) -> list[str]:
        return [o.record_id for o in self.outcomes if not o.valid]

    @property
    def recalculated_ids(self) -> list[str]:
        return [o.record_id for o in self.outcomes if o.line_total is not None]


class RecordChangePipeline:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_totals_repo: OrderTotalsRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_totals_repo = order_totals_repo
        self._phases: dict[Phase, Callable[[ChangeBatch], PipelineResult]] = {
            Phase.BEFORE_INSERT: self._before_insert,
            Phase.BEFORE_UPDATE: self._before_update,
            Phase.AFTER_INSERT: self._after_insert,
            Phase.AFTER_UPDATE: self._after_update,
            Phase.AFTER_DELETE: self._after_delete,
        }

    def run(self, batch: ChangeBatch, context: TriggerContext) -> PipelineResult:
        """Process *batch* in the phase selected by *context*.

        Raises ValidationError if the context flags do not name exactly
        one phase, or if the batch lacks the side that phase needs.
        """
        phase = context.phase
        logger.info("Processing change batch", phase=phase.value, batch_size=len(batch))

        result = self._phases[phase](batch)

        logger.info(
            "Change batch processed",
            phase=phase.value,
            valid=len(result.valid_ids),
            invalid=len(result.invalid_ids),
            skipped=len(result.skipped_ids),
            orders_updated=len(result.order_totals),
        )
        return result

    # --- Before-phases --------------------------------------------------------

    def _before_insert(self, batch: ChangeBatch) -> PipelineResult:
        records = batch.require_new()
        products = self._fetch_products(
            record.product_id for record in records if record.product_id
        )
        outcomes = tuple(
            self._settle(record, self._check(record, VALIDATED_FIELDS, products))
            for record in records
        )
        return PipelineResult(Phase.BEFORE_INSERT, outcomes)

    def _before_update(self, batch: ChangeBatch) -> PipelineResult:
        changed: list[tuple[OrderLineRecord, frozenset[str]]] = []
        skipped: list[str] = []
        for old, new in batch.pairs():
            fields = changed_fields(old, new) & VALIDATED_FIELDS
            if fields:
                changed.append((new, fields))
            else:
                skipped.append(new.id)

        products = self._fetch_products(
            record.product_id
            for record, fields in changed
            if record.product_id and fields & _PRODUCT_FIELDS
        )
        outcomes = tuple(
            self._settle(record, self._check(record, fields, products))
            for record, fields in changed
        )
        return PipelineResult(Phase.BEFORE_UPDATE, outcomes, tuple(skipped))

    def _fetch_products(self, product_ids: Iterable[str]) -> dict[str, Product]:
        wanted = set(product_ids)
        if not wanted:
            return {}
        return self._product_repo.get_many(wanted)

    @staticmethod
    def _check(
        record: OrderLineRecord,
        fields: frozenset[str],
        products: dict[str, Product],
    ) -> list[str]:
        """Return the reasons *record* is invalid, looking only at *fields*."""
        reasons: list[str] = []

        if fields & _PRODUCT_FIELDS:
            if record.quantity <= 0:
                reasons.append(str(InvalidQuantity(record.quantity)))
            if not record.product_id:
                reasons.append("Product reference is required")
            else:
                product = products.get(record.product_id)
                if product is None:
                    reasons.append(str(ProductNotFound(record.product_id)))
                elif record.quantity > 0:
                    check = StockGuard.validate(record.quantity, product.stock_quantity)
                    if not check.ok:
                        reasons.append(str(check.error))

        if "unit_price" in fields and record.unit_price is None:
            reasons.append("Unit price is required")

        return reasons

    @staticmethod
    def _settle(record: OrderLineRecord, reasons: list[str]) -> RecordOutcome:
        if reasons:
            for reason in reasons:
                record.add_error(reason)
            error = ValidationFailed(record.id, reasons)
            logger.warning("Record rejected", record_id=record.id, reasons=reasons)
            return RecordOutcome(record.id, valid=False, error=error)

        record.status = LineStatus.VALIDATED
        return RecordOutcome(record.id, valid=True)

    # --- After-phases ---------------------------------------------------------

    def _after_insert(self, batch: ChangeBatch) -> PipelineResult:
        deltas = _OrderDeltas()
        outcomes: list[RecordOutcome] = []

        for record in batch.require_new():
            if not record.is_valid:
                outcomes.append(self._excluded(record))
                continue
            entries = [(record.order_id, record.compute_line_total(), 1)]
            mismatch = deltas.mismatch(entries)
            if mismatch:
                outcomes.append(self._settle(record, [mismatch]))
                continue
            line_total = record.recalculate()
            deltas.apply(entries)
            outcomes.append(RecordOutcome(record.id, valid=True, line_total=line_total))

        totals = self._apply_deltas(deltas)
        return PipelineResult(Phase.AFTER_INSERT, tuple(outcomes), order_totals=totals)

    def _after_update(self, batch: ChangeBatch) -> PipelineResult:
        deltas = _OrderDeltas()
        outcomes: list[RecordOutcome] = []
        skipped: list[str] = []

        for old, new in batch.pairs():
            if not new.is_valid:
                outcomes.append(self._excluded(new))
                continue
            if not changed_fields(old, new) & PRICING_FIELDS:
                skipped.append(new.id)
                continue
            entries = [
                (old.order_id, old.line_total, -1),
                (new.order_id, new.compute_line_total(), 1),
            ]
            mismatch = deltas.mismatch(entries)
            if mismatch:
                outcomes.append(self._settle(new, [mismatch]))
                continue
            line_total = new.recalculate()
            deltas.apply(entries)
            outcomes.append(RecordOutcome(new.id, valid=True, line_total=line_total))

        totals = self._apply_deltas(deltas)
        return PipelineResult(
            Phase.AFTER_UPDATE, tuple(outcomes), tuple(skipped), order_totals=totals
        )

    def _after_delete(self, batch: ChangeBatch) -> PipelineResult:
        deltas = _OrderDeltas()
        outcomes: list[RecordOutcome] = []

        for record in batch.require_old():
            entries = [(record.order_id, record.line_total, -1)]
            mismatch = deltas.mismatch(entries)
            if mismatch:
                outcomes.append(self._settle(record, [mismatch]))
                continue
            deltas.apply(entries)
            outcomes.append(RecordOutcome(record.id, valid=True))

        totals = self._apply_deltas(deltas)
        return PipelineResult(Phase.AFTER_DELETE, tuple(outcomes), order_totals=totals)

    @staticmethod
    def _excluded(record: OrderLineRecord) -> RecordOutcome:
        return RecordOutcome(
            record.id, valid=False, error=ValidationFailed(record.id, record.errors)
        )

    def _apply_deltas(self, deltas: _OrderDeltas) -> dict[str, Money]:
        """Fold per-order deltas into stored totals with one read and one write.

        Raises ValidationError, before anything is written, if a stored
        non-zero total is kept in another currency than its lines.
        """
        pending = deltas.pending()
        if not pending:
            return {}

        current = self._order_totals_repo.get_totals(pending.keys())
        updated: dict[str, Money] = {}
        for order_id, (delta, currency) in pending.items():
            base = current.get(order_id) or Money.zero(currency)
            if base.amount and base.currency != currency:
                raise ValidationError(
                    f"Order '{order_id}' total is kept in {base.currency}, "
                    f"cannot apply {currency} lines"
                )
            amount = base.amount + delta
            if amount < 0:
                logger.warning(
                    "Order total below zero, clamping",
                    order_id=order_id,
                    stored=str(base.amount),
                    delta=str(delta),
                )
                amount = Decimal("0.00")
            updated[order_id] = Money(amount, currency)

        self._order_totals_repo.save_totals(updated)
        return updated


class _OrderDeltas:
    """Signed per-order adjustments, each held in its order's currency.

    The first line seen for an order fixes that order's currency for the
    batch.  Zero amounts carry no currency, so a never-calculated line
    total does not pin one.
    """

    def __init__(self) -> None:
        self._amounts: dict[str, Decimal] = defaultdict(Decimal)
        self._currencies: dict[str, str] = {}

    def mismatch(self, entries: list[tuple[str, Money, int]]) -> str | None:
        """Return why *entries* cannot join this batch, or None."""
        seen = dict(self._currencies)
        for order_id, money, _ in entries:
            if not money.amount:
                continue
            expected = seen.setdefault(order_id, money.currency)
            if expected != money.currency:
                return (
                    f"Currency {money.currency} does not match {expected} "
                    f"for order '{order_id}'"
                )
        return None

    def apply(self, entries: list[tuple[str, Money, int]]) -> None:
        for order_id, money, sign in entries:
            if not money.amount:
                continue
            self._currencies.setdefault(order_id, money.currency)
            self._amounts[order_id] += sign * money.amount

    def pending(self) -> dict[str, tuple[Decimal, str]]:
        return {
            order_id: (delta, self._currencies[order_id])
            for order_id, delta in self._amounts.items()
            if delta
        }


def changed_fields(old: OrderLineRecord, new: OrderLineRecord) -> frozenset[str]:
    """Names of the pricing-relevant fields that differ between two snapshots."""
    return frozenset(
        name for name in PRICING_FIELDS if getattr(old, name) != getattr(new, name)
    )
