"""Order line records as delivered by the change runtime.

Unlike cart lines, order line records are persisted by the runtime and
handed to the change pipeline in batches.  The pipeline is the only code
allowed to touch ``line_total``, ``status`` and ``errors``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.model.value_objects import Money


class LineStatus(Enum):
    PENDING = "Pending"
    VALIDATED = "Validated"
    CALCULATED = "Calculated"


@dataclass
class OrderLineRecord:
    """One line of an order.

    ``unit_price`` is the price at time of order; ``line_total`` is
    only trustworthy once ``status`` is CALCULATED.
    """

    id: str
    order_id: str
    product_id: str | None
    quantity: int
    unit_price: Money | None
    line_total: Money = field(default_factory=Money.zero)
    status: LineStatus = LineStatus.PENDING
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, reason: str) -> None:
        """Attach a field error; the record is excluded from later phases."""
        self.errors.append(reason)

    def compute_line_total(self) -> Money:
        if self.unit_price is None or self.quantity <= 0:
            return Money.zero()
        return self.unit_price * self.quantity

    def recalculate(self) -> Money:
        self.line_total = self.compute_line_total()
        self.status = LineStatus.CALCULATED
        return self.line_total
