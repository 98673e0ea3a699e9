"""Domain service: Stock Guard.

Pure quantity checks used before anything is added to a cart or an
order line is accepted.  No I/O and no state: callers pass in the stock
level they already hold.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStock, InvalidQuantity, ValidationError


@dataclass(frozen=True)
class StockCheck:
    """Outcome of a stock check.

    ``error`` is None on success.  Callers that prefer exceptions can
    use ``raise_for_error()``.
    """

    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class StockGuard:

    @staticmethod
    def validate(requested_qty: int, available_stock: int) -> StockCheck:
        if requested_qty <= 0:
            return StockCheck(InvalidQuantity(requested_qty))
        if requested_qty > available_stock:
            return StockCheck(InsufficientStock(requested_qty, available_stock))
        return StockCheck()
