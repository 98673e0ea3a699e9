"""Cart value objects.

A cart belongs to a single UI session and is never written to storage.
Both ``CartLine`` and ``Cart`` are frozen: every change produces a new
cart, so anyone still holding the previous snapshot keeps a consistent
view of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class CartLine:
    """One product entry in the cart.

    ``unit_price`` is the price captured when the product was first
    added; ``line_total`` is derived from it on construction.
    """

    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    line_total: Money = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValidationError("Cart line quantity must be positive")
        object.__setattr__(self, "line_total", self.unit_price * self.quantity)

    def with_added_quantity(self, quantity: int) -> CartLine:
        """Return a copy holding *quantity* more units at the same price."""
        return CartLine(
            product_id=self.product_id,
            product_name=self.product_name,
            quantity=self.quantity + quantity,
            unit_price=self.unit_price,
        )


@dataclass(frozen=True)
class Cart:
    """Ordered, immutable collection of cart lines.

    Invariant: at most one line per ``product_id``.
    """

    lines: tuple[CartLine, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for line in self.lines:
            if line.product_id in seen:
                raise ValidationError(
                    f"Duplicate cart line for product '{line.product_id}'"
                )
            seen.add(line.product_id)

    @staticmethod
    def empty() -> Cart:
        return Cart()

    # --- Computed properties --------------------------------------------------
    # Recomputed on every read; lines may be replaced wholesale at any time.

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Money:
        if not self.lines:
            return Money.zero()
        result = Money.zero(self.lines[0].unit_price.currency)
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None
