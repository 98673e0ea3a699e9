"""Product snapshot as seen at query time.

The catalogue itself lives in whatever store backs the ProductRepository;
the domain only ever sees read-only snapshots of it.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product in the catalogue together with its current stock level."""

    id: str
    name: str
    unit_price: Money
    stock_quantity: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.stock_quantity, int) or self.stock_quantity < 0:
            raise ValidationError(
                f"Stock quantity for {self.name} must be a non-negative integer"
            )

    @property
    def has_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock_quantity <= 0
