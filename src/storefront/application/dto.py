"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / runtime and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the shopper asked for (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    """Output: one catalogue entry annotated with its stock state."""

    id: str
    name: str
    unit_price: str  # formatted, e.g. "$9.99"
    stock_quantity: int
    has_stock: bool
    is_out_of_stock: bool


@dataclass(frozen=True)
class ProductListingDTO:
    """Output: result of a product query.

    On upstream failure ``products`` is empty and ``error`` carries the
    message from the data source.
    """

    products: list[ProductDTO]
    error: str | None = None

    @property
    def has_products(self) -> bool:
        return bool(self.products)


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartSummaryDTO:
    """Payload of the "view cart" and "checkout" notifications."""

    cart_items: list[CartLineDTO]
    total_items: int
    total_value: str


@dataclass(frozen=True)
class RecordOutcomeDTO:
    record_id: str
    valid: bool
    reason: str | None
    line_total: str | None


@dataclass(frozen=True)
class ChangeReportDTO:
    """Output: what the change pipeline did with one batch."""

    phase: str
    outcomes: list[RecordOutcomeDTO]
    skipped_ids: list[str]
    order_totals: dict[str, str]
