"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidQuantity(ValidationError):
    """Requested quantity is zero or negative."""

    def __init__(self, requested: int) -> None:
        super().__init__("Quantity must be greater than 0")
        self.requested = requested


class InsufficientStock(ValidationError):
    """Requested quantity exceeds what is in stock.

    ``available`` is carried so the caller can tell the user how many
    units can actually be ordered.
    """

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"Only {available} items available")
        self.requested = requested
        self.available = available


class ProductNotFound(EntityNotFoundError):
    """Referenced product id is absent from the current product set."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: '{product_id}'")
        self.product_id = product_id


class ValidationFailed(ValidationError):
    """A change record failed one or more field checks."""

    def __init__(self, record_id: str, reasons: list[str]) -> None:
        super().__init__(f"Record '{record_id}' is invalid: {'; '.join(reasons)}")
        self.record_id = record_id
        self.reasons = list(reasons)


class EmptyCartError(ValidationError):
    """Checkout attempted with nothing in the cart."""


class UpstreamQueryError(DomainException):
    """The product data source failed; message comes from the source."""
