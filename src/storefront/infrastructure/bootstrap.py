"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_order_totals_repository import (
    JsonOrderTotalsRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def order_totals_repository() -> JsonOrderTotalsRepository:
    return JsonOrderTotalsRepository(settings().data_dir / "order_totals.json")
