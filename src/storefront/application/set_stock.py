"""Application service: Set Stock use case."""

from __future__ import annotations

from dataclasses import replace

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_name: str, quantity: int) -> Product:
        """Set the stock level for a product.

        Products are immutable snapshots, so a new snapshot replaces
        the stored one.
        """
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")

        updated = replace(product, stock_quantity=quantity)
        self._product_repo.save(updated)
        return updated
