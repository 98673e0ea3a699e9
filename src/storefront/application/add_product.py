"""Application service: register a product in the catalogue.

A product enters the catalogue with its price and its opening stock
level, so it can show up in in-stock listings straight away.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO
from storefront.application.mappers import product_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock_quantity: int = 0,
        currency: str = "USD",
    ) -> ProductDTO:
        """Register *name* at *price* with *stock_quantity* units on hand.

        Raises ValidationError for a blank or already-listed name, a bad
        price, or negative stock.
        """
        display_name = (name or "").strip()
        if not display_name:
            raise ValidationError("Product name is required")
        if self._product_repo.get_by_name(display_name) is not None:
            raise ValidationError(f"Product '{display_name}' already exists")

        product = Product(
            id=self._allocate_id(),
            name=display_name,
            unit_price=Money.of(price, currency),
            stock_quantity=stock_quantity,
        )
        self._product_repo.save(product)
        logger.info(
            "Product registered",
            product_id=product.id,
            price=str(product.unit_price.amount),
            stock=product.stock_quantity,
        )
        return product_to_dto(product)

    def _allocate_id(self) -> str:
        # Catalogues imported from elsewhere may hold non-numeric ids.
        taken = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        return str(max(taken, default=0) + 1)
