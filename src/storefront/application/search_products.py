"""Application service: Search Products use case (query)."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductListingDTO
from storefront.application.mappers import product_to_dto
from storefront.domain.exceptions import UpstreamQueryError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def query(self, search_term: str, in_stock_only: bool) -> list[Product]:
        """Run one product query, letting UpstreamQueryError propagate."""
        products = self._product_repo.search(search_term.strip(), in_stock_only)
        logger.debug(
            "Product query returned",
            search_term=search_term,
            in_stock_only=in_stock_only,
            count=len(products),
        )
        return products

    def handle(self, search_term: str, in_stock_only: bool) -> ProductListingDTO:
        """Run one product query.

        Called again by the UI whenever the search term or the stock
        filter changes.  A failing data source yields an empty listing
        with the source's message; nothing is retried.
        """
        try:
            products = self.query(search_term, in_stock_only)
        except UpstreamQueryError as exc:
            logger.error("Product query failed", search_term=search_term, error=str(exc))
            return ProductListingDTO(products=[], error=str(exc) or "Unknown error occurred")

        return ProductListingDTO(products=[product_to_dto(p) for p in products])
