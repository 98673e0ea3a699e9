"""Application service: one shopper's catalogue session.

Holds the state a storefront view keeps between user actions: the
current product query, the listing it produced, per-product quantity
inputs and the cart.  Each action is a plain synchronous call; the UI
layer re-invokes the query actions itself whenever its inputs change
and turns raised DomainExceptions into user-visible messages.
"""

from __future__ import annotations

import structlog

from storefront.application.cart_events import CartEventPublisher
from storefront.application.dto import CartSummaryDTO, ProductListingDTO
from storefront.application.mappers import cart_to_summary, product_to_dto
from storefront.application.search_products import SearchProductsHandler
from storefront.domain.exceptions import EmptyCartError, ProductNotFound, UpstreamQueryError
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.cart_aggregator import CartAggregator
from storefront.domain.service.stock_guard import StockGuard

logger = structlog.get_logger(__name__)

DEFAULT_QUANTITY = 1


class CatalogSession:

    def __init__(
        self,
        product_repo: ProductRepository,
        publisher: CartEventPublisher,
        in_stock_only: bool = True,
    ) -> None:
        self._search = SearchProductsHandler(product_repo)
        self._publisher = publisher
        self._default_in_stock_only = in_stock_only

        self.search_term = ""
        self.in_stock_only = in_stock_only
        self.error: str | None = None
        self.cart = Cart.empty()
        self._products: dict[str, Product] = {}
        self._quantities: dict[str, int] = {}

    # --- Product query --------------------------------------------------------

    def load(self) -> ProductListingDTO:
        """Re-run the product query with the current search inputs."""
        try:
            products = self._search.query(self.search_term, self.in_stock_only)
        except UpstreamQueryError as exc:
            self._products = {}
            self.error = str(exc) or "Unknown error occurred"
            logger.error("Error loading products", error=self.error)
        else:
            self._products = {p.id: p for p in products}
            self.error = None
        return self.listing

    def change_search(self, search_term: str) -> ProductListingDTO:
        self.search_term = search_term
        return self.load()

    def toggle_in_stock_only(self, in_stock_only: bool) -> ProductListingDTO:
        self.in_stock_only = in_stock_only
        return self.load()

    def refresh(self) -> ProductListingDTO:
        """Reset search inputs to their defaults and query again."""
        self.search_term = ""
        self.in_stock_only = self._default_in_stock_only
        self.error = None
        return self.load()

    @property
    def listing(self) -> ProductListingDTO:
        return ProductListingDTO(
            products=[product_to_dto(p) for p in self._products.values()],
            error=self.error,
        )

    # --- Cart -----------------------------------------------------------------

    def set_quantity(self, product_id: str, quantity: int) -> None:
        self._quantities[product_id] = quantity

    def quantity_for(self, product_id: str) -> int:
        return self._quantities.get(product_id, DEFAULT_QUANTITY)

    def add_to_cart(self, product_id: str) -> CartSummaryDTO:
        """Add the chosen quantity of a listed product to the cart.

        Raises ProductNotFound if the product is not in the current
        listing, InvalidQuantity / InsufficientStock if the quantity is
        rejected.  The quantity input resets to 1 on success.

        Only the quantity being added is checked against stock, not
        the total the cart would then hold for the product.
        """
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)

        quantity = self.quantity_for(product_id)
        StockGuard.validate(quantity, product.stock_quantity).raise_for_error()

        self.cart = CartAggregator.add_line(self.cart, product, quantity)
        self._quantities[product_id] = DEFAULT_QUANTITY

        logger.info(
            "Added to cart",
            product_id=product.id,
            quantity=quantity,
            cart_items=self.cart.item_count,
        )
        return cart_to_summary(self.cart)

    def view_cart(self) -> CartSummaryDTO:
        summary = cart_to_summary(self.cart)
        self._publisher.view_cart(summary)
        return summary

    def checkout(self) -> CartSummaryDTO:
        if self.cart.is_empty:
            raise EmptyCartError("Add some products to your cart first!")
        summary = cart_to_summary(self.cart)
        self._publisher.checkout(summary)
        logger.info(
            "Checkout started",
            total_items=summary.total_items,
            total_value=summary.total_value,
        )
        return summary
