"""Outbound port for cart notifications raised to the enclosing UI."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.application.dto import CartSummaryDTO


class CartEventPublisher(ABC):

    @abstractmethod
    def view_cart(self, summary: CartSummaryDTO) -> None:
        """The shopper asked to see the cart."""

    @abstractmethod
    def checkout(self, summary: CartSummaryDTO) -> None:
        """The shopper started checkout with a non-empty cart."""
