"""Abstract repository for aggregate order totals."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from storefront.domain.model.value_objects import Money


class OrderTotalsRepository(ABC):

    @abstractmethod
    def get_totals(self, order_ids: Iterable[str]) -> dict[str, Money]:
        """Return the current total for every order in *order_ids*.

        Orders with no stored total map to zero.
        """

    @abstractmethod
    def save_totals(self, totals: dict[str, Money]) -> None:
        """Persist several order totals in one round-trip."""
