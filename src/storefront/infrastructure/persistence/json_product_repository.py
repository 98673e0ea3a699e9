"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.exceptions import UpstreamQueryError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        products = self._load()
        return {pid: products[pid] for pid in product_ids if pid in products}

    def search(self, search_term: str, in_stock_only: bool) -> list[Product]:
        term = search_term.lower()
        return [
            p
            for p in self._load().values()
            if term in p.name.lower() and (p.has_stock or not in_stock_only)
        ]

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {
                item["id"]: Product(
                    id=item["id"],
                    name=item["name"],
                    unit_price=Money(
                        Decimal(item["unit_price"]), item.get("currency", "USD")
                    ),
                    stock_quantity=item.get("stock_quantity", 0),
                )
                for item in raw
            }
        except (OSError, ValueError, KeyError, InvalidOperation) as exc:
            raise UpstreamQueryError(
                f"Could not read products from {self._file_path}: {exc}"
            ) from exc

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "unit_price": str(p.unit_price.amount),
                "currency": p.unit_price.currency,
                "stock_quantity": p.stock_quantity,
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
