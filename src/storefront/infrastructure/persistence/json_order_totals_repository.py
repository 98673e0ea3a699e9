"""JSON-file-backed implementation of OrderTotalsRepository."""

from __future__ import annotations

import json
from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_totals_repository import OrderTotalsRepository


class JsonOrderTotalsRepository(OrderTotalsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderTotalsRepository interface --------------------------------------

    def get_totals(self, order_ids: Iterable[str]) -> dict[str, Money]:
        stored = self._load()
        return {oid: stored.get(oid, Money.zero()) for oid in order_ids}

    def save_totals(self, totals: dict[str, Money]) -> None:
        stored = self._load()
        stored.update(totals)
        self._persist(stored)

    def list_all(self) -> dict[str, Money]:
        return self._load()

    # --- Serialization --------------------------------------------------------

    def _load(self) -> dict[str, Money]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["order_id"]: Money(Decimal(item["total"]), item.get("currency", "USD"))
            for item in raw
        }

    def _persist(self, totals: dict[str, Money]) -> None:
        raw = [
            {
                "order_id": order_id,
                "total": str(total.amount),
                "currency": total.currency,
            }
            for order_id, total in sorted(totals.items())
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
