"""Read change batches from JSON documents.

Expected shape::

    {
      "new_records": [{"id": "L1", "order_id": "O1", "product_id": "P1",
                       "quantity": 2, "unit_price": "9.99"}, ...],
      "old_records": [...]
    }

Either list may be omitted, depending on the operation.  A record may
carry the ``errors`` an earlier before-phase attached to it, so a
rejected record stays excluded when the same file is replayed in an
after-phase.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.model.change_batch import ChangeBatch
from storefront.domain.model.order_line import LineStatus, OrderLineRecord
from storefront.domain.model.value_objects import Money


def load_change_batch(file_path: Path) -> ChangeBatch:
    raw = json.loads(file_path.read_text(encoding="utf-8"))
    return ChangeBatch(
        new_records=_records(raw.get("new_records")),
        old_records=_records(raw.get("old_records")),
    )


def _records(raw: list[dict] | None) -> tuple[OrderLineRecord, ...] | None:
    if raw is None:
        return None
    return tuple(_to_domain(item) for item in raw)


def _to_domain(raw: dict) -> OrderLineRecord:
    currency = raw.get("currency", "USD")
    unit_price = raw.get("unit_price")
    return OrderLineRecord(
        id=raw["id"],
        order_id=raw["order_id"],
        product_id=raw.get("product_id"),
        quantity=_whole_number(raw.get("quantity", 0)),
        unit_price=None if unit_price is None else Money(Decimal(str(unit_price)), currency),
        line_total=Money(Decimal(str(raw.get("line_total", "0.00"))), currency),
        status=LineStatus(raw.get("status", LineStatus.PENDING.value)),
        errors=[str(reason) for reason in raw.get("errors", [])],
    )


def _whole_number(value: object) -> int:
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Quantity must be a whole number, got {value!r}") from exc
    if not number.is_finite() or number != number.to_integral_value():
        raise ValueError(f"Quantity must be a whole number, got {value!r}")
    return int(number)
