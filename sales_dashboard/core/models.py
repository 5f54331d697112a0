# sales_dashboard/core/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping


@dataclass(frozen=True)
class Transaction:
    id: int
    title: str
    description: str
    price: Decimal | None
    category: str
    sold: bool
    date_of_sale: datetime | None
    image: str = ""

    @property
    def month(self) -> int | None:
        return self.date_of_sale.month if self.date_of_sale else None

    @property
    def price_text(self) -> str:
        """Price as it reads in the catalog: ``150``, ``329.85``."""
        if self.price is None:
            return ""
        return format(self.price.normalize(), "f")


def _to_price(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not price.is_finite():
        return None
    return price


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "sold"}
    return bool(value)


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    # pandas hands back NaN for empty CSV cells
    if isinstance(value, float) and value != value:
        return ""
    return str(value)


def transaction_from_record(record: Mapping[str, Any]) -> Transaction:
    """Convert one raw catalog record into a :class:`Transaction`.

    Only ``id`` is mandatory. A price or sale date that cannot be read is kept
    as ``None`` so the record still shows up in listings while aggregation
    leaves it out.
    """
    if not isinstance(record, Mapping):
        raise ValueError(f"Transaction record must be an object, got {type(record).__name__}")
    raw_id = record.get("id")
    if raw_id is None or isinstance(raw_id, bool):
        raise ValueError(f"Missing 'id' in transaction record: {record}")
    try:
        tx_id = int(raw_id)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid 'id' in transaction record: {raw_id!r}")

    return Transaction(
        id=tx_id,
        title=_to_text(record.get("title")).strip(),
        description=_to_text(record.get("description")).strip(),
        price=_to_price(record.get("price")),
        category=_to_text(record.get("category")).strip(),
        sold=_to_bool(record.get("sold", False)),
        date_of_sale=_to_datetime(record.get("dateOfSale")),
        image=_to_text(record.get("image")).strip(),
    )


def transaction_to_dict(tx: Transaction) -> dict:
    """JSON-friendly view of a transaction, using the catalog's field names."""
    return {
        "id": tx.id,
        "title": tx.title,
        "description": tx.description,
        "price": float(tx.price) if tx.price is not None else None,
        "category": tx.category,
        "sold": tx.sold,
        "dateOfSale": tx.date_of_sale.isoformat() if tx.date_of_sale else None,
        "image": tx.image,
    }
