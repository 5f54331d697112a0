"""Month filtering, price-range histogram and sales totals.

Everything here is a pure function of ``(transactions, month)``: inputs are
never mutated, nothing is cached between calls and no I/O happens. Records
whose price is missing, unreadable or negative are left out of every bucket
and every total; records without a sale date never match a month.

When no month is selected (``month is None``) nothing matches, so the
histogram comes back with all counts at zero and the summary is empty.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence

from sales_dashboard.core.models import Transaction

DEFAULT_PRICE_THRESHOLDS = (0, 100, 200, 300, 400, 500, 600, 700, 800, 900)


@dataclass(frozen=True)
class PriceRange:
    label: str
    count: int

    def as_dict(self) -> dict:
        return {"rangeLabel": self.label, "count": self.count}


@dataclass(frozen=True)
class SalesSummary:
    total_sale: Decimal
    total_sold: int
    total_not_sold: int

    def as_dict(self) -> dict:
        return {
            "totalSale": float(self.total_sale),
            "totalSold": self.total_sold,
            "totalNotSold": self.total_not_sold,
        }


@dataclass(frozen=True)
class MonthlyAggregate:
    month: int | None
    price_ranges: List[PriceRange]
    summary: SalesSummary


def matches_month(tx: Transaction, month: int | None) -> bool:
    if month is None:
        return False
    return tx.month == month


def _has_valid_price(tx: Transaction) -> bool:
    return tx.price is not None and tx.price >= 0


def _format_bound(value) -> str:
    number = Decimal(str(value))
    return format(number.normalize(), "f") if number != number.to_integral_value() else str(int(number))


def _validate_thresholds(thresholds: Sequence) -> List[Decimal]:
    bounds = [Decimal(str(b)) for b in thresholds]
    if not bounds:
        raise ValueError("price thresholds must not be empty")
    if bounds[0] < 0:
        raise ValueError("price thresholds must be non-negative")
    for lower, upper in zip(bounds, bounds[1:]):
        if upper <= lower:
            raise ValueError(f"price thresholds must be strictly ascending: {list(thresholds)}")
    return bounds


def range_labels(thresholds: Sequence = DEFAULT_PRICE_THRESHOLDS) -> List[str]:
    """Labels of the price buckets in threshold order: ``0-100`` ... ``900+``."""
    bounds = _validate_thresholds(thresholds)
    labels = [
        f"{_format_bound(lower)}-{_format_bound(upper)}"
        for lower, upper in zip(bounds, bounds[1:])
    ]
    labels.append(f"{_format_bound(bounds[-1])}+")
    return labels


def bucket_index(price: Decimal, bounds: Sequence[Decimal]) -> int | None:
    """Index of the bucket holding ``price``; a boundary price goes up."""
    idx = bisect_right(bounds, price) - 1
    return idx if idx >= 0 else None


def aggregate(
    transactions: Iterable[Transaction],
    month: int | None,
    thresholds: Sequence = DEFAULT_PRICE_THRESHOLDS,
) -> MonthlyAggregate:
    """Histogram and totals for ``month`` computed in a single pass."""
    bounds = _validate_thresholds(thresholds)
    labels = range_labels(thresholds)
    counts = [0] * len(bounds)
    total_sale = Decimal("0")
    total_sold = 0
    total_not_sold = 0

    for tx in tuple(transactions):
        if not matches_month(tx, month) or not _has_valid_price(tx):
            continue
        idx = bucket_index(tx.price, bounds)
        if idx is not None:
            counts[idx] += 1
        if tx.sold:
            total_sale += tx.price
            total_sold += 1
        else:
            total_not_sold += 1

    return MonthlyAggregate(
        month=month,
        price_ranges=[PriceRange(label, count) for label, count in zip(labels, counts)],
        summary=SalesSummary(total_sale, total_sold, total_not_sold),
    )


def price_range_histogram(
    transactions: Iterable[Transaction],
    month: int | None,
    thresholds: Sequence = DEFAULT_PRICE_THRESHOLDS,
) -> List[PriceRange]:
    return aggregate(transactions, month, thresholds).price_ranges


def sales_summary(transactions: Iterable[Transaction], month: int | None) -> SalesSummary:
    return aggregate(transactions, month).summary


def format_currency(amount: Decimal) -> str:
    """Render an amount for display, e.g. ``$1,234.50``."""
    return f"${amount.quantize(Decimal('0.01')):,.2f}"
