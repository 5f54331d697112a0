# sales_dashboard/utils.py
from __future__ import annotations

from dataclasses import dataclass
from math import ceil
from typing import Iterable, List, Sequence

from sales_dashboard.core.models import Transaction


@dataclass(frozen=True)
class Page:
    items: List[Transaction]
    page: int
    total_pages: int
    total: int


def filter_transactions_by_month(transactions, month):
    """
    Return only those transactions sold in the given calendar month (1-12).
    With no month every transaction is kept.
    """
    if month is None:
        return list(transactions)
    return [tx for tx in transactions if tx.month == month]


def search_transactions(transactions: Iterable[Transaction], query: str | None) -> List[Transaction]:
    """Case-insensitive match on title, description or the price as text."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(transactions)
    return [
        tx for tx in transactions
        if needle in tx.title.lower()
        or needle in tx.description.lower()
        or needle in tx.price_text
    ]


def paginate(items: Sequence[Transaction], page: int, per_page: int) -> Page:
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    total = len(items)
    total_pages = max(1, ceil(total / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return Page(items=list(items[start:start + per_page]), page=page, total_pages=total_pages, total=total)


def dedupe_transactions(transactions):
    """
    Remove duplicates based on id, keeping the first occurrence.
    """
    seen = set()
    unique = []
    for tx in transactions:
        if tx.id not in seen:
            seen.add(tx.id)
            unique.append(tx)
    return unique
