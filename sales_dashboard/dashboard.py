from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence

from sales_dashboard.core.aggregation import (
    DEFAULT_PRICE_THRESHOLDS,
    PriceRange,
    SalesSummary,
    aggregate,
)
from sales_dashboard.core.models import Transaction
from sales_dashboard.core.positioning import BoxOffset
from sales_dashboard.utils import filter_transactions_by_month, paginate, search_transactions

DEFAULT_PAGE_SIZE = 10


def validate_month(month: int | None) -> int | None:
    if month is None:
        return None
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    return month


def month_name(month: int | None) -> str:
    return calendar.month_name[month] if month else "Select Month"


@dataclass(frozen=True)
class ViewState:
    """Everything the user has chosen on screen. Transitions return new values."""

    search: str = ""
    month: int | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    stats_visible: bool = True
    box: BoxOffset | None = None

    def __post_init__(self) -> None:
        validate_month(self.month)
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

    def with_search(self, search: str) -> "ViewState":
        return replace(self, search=search, page=1)

    def with_month(self, month: int | None) -> "ViewState":
        return replace(self, month=validate_month(month), page=1)

    def with_page(self, page: int) -> "ViewState":
        return replace(self, page=max(page, 1))

    def next_page(self, total_pages: int) -> "ViewState":
        return replace(self, page=min(self.page + 1, max(total_pages, 1)))

    def previous_page(self) -> "ViewState":
        return replace(self, page=max(self.page - 1, 1))

    def hide_stats(self) -> "ViewState":
        return replace(self, stats_visible=False)

    def moved_to(self, box: BoxOffset) -> "ViewState":
        return replace(self, box=box)


@dataclass(frozen=True)
class Dashboard:
    view: ViewState
    rows: List[Transaction]
    page: int
    total_pages: int
    total_matches: int
    price_ranges: List[PriceRange]
    summary: SalesSummary

    @property
    def month_label(self) -> str:
        return month_name(self.view.month)

    @property
    def chart_title(self) -> str:
        return f"Month {self.view.month}" if self.view.month else "Select a month"

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def build_dashboard(
    transactions: Iterable[Transaction],
    view: ViewState,
    thresholds: Sequence = DEFAULT_PRICE_THRESHOLDS,
) -> Dashboard:
    snapshot = tuple(transactions)
    listed = search_transactions(filter_transactions_by_month(snapshot, view.month), view.search)
    page = paginate(listed, view.page, view.page_size)
    monthly = aggregate(snapshot, view.month, thresholds)
    return Dashboard(
        view=view,
        rows=page.items,
        page=page.page,
        total_pages=page.total_pages,
        total_matches=page.total,
        price_ranges=monthly.price_ranges,
        summary=monthly.summary,
    )
