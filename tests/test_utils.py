import pytest

from sales_dashboard.core.models import transaction_from_record
from sales_dashboard.utils import (
    dedupe_transactions,
    filter_transactions_by_month,
    paginate,
    search_transactions,
)


def _tx(tx_id, title="Item", description="", price=10, date_of_sale="2024-01-01"):
    return transaction_from_record(
        {"id": tx_id, "title": title, "description": description, "price": price, "dateOfSale": date_of_sale}
    )


def test_search_matches_title_description_and_price():
    txs = [
        _tx(1, title="Mens Casual Slim Fit", price=15.99),
        _tx(2, title="Ring", description="Solid GOLD petite micropave", price=168),
        _tx(3, title="SSD", description="fast storage", price=109),
    ]
    assert [tx.id for tx in search_transactions(txs, "slim")] == [1]
    assert [tx.id for tx in search_transactions(txs, "gold")] == [2]
    assert [tx.id for tx in search_transactions(txs, "15.9")] == [1]
    assert [tx.id for tx in search_transactions(txs, "10")] == [3]
    assert search_transactions(txs, "") == txs
    assert search_transactions(txs, "   ") == txs


def test_listing_month_filter_keeps_everything_without_month():
    txs = [_tx(1, date_of_sale="2024-01-03"), _tx(2, date_of_sale="2024-02-03"), _tx(3, date_of_sale="bad")]
    assert [tx.id for tx in filter_transactions_by_month(txs, 2)] == [2]
    assert filter_transactions_by_month(txs, None) == txs


def test_paginate_slices_and_clamps():
    txs = [_tx(i) for i in range(1, 24)]
    first = paginate(txs, 1, 10)
    assert [tx.id for tx in first.items] == list(range(1, 11))
    assert first.total_pages == 3
    assert first.total == 23

    last = paginate(txs, 3, 10)
    assert [tx.id for tx in last.items] == [21, 22, 23]

    assert paginate(txs, 99, 10).page == 3
    assert paginate(txs, 0, 10).page == 1


def test_paginate_empty_has_one_page():
    page = paginate([], 1, 10)
    assert page.items == []
    assert page.total_pages == 1


def test_paginate_rejects_bad_page_size():
    with pytest.raises(ValueError):
        paginate([], 1, 0)


def test_dedupe_keeps_first_id():
    txs = [_tx(1, title="first"), _tx(2), _tx(1, title="second")]
    unique = dedupe_transactions(txs)
    assert [tx.id for tx in unique] == [1, 2]
    assert unique[0].title == "first"
