"""Merge partial price updates into already-loaded lists.

Merges match rows by key and replace only the price field. They never add,
remove, or reorder rows, so sort order and attached fields survive every poll.
"""
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from trade_journal.schemas import Stock, StockPrice, Trade

T = TypeVar("T")


def index_prices(prices: Iterable[StockPrice]) -> dict[int, float]:
    """Map stock id -> latest price; later entries win."""
    return {p.id: p.price for p in prices}


def reconcile_by_key(
    items: Sequence[Mapping[str, Any]],
    updates: Iterable[Mapping[str, Any]],
    *,
    key: str = "id",
    field: str = "price",
) -> list[dict[str, Any]]:
    """Plain-dict form of the merge: copy `field` from matching updates onto items.

    >>> reconcile_by_key([{"id": 1, "price": 10}, {"id": 2, "price": 20}],
    ...                  [{"id": 1, "price": 11}])
    [{'id': 1, 'price': 11}, {'id': 2, 'price': 20}]
    """
    latest = {u[key]: u[field] for u in updates if key in u and field in u}
    merged: list[dict[str, Any]] = []
    for item in items:
        row = dict(item)
        if row.get(key) in latest:
            row[field] = latest[row[key]]
        merged.append(row)
    return merged


def _merge(
    items: Sequence[T],
    prices: Mapping[int, float],
    key: Callable[[T], Hashable],
    apply: Callable[[T, float], T],
) -> list[T]:
    merged: list[T] = []
    for item in items:
        price = prices.get(key(item))
        merged.append(item if price is None else apply(item, price))
    return merged


def merge_stock_prices(stocks: Sequence[Stock], prices: Iterable[StockPrice]) -> list[Stock]:
    """Replace each stock's price with its update, if one arrived."""
    return _merge(
        stocks,
        index_prices(prices),
        key=lambda s: s.id,
        apply=lambda s, price: s.model_copy(update={"price": price}),
    )


def merge_stock_price(stock: Stock, prices: Iterable[StockPrice]) -> Stock:
    return merge_stock_prices([stock], prices)[0]


def merge_trade_prices(trades: Sequence[Trade], prices: Iterable[StockPrice]) -> list[Trade]:
    """Attach the live price to holdings; closed trades are left as they are."""
    return _merge(
        trades,
        index_prices(prices),
        key=lambda t: t.stock_id if t.is_holding else None,
        apply=lambda t, price: t.model_copy(update={"current_price": price}),
    )
