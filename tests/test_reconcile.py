from datetime import datetime

from trade_journal.polling import (merge_stock_price, merge_stock_prices,
                                   merge_trade_prices, reconcile_by_key)
from trade_journal.schemas import Stock, StockPrice, Trade


def make_stock(stock_id: int, symbol: str, price: float) -> Stock:
    return Stock(id=stock_id, symbol=symbol, name=symbol.title(), price=price)


def make_trade(trade_id: int, stock_id: int, holding: bool, current=None) -> Trade:
    return Trade(
        id=trade_id, stock_id=stock_id, stock_symbol="X", stock_name="X",
        entry_price=10.0, pnl=1.0, date=datetime(2024, 1, 1),
        is_holding=holding, current_price=current,
    )


def test_reconcile_by_key_updates_only_matching_rows():
    merged = reconcile_by_key(
        [{"id": 1, "price": 10}, {"id": 2, "price": 20}],
        [{"id": 1, "price": 11}],
    )
    assert merged == [{"id": 1, "price": 11}, {"id": 2, "price": 20}]


def test_reconcile_by_key_ignores_unknown_ids_and_keeps_other_fields():
    merged = reconcile_by_key(
        [{"id": 1, "price": 10, "rank": 2}],
        [{"id": 9, "price": 99}, {"id": 1, "price": 12}],
    )
    assert merged == [{"id": 1, "price": 12, "rank": 2}]


def test_merge_stock_prices_preserves_order_and_membership():
    stocks = [make_stock(2, "MSFT", 20.0), make_stock(1, "AAPL", 10.0)]
    merged = merge_stock_prices(stocks, [StockPrice(id=1, price=11.0), StockPrice(id=7, price=1.0)])
    assert [s.id for s in merged] == [2, 1]
    assert [s.price for s in merged] == [20.0, 11.0]
    assert merged[1].name == "Aapl"


def test_merge_stock_price_without_update_returns_same_stock():
    stock = make_stock(1, "AAPL", 10.0)
    assert merge_stock_price(stock, []) is stock


def test_merge_trade_prices_only_touches_holdings():
    trades = [make_trade(1, 5, holding=True), make_trade(2, 5, holding=False)]
    merged = merge_trade_prices(trades, [StockPrice(id=5, price=15.0)])
    assert merged[0].current_price == 15.0
    assert merged[1].current_price is None
    assert merged[1].pnl == 1.0


def test_merge_trade_prices_keeps_last_known_price_when_missing():
    trades = [make_trade(1, 5, holding=True, current=12.0)]
    assert merge_trade_prices(trades, [StockPrice(id=6, price=99.0)])[0].current_price == 12.0
