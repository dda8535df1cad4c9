"""Price polling and reconciliation of live prices into loaded lists."""
from trade_journal.polling.price_poller import POLL_INTERVAL_SECONDS, PricePoller
from trade_journal.polling.reconcile import (merge_stock_price,
                                             merge_stock_prices,
                                             merge_trade_prices,
                                             reconcile_by_key)
from trade_journal.polling.stream_helpers import poll_by_interval

__all__ = [
    "POLL_INTERVAL_SECONDS",
    "PricePoller",
    "merge_stock_price",
    "merge_stock_prices",
    "merge_trade_prices",
    "poll_by_interval",
    "reconcile_by_key",
]
