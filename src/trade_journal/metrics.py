"""Derived metrics over trades and price history.

All functions are pure; pages recompute them from current state on every
snapshot.
"""
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from trade_journal.schemas import StockPricePoint, Trade

DECIMALS = 2

# Positions back from the latest point. The three-day window counts the latest
# close as its first day, so it steps back 2 positions rather than 3:
# [..., 14, 15, 16] compares 16 against 14.
THREE_DAY_LOOKBACK = 2
SEVEN_DAY_LOOKBACK = 7
MIN_HISTORY_FOR_CHANGES = 4


@dataclass(frozen=True)
class PriceChange:
    value: float
    percentage: float


def round2(x: float | None) -> float | None:
    """Round a value to 2 decimal places; preserve None."""
    if x is None:
        return None
    return round(float(x), DECIMALS)


def resolve_pnl(trade: Trade) -> float | None:
    """P&L of a trade, or None for a holding without a known current price.

    Closed trades always report the stored pnl; it is never recomputed.
    """
    if not trade.is_holding:
        return trade.pnl
    if trade.current_price is None:
        return None
    return trade.current_price - trade.entry_price


def trade_pnl(trade: Trade) -> float:
    """Resolved P&L, with unknown holdings contributing zero."""
    pnl = resolve_pnl(trade)
    return pnl if pnl is not None else 0.0


def percent_change(trade: Trade) -> float | None:
    if not trade.entry_price:
        return None
    pnl = resolve_pnl(trade)
    if pnl is None:
        return None
    return pnl / trade.entry_price * 100


def total_pnl(trades: Iterable[Trade]) -> float:
    return sum((trade_pnl(t) for t in trades), 0.0)


def win_rate(trades: Sequence[Trade]) -> float:
    """Percentage of trades with strictly positive resolved P&L.

    Holdings without a current price count toward the total but never win.
    """
    if not trades:
        return 0.0
    winners = 0
    for trade in trades:
        pnl = resolve_pnl(trade)
        if pnl is not None and pnl > 0:
            winners += 1
    return winners / len(trades) * 100


def best_trade(trades: Sequence[Trade]) -> float:
    if not trades:
        return 0.0
    return max(trade_pnl(t) for t in trades)


def worst_trade(trades: Sequence[Trade]) -> float:
    if not trades:
        return 0.0
    return min(trade_pnl(t) for t in trades)


def average_pnl(trades: Sequence[Trade]) -> float:
    if not trades:
        return 0.0
    return round2(total_pnl(trades) / len(trades))


def sort_history(history: Iterable[StockPricePoint]) -> list[StockPricePoint]:
    """Return history ordered ascending by date."""
    return sorted(history, key=lambda point: point.date)


def trailing_change(history: Sequence[StockPricePoint], lookback: int) -> float | None:
    """Percent change from the point `lookback` positions before the last one.

    The baseline index is clamped to 0. Returns None when the history has
    fewer than MIN_HISTORY_FOR_CHANGES points or the baseline price is zero.

    Args:
        history: Price points ordered ascending by date.
        lookback: Positions to step back from the last point.
    """
    if len(history) < MIN_HISTORY_FOR_CHANGES:
        return None
    current = history[-1].price
    baseline = history[max(0, len(history) - 1 - lookback)].price
    if not baseline:
        return None
    return (current - baseline) / baseline * 100


def three_day_change(history: Sequence[StockPricePoint]) -> float | None:
    return trailing_change(history, THREE_DAY_LOOKBACK)


def seven_day_change(history: Sequence[StockPricePoint]) -> float | None:
    return trailing_change(history, SEVEN_DAY_LOOKBACK)


def previous_close(history: Sequence[StockPricePoint]) -> float | None:
    """Price of the second-most-recent point ("yesterday"), if any."""
    if len(history) < 2:
        return None
    return history[-2].price


def daily_change(price: float, yesterday: float | None) -> PriceChange | None:
    """Change of the current price against yesterday's price."""
    if not yesterday:
        return None
    change = price - yesterday
    return PriceChange(value=change, percentage=change / yesterday * 100)
