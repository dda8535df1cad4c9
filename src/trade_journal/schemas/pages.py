"""Page snapshots served by the dashboard routes."""
from datetime import datetime
from enum import Enum

from trade_journal.schemas.models import (CamelModel, NotificationPreferences,
                                          PriceAlert, Stock, Trade)


class TradeFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    CLOSED = "closed"


class SortKey(str, Enum):
    SYMBOL = "symbol"
    NAME = "name"
    PRICE = "price"
    DAILY = "daily"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class TimeRange(str, Enum):
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    ALL = "ALL"


class AlertDirection(str, Enum):
    ABOVE = "above"
    BELOW = "below"


class PageModel(CamelModel):
    error: str | None = None


class TradeRow(CamelModel):
    """A trade with its resolved P&L and percent change (None when unknown)."""

    trade: Trade
    pnl: float | None = None
    percent_change: float | None = None
    can_sell: bool = False
    can_delete: bool = False


class DashboardPage(PageModel):
    live: bool = False
    active_positions: int = 0
    total_pnl: float = 0.0
    win_rate: float = 0.0
    total_trades: int = 0
    positions: list[TradeRow] = []


class TradesPage(PageModel):
    filter: TradeFilter = TradeFilter.ALL
    active_positions: int = 0
    closed_positions: int = 0
    total_pnl: float = 0.0
    trades: list[TradeRow] = []


class StockRow(CamelModel):
    stock: Stock
    daily_change: float | None = None
    daily_change_percent: float | None = None


class MarketPage(PageModel):
    search: str = ""
    sort_key: SortKey = SortKey.SYMBOL
    sort_direction: SortDirection = SortDirection.ASCENDING
    stocks: list[StockRow] = []


class ChartPoint(CamelModel):
    date: datetime
    price: float


class StockDetailPage(PageModel):
    stock: Stock | None = None
    three_day_change: float | None = None
    weekly_change: float | None = None
    time_range: TimeRange = TimeRange.ONE_MONTH
    chart: list[ChartPoint] = []
    chart_min: float = 0.0
    chart_max: float = 100.0
    message: str | None = None


class AlertsPage(PageModel):
    alerts: list[PriceAlert] = []


class NotificationsPage(PageModel):
    preferences: NotificationPreferences = NotificationPreferences()
    success: str | None = None


class ProfilePage(PageModel):
    username: str = ""
    trades_count: int = 0
    win_rate: float = 0.0
    avg_pnl_per_trade: float = 0.0
    total_pnl: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0


class LoginPage(CamelModel):
    authenticated: bool
    username: str | None = None
    location: str
