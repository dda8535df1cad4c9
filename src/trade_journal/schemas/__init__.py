"""Pydantic schemas for journal API entities and dashboard pages. Not persisted."""
from trade_journal.schemas.models import (CamelModel, CreatePriceAlertRequest,
                                          CreateTradeRequest, LoginCredentials,
                                          NotificationPreferences, PriceAlert,
                                          Stock, StockPrice, StockPricePoint,
                                          Trade, UpdateTradeRequest, User)
from trade_journal.schemas.pages import (AlertDirection, AlertsPage,
                                         ChartPoint, DashboardPage, LoginPage,
                                         MarketPage, NotificationsPage,
                                         PageModel, ProfilePage, SortDirection,
                                         SortKey, StockDetailPage, StockRow,
                                         TimeRange, TradeFilter, TradeRow,
                                         TradesPage)

__all__ = [
    "AlertDirection",
    "AlertsPage",
    "CamelModel",
    "ChartPoint",
    "CreatePriceAlertRequest",
    "CreateTradeRequest",
    "DashboardPage",
    "LoginCredentials",
    "LoginPage",
    "MarketPage",
    "NotificationPreferences",
    "NotificationsPage",
    "PageModel",
    "PriceAlert",
    "ProfilePage",
    "SortDirection",
    "SortKey",
    "Stock",
    "StockDetailPage",
    "StockPrice",
    "StockPricePoint",
    "StockRow",
    "TimeRange",
    "Trade",
    "TradeFilter",
    "TradeRow",
    "TradesPage",
    "UpdateTradeRequest",
    "User",
]
