"""Page view-models: state, live prices, and actions per dashboard page."""
from trade_journal.views.alerts import AlertsView
from trade_journal.views.base import PageView
from trade_journal.views.dashboard import DashboardView
from trade_journal.views.market import MarketView
from trade_journal.views.notifications import NotificationsView
from trade_journal.views.profile import ProfileView
from trade_journal.views.registry import ViewRegistry
from trade_journal.views.stock_detail import StockDetailView
from trade_journal.views.trades import TradesView

__all__ = [
    "AlertsView",
    "DashboardView",
    "MarketView",
    "NotificationsView",
    "PageView",
    "ProfileView",
    "StockDetailView",
    "TradesView",
    "ViewRegistry",
]
