"""Opens page views for routes, keeping one page mounted at a time."""
import logging
from collections.abc import Callable, Hashable

from trade_journal.client import JournalApiClient
from trade_journal.polling import PricePoller
from trade_journal.session import Navigator, Route
from trade_journal.views.alerts import AlertsView
from trade_journal.views.base import PageView
from trade_journal.views.dashboard import DashboardView
from trade_journal.views.market import MarketView
from trade_journal.views.notifications import NotificationsView
from trade_journal.views.profile import ProfileView
from trade_journal.views.stock_detail import StockDetailView
from trade_journal.views.trades import TradesView

logger = logging.getLogger(__name__)


class ViewRegistry:
    """Caches page views by key and mounts the one being shown.

    Opening a page unmounts the previously shown one, like navigating between
    pages in a browser tab. Navigating to the login view unmounts everything
    and forgets cached state, so the next user starts clean.
    """

    def __init__(
        self,
        client: JournalApiClient,
        poller: PricePoller,
        navigator: Navigator,
    ) -> None:
        self._client = client
        self._poller = poller
        self._views: dict[Hashable, PageView] = {}
        self._active: Hashable | None = None
        navigator.add_listener(self._on_navigate)

    @property
    def active(self) -> PageView | None:
        return self._views.get(self._active) if self._active is not None else None

    async def _open(self, key: Hashable, factory: Callable[[], PageView]) -> PageView:
        view = self._views.get(key)
        if view is None:
            view = factory()
            self._views[key] = view
        if self._active != key:
            current = self.active
            if current is not None:
                current.unmount()
            self._active = key
        if not view.mounted:
            logger.debug("Mounting %s", key)
            await view.mount()
        return view

    async def dashboard(self) -> DashboardView:
        return await self._open("dashboard", lambda: DashboardView(self._client, self._poller))

    async def trades(self) -> TradesView:
        return await self._open("trades", lambda: TradesView(self._client, self._poller))

    async def market(self) -> MarketView:
        return await self._open("market", lambda: MarketView(self._client, self._poller))

    async def stock_detail(self, stock_id: int) -> StockDetailView:
        return await self._open(
            ("stock", stock_id),
            lambda: StockDetailView(self._client, self._poller, stock_id),
        )

    async def alerts(self) -> AlertsView:
        return await self._open("alerts", lambda: AlertsView(self._client, self._poller))

    async def notifications(self) -> NotificationsView:
        return await self._open(
            "notifications", lambda: NotificationsView(self._client, self._poller)
        )

    async def profile(self, username: str) -> ProfileView:
        view = await self._open(
            "profile", lambda: ProfileView(self._client, self._poller, username)
        )
        view.username = username
        return view

    def unmount_all(self) -> None:
        for view in self._views.values():
            view.unmount()
        self._views.clear()
        self._active = None

    def _on_navigate(self, route: Route) -> None:
        if route is Route.LOGIN:
            self.unmount_all()
