"""Profile page: trading statistics for the signed-in user."""
import asyncio

from trade_journal import metrics
from trade_journal.client import JournalApiClient
from trade_journal.polling import PricePoller, merge_trade_prices
from trade_journal.schemas import ProfilePage, Trade
from trade_journal.views.base import PageView


class ProfileView(PageView):
    """Stats use prices fetched at load time; the page does not poll."""

    def __init__(self, client: JournalApiClient, poller: PricePoller, username: str = "") -> None:
        super().__init__(client, poller)
        self.username = username
        self.trades: list[Trade] = []

    async def _load(self) -> list[Trade]:
        trades, prices = await asyncio.gather(
            self._client.list_trades(), self._client.list_stock_prices()
        )
        return merge_trade_prices(trades, prices)

    def _apply(self, data: list[Trade]) -> None:
        self.trades = data

    def snapshot(self) -> ProfilePage:
        trades = self.trades
        return ProfilePage(
            error=self.error,
            username=self.username,
            trades_count=len(trades),
            win_rate=metrics.round2(metrics.win_rate(trades)),
            avg_pnl_per_trade=metrics.average_pnl(trades),
            total_pnl=metrics.total_pnl(trades),
            best_trade=metrics.best_trade(trades),
            worst_trade=metrics.worst_trade(trades),
        )
