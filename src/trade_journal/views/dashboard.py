"""Home page: open positions with live prices and portfolio stats."""
import asyncio

from trade_journal import metrics
from trade_journal.client import JournalApiClient, ValidationError
from trade_journal.polling import PricePoller, merge_trade_prices
from trade_journal.schemas import DashboardPage, StockPrice, Trade
from trade_journal.views.base import PageView
from trade_journal.views.rows import trade_row


def sell_pnl(trade: Trade) -> float:
    """P&L to freeze when selling a holding at its current price.

    Raises:
        ValidationError: The trade is closed or has no known current price.
    """
    if not trade.is_holding:
        raise ValidationError("Trade is already closed")
    if trade.current_price is None:
        raise ValidationError("Current price unavailable")
    return trade.current_price - trade.entry_price


class DashboardView(PageView):
    """Stats cover every trade; the positions table lists holdings only."""

    live_prices = True

    def __init__(self, client: JournalApiClient, poller: PricePoller) -> None:
        super().__init__(client, poller)
        self.all_trades: list[Trade] = []

    @property
    def holdings(self) -> list[Trade]:
        return [t for t in self.all_trades if t.is_holding]

    async def _load(self) -> list[Trade]:
        trades, prices = await asyncio.gather(
            self._client.list_trades(), self._client.list_stock_prices()
        )
        return merge_trade_prices(trades, prices)

    def _apply(self, data: list[Trade]) -> None:
        self.all_trades = data

    def on_prices(self, prices: list[StockPrice]) -> None:
        self.all_trades = merge_trade_prices(self.all_trades, prices)

    def find(self, trade_id: int) -> Trade | None:
        return next((t for t in self.all_trades if t.id == trade_id), None)

    async def sell(self, trade_id: int) -> None:
        """Close a holding at its current price, then refetch."""
        trade = self.find(trade_id)
        if trade is None:
            raise ValidationError(f"Trade {trade_id} is not on this page")
        pnl = sell_pnl(trade)
        await self._run_action(
            "Failed to sell trade", lambda: self._client.sell_trade(trade_id, pnl)
        )

    def snapshot(self) -> DashboardPage:
        trades = self.all_trades
        holdings = self.holdings
        return DashboardPage(
            error=self.error,
            live=self._poller.tick_count > 0,
            active_positions=len(holdings),
            total_pnl=metrics.total_pnl(trades),
            win_rate=metrics.win_rate(trades),
            total_trades=len(trades),
            positions=[trade_row(t) for t in holdings],
        )
