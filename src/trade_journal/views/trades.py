"""Trade history page: every trade, filterable, with sell and delete."""
import asyncio

from trade_journal import metrics
from trade_journal.client import JournalApiClient, ValidationError
from trade_journal.polling import PricePoller, merge_trade_prices
from trade_journal.schemas import StockPrice, Trade, TradeFilter, TradesPage
from trade_journal.views.base import PageView
from trade_journal.views.dashboard import sell_pnl
from trade_journal.views.rows import trade_row


def filter_trades(trades: list[Trade], trade_filter: TradeFilter) -> list[Trade]:
    if trade_filter is TradeFilter.ACTIVE:
        return [t for t in trades if t.is_holding]
    if trade_filter is TradeFilter.CLOSED:
        return [t for t in trades if not t.is_holding]
    return list(trades)


class TradesView(PageView):
    live_prices = True

    def __init__(self, client: JournalApiClient, poller: PricePoller) -> None:
        super().__init__(client, poller)
        self.trades: list[Trade] = []
        self.filter = TradeFilter.ALL

    async def _load(self) -> list[Trade]:
        trades, prices = await asyncio.gather(
            self._client.list_trades(), self._client.list_stock_prices()
        )
        return merge_trade_prices(trades, prices)

    def _apply(self, data: list[Trade]) -> None:
        self.trades = data

    def on_prices(self, prices: list[StockPrice]) -> None:
        self.trades = merge_trade_prices(self.trades, prices)

    def set_filter(self, trade_filter: TradeFilter) -> None:
        self.filter = trade_filter

    def _get(self, trade_id: int) -> Trade:
        trade = next((t for t in self.trades if t.id == trade_id), None)
        if trade is None:
            raise ValidationError(f"Trade {trade_id} is not on this page")
        return trade

    async def sell(self, trade_id: int) -> None:
        pnl = sell_pnl(self._get(trade_id))
        await self._run_action(
            "Failed to sell trade", lambda: self._client.sell_trade(trade_id, pnl)
        )

    async def delete(self, trade_id: int) -> None:
        """Delete a closed trade, then refetch.

        Raises:
            ValidationError: The trade is still held.
        """
        if self._get(trade_id).is_holding:
            raise ValidationError("Only closed trades can be deleted")
        await self._run_action(
            "Failed to delete trade", lambda: self._client.delete_trade(trade_id)
        )

    def snapshot(self) -> TradesPage:
        return TradesPage(
            error=self.error,
            filter=self.filter,
            active_positions=sum(1 for t in self.trades if t.is_holding),
            closed_positions=sum(1 for t in self.trades if not t.is_holding),
            total_pnl=metrics.total_pnl(self.trades),
            trades=[trade_row(t) for t in filter_trades(self.trades, self.filter)],
        )
