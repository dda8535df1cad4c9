"""Market list: every stock with live price, daily change, search and sort."""
import logging
from collections.abc import Callable

from trade_journal import metrics
from trade_journal.client import JournalApiClient, RequestFailed
from trade_journal.polling import PricePoller, merge_stock_prices
from trade_journal.schemas import (MarketPage, SortDirection, SortKey, Stock,
                                   StockPrice, StockRow)
from trade_journal.views.base import PageView

logger = logging.getLogger(__name__)

SortValue = Callable[[StockRow], str | float]


def _daily_percent(row: StockRow) -> float:
    # Rows without a previous close sort as unchanged.
    return row.daily_change_percent if row.daily_change_percent is not None else 0.0


SORT_VALUES: dict[SortKey, SortValue] = {
    SortKey.SYMBOL: lambda row: row.stock.symbol,
    SortKey.NAME: lambda row: row.stock.name,
    SortKey.PRICE: lambda row: row.stock.price,
    SortKey.DAILY: _daily_percent,
}


def matches_search(stock: Stock, term: str) -> bool:
    """Case-insensitive match on symbol or name; empty term matches all."""
    needle = term.strip().lower()
    return not needle or needle in stock.symbol.lower() or needle in stock.name.lower()


def sort_rows(rows: list[StockRow], key: SortKey, direction: SortDirection) -> list[StockRow]:
    """Stable sort of rows by a typed key."""
    return sorted(
        rows,
        key=SORT_VALUES[key],
        reverse=direction is SortDirection.DESCENDING,
    )


class MarketView(PageView):
    """Stock list. Yesterday's price per stock comes from its history at load time."""

    live_prices = True

    def __init__(self, client: JournalApiClient, poller: PricePoller) -> None:
        super().__init__(client, poller)
        self.stocks: list[Stock] = []
        self.yesterday_prices: dict[int, float] = {}
        self.search = ""
        self.sort_key = SortKey.SYMBOL
        self.sort_direction = SortDirection.ASCENDING

    async def _load(self) -> tuple[list[Stock], dict[int, float]]:
        stocks = await self._client.list_stocks()
        yesterday: dict[int, float] = {}
        for stock in stocks:
            try:
                history = metrics.sort_history(await self._client.get_stock_history(stock.id))
            except RequestFailed as exc:
                logger.warning("Failed to fetch history for stock %s: %s", stock.id, exc.message)
                continue
            previous = metrics.previous_close(history)
            if previous is not None:
                yesterday[stock.id] = previous
        return stocks, yesterday

    def _apply(self, data: tuple[list[Stock], dict[int, float]]) -> None:
        self.stocks, self.yesterday_prices = data

    def on_prices(self, prices: list[StockPrice]) -> None:
        self.stocks = merge_stock_prices(self.stocks, prices)

    def set_search(self, term: str) -> None:
        self.search = term

    def request_sort(self, key: SortKey) -> None:
        """Sort by key; asking again for the ascending key flips to descending."""
        direction = SortDirection.ASCENDING
        if self.sort_key is key and self.sort_direction is SortDirection.ASCENDING:
            direction = SortDirection.DESCENDING
        self.sort_key = key
        self.sort_direction = direction

    def set_sort(self, key: SortKey, direction: SortDirection) -> None:
        self.sort_key = key
        self.sort_direction = direction

    def row(self, stock: Stock) -> StockRow:
        change = metrics.daily_change(stock.price, self.yesterday_prices.get(stock.id))
        return StockRow(
            stock=stock,
            daily_change=change.value if change else None,
            daily_change_percent=change.percentage if change else None,
        )

    def rows(self) -> list[StockRow]:
        visible = [self.row(s) for s in self.stocks if matches_search(s, self.search)]
        return sort_rows(visible, self.sort_key, self.sort_direction)

    def snapshot(self) -> MarketPage:
        return MarketPage(
            error=self.error,
            search=self.search,
            sort_key=self.sort_key,
            sort_direction=self.sort_direction,
            stocks=self.rows(),
        )
