"""Stock detail page: live price, trailing changes, chart, buy and alerts."""
import calendar
import math
from datetime import datetime, timedelta, timezone

from trade_journal import metrics
from trade_journal.client import JournalApiClient, ValidationError
from trade_journal.polling import PricePoller, merge_stock_price
from trade_journal.schemas import (AlertDirection, ChartPoint,
                                   CreatePriceAlertRequest,
                                   CreateTradeRequest, Stock, StockDetailPage,
                                   StockPrice, StockPricePoint, TimeRange)
from trade_journal.views.base import PageView

CHART_FLOOR = 0.98
CHART_CEILING = 1.02


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _months_before(value: datetime, months: int) -> datetime:
    month_index = value.year * 12 + value.month - 1 - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def range_cutoff(time_range: TimeRange, now: datetime) -> datetime | None:
    """Earliest date shown for a chart range; None means no cutoff."""
    if time_range is TimeRange.ONE_WEEK:
        return now - timedelta(days=7)
    if time_range is TimeRange.ONE_MONTH:
        return _months_before(now, 1)
    if time_range is TimeRange.THREE_MONTHS:
        return _months_before(now, 3)
    if time_range is TimeRange.ONE_YEAR:
        return _months_before(now, 12)
    return None


def chart_points(
    history: list[StockPricePoint], time_range: TimeRange, now: datetime | None = None
) -> list[ChartPoint]:
    """History points inside the range, ascending by date (naive UTC)."""
    now = _naive_utc(now if now is not None else datetime.now(timezone.utc))
    cutoff = range_cutoff(time_range, now)
    points = [ChartPoint(date=_naive_utc(p.date), price=p.price) for p in history]
    if cutoff is not None:
        points = [p for p in points if p.date >= cutoff]
    return sorted(points, key=lambda p: p.date)


def chart_bounds(points: list[ChartPoint]) -> tuple[float, float]:
    if not points:
        return (0.0, 100.0)
    prices = [p.price for p in points]
    return (min(prices) * CHART_FLOOR, max(prices) * CHART_CEILING)


def parse_target_price(value: float | str) -> float:
    """Validate an alert price typed by the user.

    Raises:
        ValidationError: Not a number, not finite, or not positive.
    """
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Please enter a valid price") from None
    if not math.isfinite(price) or price <= 0:
        raise ValidationError("Please enter a valid price")
    return price


class StockDetailView(PageView):
    live_prices = True

    def __init__(self, client: JournalApiClient, poller: PricePoller, stock_id: int) -> None:
        super().__init__(client, poller)
        self.stock_id = stock_id
        self.stock: Stock | None = None
        self.history: list[StockPricePoint] = []
        self.time_range = TimeRange.ONE_MONTH
        self.message: str | None = None

    async def _load(self) -> tuple[Stock, list[StockPricePoint]]:
        stock = await self._client.get_stock(self.stock_id)
        history = await self._client.get_stock_history(self.stock_id)
        return stock, metrics.sort_history(history)

    def _apply(self, data: tuple[Stock, list[StockPricePoint]]) -> None:
        self.stock, self.history = data

    def on_prices(self, prices: list[StockPrice]) -> None:
        if self.stock is not None:
            self.stock = merge_stock_price(self.stock, prices)

    def set_time_range(self, time_range: TimeRange) -> None:
        self.time_range = time_range

    async def buy(self) -> None:
        """Open a holding at the displayed price, then refetch."""
        if self.stock is None:
            raise ValidationError("Stock not loaded")
        request = CreateTradeRequest(
            stock_id=self.stock_id, entry_price=self.stock.price, is_holding=True
        )
        self.message = None
        await self._run_action("Failed to add trade", lambda: self._client.create_trade(request))
        self.message = f"Bought {self.stock.symbol} at {request.entry_price:.2f}"

    async def create_alert(self, target_price: float | str, direction: AlertDirection) -> None:
        """Create a price alert; the price is validated before any call."""
        price = parse_target_price(target_price)
        request = CreatePriceAlertRequest(
            stock_id=self.stock_id,
            target_price=price,
            is_above_target=direction is AlertDirection.ABOVE,
        )
        self.message = None
        await self._run_action(
            "Failed to create alert", lambda: self._client.create_price_alert(request)
        )
        self.message = "Price alert created successfully"

    def snapshot(self, now: datetime | None = None) -> StockDetailPage:
        points = chart_points(self.history, self.time_range, now)
        low, high = chart_bounds(points)
        return StockDetailPage(
            error=self.error,
            stock=self.stock,
            three_day_change=metrics.three_day_change(self.history),
            weekly_change=metrics.seven_day_change(self.history),
            time_range=self.time_range,
            chart=points,
            chart_min=low,
            chart_max=high,
            message=self.message,
        )
