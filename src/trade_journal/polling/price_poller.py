"""Shared price poller that fans out snapshots to subscribed pages."""
import asyncio
import logging
from collections.abc import Awaitable, Callable

from trade_journal.polling.stream_helpers import poll_by_interval
from trade_journal.schemas import StockPrice

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.5

PriceCallback = Callable[[list[StockPrice]], None]


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class PricePoller:
    """Polls the price-list endpoint on a fixed interval for all mounted pages.

    One loop serves every subscriber, so N mounted pages cost one request per
    tick. The loop starts with the first subscriber and stops when the last
    one unsubscribes; callbacks removed by unsubscribe are never called again.
    """

    def __init__(
        self,
        fetch_prices: Callable[[], Awaitable[list[StockPrice]]],
        interval_seconds: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the poller.

        Args:
            fetch_prices: Async callable returning current prices (client.list_stock_prices).
            interval_seconds: Seconds between ticks.
        """
        self._fetch_prices = fetch_prices
        self._interval = interval_seconds
        self._subscribers: dict[int, PriceCallback] = {}
        self._next_id = 0
        self._task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None
        self.tick_count = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: PriceCallback) -> Callable[[], None]:
        """Register callback for every price snapshot; returns an unsubscribe callable.

        Must be called from a running event loop (the loop task is started here).
        """
        subscription_id = self._next_id
        self._next_id += 1
        self._subscribers[subscription_id] = callback
        if not self.running:
            self._start()

        def unsubscribe() -> None:
            if self._subscribers.pop(subscription_id, None) is not None and not self._subscribers:
                self._halt()

        return unsubscribe

    def publish(self, prices: list[StockPrice]) -> None:
        """Deliver a snapshot to current subscribers."""
        for subscription_id, callback in list(self._subscribers.items()):
            if subscription_id not in self._subscribers:
                continue
            try:
                callback(prices)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Price subscriber failed")

    async def poll_once(self) -> list[StockPrice]:
        """Fetch one snapshot and publish it; errors propagate to the caller."""
        prices = await self._fetch_prices()
        self.publish(prices)
        return prices

    async def stop(self) -> None:
        """Drop all subscribers and wait for the loop to finish."""
        self._subscribers.clear()
        task = self._task
        self._halt()
        if task is not None and task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _tick(self) -> None:
        self.tick_count += 1

    def _start(self) -> None:
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._stop_event))
        logger.debug("Price polling started (every %.2fs)", self._interval)

    def _halt(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        task = self._task
        self._task = None
        self._stop_event = None
        if task is not None and not task.done() and task is not _current_task():
            task.cancel()
        logger.debug("Price polling stopped")

    async def _run(self, stop_event: asyncio.Event) -> None:
        async for prices in poll_by_interval(
            self._fetch_prices,
            self._interval,
            stop_event=stop_event,
            on_tick=self._tick,
        ):
            if stop_event.is_set():
                break
            self.publish(prices)
