"""Base class for page view-models."""
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from trade_journal.client import JournalApiClient, RequestFailed
from trade_journal.polling import PricePoller
from trade_journal.schemas import PageModel, StockPrice

logger = logging.getLogger(__name__)


class PageView(ABC):
    """State and actions behind one dashboard page.

    Lifecycle: mount() subscribes to the shared price poller (for pages that
    show live prices) and loads the page; unmount() drops the subscription.
    Every load captures the mount generation first and applies its result only
    if the page is still mounted in that same generation, so responses that
    arrive after unmount are discarded.

    Subclasses implement _load() (fetch everything the page needs) and
    _apply() (store it), plus snapshot().
    """

    live_prices: bool = False

    def __init__(self, client: JournalApiClient, poller: PricePoller) -> None:
        self._client = client
        self._poller = poller
        self._unsubscribe: Callable[[], None] | None = None
        self._generation = 0
        self.mounted = False
        self.loading = False
        self.error: str | None = None

    async def mount(self) -> None:
        if self.mounted:
            return
        self.mounted = True
        self._generation += 1
        if self.live_prices:
            self._unsubscribe = self._poller.subscribe(self._on_prices_if_mounted)
        await self.refresh()

    def unmount(self) -> None:
        if not self.mounted:
            return
        self.mounted = False
        self._generation += 1
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def refresh(self) -> None:
        """Full refetch. A RequestFailed becomes the page's inline error."""
        generation = self._generation
        self.loading = True
        self.error = None
        try:
            data = await self._load()
        except RequestFailed as exc:
            if self._is_current(generation):
                self.error = exc.message
                self.loading = False
            logger.error("Failed to load %s: %s", type(self).__name__, exc.message)
            return
        except BaseException:
            if self._is_current(generation):
                self.loading = False
            raise
        if not self._is_current(generation):
            logger.debug("Discarding late response for %s", type(self).__name__)
            return
        self._apply(data)
        self.loading = False

    async def _run_action(self, failure: str, action: Callable[[], Any]) -> None:
        """Run one mutating call, then refetch the page.

        The page error is set to `failure` and the exception re-raised when the
        call fails; nothing is patched locally.
        """
        generation = self._generation
        try:
            await action()
        except RequestFailed:
            if self._is_current(generation):
                self.error = failure
            raise
        await self.refresh()

    def _is_current(self, generation: int) -> bool:
        return self.mounted and generation == self._generation

    def _on_prices_if_mounted(self, prices: list[StockPrice]) -> None:
        if self.mounted:
            self.on_prices(prices)

    def on_prices(self, prices: list[StockPrice]) -> None:
        """Merge a price snapshot into loaded state. Pages with live prices override."""

    @abstractmethod
    async def _load(self) -> Any:
        """Fetch the page's data."""

    @abstractmethod
    def _apply(self, data: Any) -> None:
        """Store fetched data."""

    @abstractmethod
    def snapshot(self) -> PageModel:
        """Current page state."""
