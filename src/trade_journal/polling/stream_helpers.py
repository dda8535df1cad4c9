"""Interval polling helper shared by the price poller."""
import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

import httpx

from trade_journal.client.exceptions import JournalClientError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures of a single tick; logged and skipped so the loop keeps running.
# ValueError covers undecodable JSON and pydantic validation of the payload.
_POLL_EXCEPTIONS: tuple[type[Exception], ...] = (
    JournalClientError,
    httpx.HTTPError,
    ValueError,
)


async def poll_by_interval(
    fetch: Callable[[], Awaitable[T]],
    interval_seconds: float,
    *,
    stop_event: asyncio.Event,
    on_tick: Callable[[], None] | None = None,
) -> AsyncIterator[T]:
    """Sleep one interval, tick, fetch, yield; repeat until stop_event is set.

    A failed fetch is logged and yields nothing for that tick; there is no
    backoff and the interval stays fixed.

    Args:
        fetch: Async callable returning one snapshot.
        interval_seconds: Seconds between ticks.
        stop_event: When set, the loop exits before the next fetch.
        on_tick: Called once per tick, before the fetch.
    """
    while not stop_event.is_set():
        await asyncio.sleep(interval_seconds)
        if stop_event.is_set():
            break
        if on_tick is not None:
            on_tick()
        try:
            result = await fetch()
        except _POLL_EXCEPTIONS as exc:
            logger.warning("Price poll failed: %s", exc)
            continue
        yield result
