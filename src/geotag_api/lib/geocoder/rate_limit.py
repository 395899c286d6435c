"""Global rate gate for outbound provider requests.

Nominatim's usage policy allows at most one request per second from an
application, regardless of which coordinate is being resolved.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable

from loguru import logger

DEFAULT_MIN_INTERVAL = 1.0  # seconds


class RateLimiter:
    """Serializes dispatches to at most one per ``min_interval`` seconds.

    The wait and the timestamp update happen under one lock, so concurrent
    callers queue up and each one gets its own slot.

    Args:
        min_interval: Minimum spacing between dispatches, in seconds.
        clock: Monotonic clock returning seconds.
        sleep: Coroutine function used to wait.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            msg = f"min_interval must be >= 0, got {min_interval}"
            raise ValueError(msg)
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def last_dispatch(self) -> float | None:
        """Clock reading of the most recent dispatch, or None if none yet."""
        return self._last_dispatch

    async def acquire(self) -> None:
        """Wait for the next free slot and claim it."""
        async with self._lock:
            if self._last_dispatch is not None:
                wait = self._min_interval - (self._clock() - self._last_dispatch)
                if wait > 0:
                    logger.debug(f"Rate gate waiting {wait:.3f}s before next provider request")
                    await self._sleep(wait)
            self._last_dispatch = self._clock()
