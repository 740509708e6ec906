# ABOUTME: Minimum-interval rate limiter used between seed identifiers
# ABOUTME: Keeps the document store from seeing more than one seed per configured interval

import asyncio
import time
from collections.abc import Awaitable, Callable

from image_inspector.utils.logging import get_logger

logger = get_logger(__name__)


class Throttle:
    """Sleep just long enough that successive ``wait()`` calls are ``interval`` apart.

    The first call never sleeps. An interval of zero or less disables throttling.
    """

    def __init__(
        self,
        interval: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval = interval
        self._sleep = sleep
        self._clock = clock
        self._last_call: float | None = None

    async def wait(self) -> None:
        if self.interval <= 0:
            return

        if self._last_call is not None:
            elapsed = self._clock() - self._last_call
            if elapsed < self.interval:
                sleep_time = self.interval - elapsed
                logger.debug("Rate limiting", sleep_time=round(sleep_time, 3))
                await self._sleep(sleep_time)

        self._last_call = self._clock()
