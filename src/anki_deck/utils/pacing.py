"""Request pacing for AnkiConnect operations.

AnkiConnect resets connections when requests arrive back to back, so every
public DeckClient operation waits on a pacer before talking to the service.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from enum import Enum

from anki_deck.utils.logging import get_logger

logger = get_logger(__name__)


class PacingPolicy(str, Enum):
    """How the pacer spaces operations."""

    FIXED_DELAY = "fixed_delay"
    """Sleep the full delay before every operation."""

    MIN_INTERVAL = "min_interval"
    """Sleep only as long as needed to keep operation starts ``delay`` apart."""


class RequestPacer:
    """Delay gate awaited before each operation.

    Not a rate limiter: there is no token bucket and no backoff. A delay of
    zero or less disables pacing entirely.
    """

    def __init__(
        self,
        delay: float = 0.1,
        policy: PacingPolicy = PacingPolicy.FIXED_DELAY,
        sleep: Callable[[float], Awaitable[None]] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """
        Initialize the pacer.

        Args:
            delay: Delay (or minimum interval) in seconds
            policy: Pacing policy to apply
            sleep: Awaitable sleep function (defaults to asyncio.sleep)
            clock: Monotonic clock for MIN_INTERVAL (defaults to time.monotonic)
        """
        self.delay = delay
        self.policy = PacingPolicy(policy)
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic
        self._last_start: float | None = None

    @property
    def enabled(self) -> bool:
        return self.delay > 0

    def _wait_time(self) -> float:
        if self.policy is PacingPolicy.FIXED_DELAY:
            return self.delay
        if self._last_start is None:
            return 0.0
        elapsed = self._clock() - self._last_start
        return max(0.0, self.delay - elapsed)

    async def wait(self) -> None:
        """Wait until the next operation may start."""
        if not self.enabled:
            return

        wait_time = self._wait_time()
        if wait_time > 0:
            logger.debug("request_paced", wait_seconds=round(wait_time, 3))
            await self._sleep(wait_time)
        self._last_start = self._clock()
