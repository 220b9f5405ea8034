"""Bounded retry policy for rate-limited GitHub requests.

A rate-limited request waits a fixed cooldown and is sent again, up to
``max_attempts`` attempts in total.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from gh_showcase.github.http import RateLimitExceeded, SleepFn

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Fixed-cooldown retry on rate limiting.

    Attributes:
        max_attempts: Total attempts including the first one.
        cooldown_seconds: Wait between a rate-limited attempt and the next.
        sleep: Coroutine used to wait; tests pass a no-op.
    """

    max_attempts: int = 2
    cooldown_seconds: float = 60.0
    sleep: SleepFn = asyncio.sleep

    async def run(self, operation: Callable[[], Awaitable[T]], description: str = "request") -> T:
        """Run ``operation``, retrying after a cooldown when rate limited.

        Args:
            operation: Zero-argument coroutine factory; called once per attempt.
            description: Label for log messages.

        Returns:
            Result of the first attempt that is not rate limited.

        Raises:
            RateLimitExceeded: If every attempt was rate limited.
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except RateLimitExceeded:
                if attempt >= self.max_attempts:
                    logger.error(
                        "Rate limited on %s after %d attempt(s), giving up",
                        description,
                        attempt,
                    )
                    raise
                logger.warning(
                    "Rate limited on %s, waiting %.0f seconds before retry",
                    description,
                    self.cooldown_seconds,
                )
                await self.sleep(self.cooldown_seconds)
                attempt += 1
