"""
Token bucket rate limiter shared by provider clients.
"""

import asyncio
import time
from typing import Callable

from grocery_enrichment.domain.shared.errors import RateLimitError


class RateLimiter:
    """Token bucket rate limiter.

    Keeps a client under its provider's hourly quota while allowing
    short bursts.
    """

    def __init__(
        self,
        requests_per_hour: int = 1000,
        burst_size: int = 10,
        max_wait_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize rate limiter.

        Args:
            requests_per_hour: Max requests per hour
            burst_size: Max burst requests
            max_wait_seconds: Longest wait before giving up
            clock: Time source, injectable for tests
        """
        if requests_per_hour <= 0 or burst_size <= 0:
            raise ValueError("requests_per_hour and burst_size must be positive")

        self.requests_per_hour = requests_per_hour
        self.burst_size = burst_size
        self.max_wait_seconds = max_wait_seconds
        self._clock = clock
        self.tokens = float(burst_size)
        self.last_update = clock()
        self.lock = asyncio.Lock()

    @property
    def refill_rate(self) -> float:
        """Tokens added per second."""
        return self.requests_per_hour / 3600.0

    async def acquire(self) -> None:
        """Acquire token or wait.

        Raises:
            RateLimitError: If the next token is too far away
        """
        async with self.lock:
            now = self._clock()
            elapsed = now - self.last_update

            self.tokens = min(self.burst_size, self.tokens + elapsed * self.refill_rate)
            self.last_update = now

            if self.tokens >= 1.0:
                self.tokens -= 1.0
                return

            wait_time = (1.0 - self.tokens) / self.refill_rate
            if wait_time > self.max_wait_seconds:
                msg = f"Rate limit exceeded, wait time {wait_time:.1f}s"
                raise RateLimitError(msg)

            await asyncio.sleep(wait_time)
            self.tokens = 0.0
            self.last_update = self._clock()
