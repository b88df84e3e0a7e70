"""Rate limiting for Wildberries API endpoints."""

import logging
import time
from threading import Lock
from typing import Callable, Protocol

from ..constants import RATE_LIMITS

logger = logging.getLogger(__name__)


class Limiter(Protocol):
    """Anything that can block until the next request is allowed."""

    def acquire(self) -> None: ...


class FixedDelayLimiter:
    """Waits a fixed delay on every acquire.

    Used between report pages: the reporting endpoint allows one request
    per minute, so the paginator pauses after each page it receives.
    """

    def __init__(self, delay: float, sleep: Callable[[float], None] = time.sleep) -> None:
        """Initialize the limiter.

        Args:
            delay: Seconds to wait per acquire
            sleep: Sleep function, replaceable in tests
        """
        self.delay = delay
        self._sleep = sleep

    def acquire(self) -> None:
        if self.delay > 0:
            logger.info(f"Waiting {self.delay}s before the next request")
            self._sleep(self.delay)


class TokenBucket:
    """Token bucket implementation for rate limiting."""

    def __init__(
        self,
        capacity: int,
        refill_rate: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize token bucket.

        Args:
            capacity: Maximum number of tokens in the bucket
            refill_rate: Number of tokens added per second
            clock: Monotonic clock, replaceable in tests
            sleep: Sleep function, replaceable in tests
        """
        self.capacity = capacity
        self.refill_rate = refill_rate
        self.tokens = float(capacity)
        self._clock = clock
        self._sleep = sleep
        self.last_refill = clock()
        self.lock = Lock()

    def _refill(self) -> None:
        now = self._clock()
        time_passed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + time_passed * self.refill_rate)
        self.last_refill = now

    def consume(self, tokens: int = 1) -> bool:
        """Try to consume tokens from the bucket.

        Args:
            tokens: Number of tokens to consume

        Returns:
            True if tokens were consumed, False if not enough tokens available
        """
        with self.lock:
            self._refill()
            if self.tokens >= tokens:
                self.tokens -= tokens
                return True
            return False

    def time_until_available(self, tokens: int = 1) -> float:
        """Calculate time until enough tokens are available.

        Args:
            tokens: Number of tokens needed

        Returns:
            Time in seconds until tokens are available
        """
        with self.lock:
            self._refill()
            if self.tokens >= tokens:
                return 0.0

            tokens_needed = tokens - self.tokens
            return tokens_needed / self.refill_rate

    def acquire(self, tokens: int = 1) -> None:
        """Block until ``tokens`` can be consumed."""
        while not self.consume(tokens):
            self._sleep(self.time_until_available(tokens))


class RateLimiter:
    """Rate limiter for API paths using one token bucket per path."""

    DEFAULT_LIMIT = (1, 5)  # Conservative for unknown paths

    def __init__(
        self,
        limits: dict[str, tuple[float, int]] | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize rate limiter.

        Args:
            limits: (requests per second, burst capacity) by API path
            clock: Monotonic clock passed to every bucket
            sleep: Sleep function passed to every bucket
        """
        self.limits = RATE_LIMITS if limits is None else limits
        self.buckets: dict[str, TokenBucket] = {}
        self.lock = Lock()
        self._clock = clock
        self._sleep = sleep

    def _get_bucket(self, api_path: str) -> TokenBucket:
        with self.lock:
            if api_path not in self.buckets:
                rate_per_second, burst_capacity = self.limits.get(api_path, self.DEFAULT_LIMIT)
                self.buckets[api_path] = TokenBucket(
                    capacity=burst_capacity,
                    refill_rate=rate_per_second,
                    clock=self._clock,
                    sleep=self._sleep,
                )
            return self.buckets[api_path]

    def wait_if_needed(self, api_path: str, tokens: int = 1) -> None:
        """Wait if rate limit would be exceeded.

        Args:
            api_path: The API path being accessed
            tokens: Number of tokens to consume (default 1)
        """
        bucket = self._get_bucket(api_path)
        wait_time = bucket.time_until_available(tokens)
        if wait_time > 0:
            logger.info(f"Rate limiting {api_path}: waiting {wait_time:.1f}s")
        bucket.acquire(tokens)

    def get_wait_time(self, api_path: str, tokens: int = 1) -> float:
        """Get time to wait until tokens are available for ``api_path``."""
        return self._get_bucket(api_path).time_until_available(tokens)
