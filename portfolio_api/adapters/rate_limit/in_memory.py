"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: a cold start or a second instance starts from an empty
  window, so the limit is advisory rather than global.
- Thread-safe: the prune/check/append sequence runs under one lock.
"""

from __future__ import annotations

import math
import threading
import time
from collections import deque
from typing import Callable

from portfolio_api.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitResult,
    normalize_identifier,
)


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter keeping the timestamps of recent requests per key.

    A request is accepted when fewer than ``limit`` requests from the same key
    fall inside the trailing ``window_seconds``. Rejected requests are not
    recorded, so a blocked client regains budget as its oldest accepted
    request ages out.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of requests per window.
            window_seconds: Length of the trailing window in seconds.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._requests_by_key: dict[str, deque[float]] = {}

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def _prune_locked(self, timestamps: deque[float], now: float) -> None:
        while timestamps and now - timestamps[0] >= self._window_seconds:
            timestamps.popleft()

    def _reset_at(self, timestamps: deque[float], now: float) -> float:
        if not timestamps:
            return now + self._window_seconds
        return timestamps[0] + self._window_seconds

    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Record a request for ``key`` if it fits in the trailing window.

        Args:
            key: Client identifier; blank values share the placeholder bucket.
            cost: Units to consume (default 1).

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If cost is invalid.
        """
        if cost < 1:
            raise ValueError("cost must be >= 1")
        key = normalize_identifier(key)

        with self._lock:
            now = self._clock()
            timestamps = self._requests_by_key.setdefault(key, deque())
            self._prune_locked(timestamps, now)

            if len(timestamps) + cost <= self._limit:
                timestamps.extend([now] * cost)
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=max(0, self._limit - len(timestamps)),
                    reset_at=int(math.ceil(self._reset_at(timestamps, now))),
                    retry_after_seconds=None,
                )

            reset_at = self._reset_at(timestamps, now)
            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=max(0, self._limit - len(timestamps)),
                reset_at=int(math.ceil(reset_at)),
                retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
            )
