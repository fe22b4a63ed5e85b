"""Rate limiter interfaces.

The API depends on this abstraction (not the concrete implementation) so the
in-process store can be swapped for a shared one (e.g., Redis) when the site
runs on more than one instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

UNKNOWN_IDENTIFIER = "unknown"


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check/consume operation.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the oldest counted request expires.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


def normalize_identifier(identifier: object) -> str:
    """Coerce a client identifier into a usable key.

    Missing, blank or non-string identifiers collapse into a shared
    placeholder bucket instead of failing the request.
    """
    if not isinstance(identifier, str):
        return UNKNOWN_IDENTIFIER
    identifier = identifier.strip()
    return identifier or UNKNOWN_IDENTIFIER


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Consume rate limit budget for a given key.

        Args:
            key: Unique identifier (e.g., client IP address).
            cost: Units to consume (default 1).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def check_and_record(self, identifier: object) -> bool:
        """Record one request for ``identifier`` and report whether it is allowed."""
        return self.consume(normalize_identifier(identifier)).allowed
