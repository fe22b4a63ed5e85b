"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Rate limiting strategy:
- Sliding window per client (default 3 submissions per 15 minutes).
- Client identity is the first X-Forwarded-For hop (set by the hosting edge),
  then the socket peer address, then a shared placeholder.
- State is per process; a cold start resets every window.
"""

from __future__ import annotations

import logging

from fastapi import Request

from portfolio_api.adapters.rate_limit.base import UNKNOWN_IDENTIFIER, AbstractRateLimiter
from portfolio_api.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from portfolio_api.core.config import settings
from portfolio_api.core.errors import RateLimitAppError
from portfolio_api.core.logging import hash_for_log

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return a process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemorySlidingWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def resolve_client_identifier(request: Request) -> str:
    """Pick the identifier used to bucket a request.

    Args:
        request: FastAPI request.

    Returns:
        str: Client address, or ``"unknown"`` when none can be determined.
    """

    forwarded_for = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_IDENTIFIER


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the contact-form rate limit.

    Args:
        request: FastAPI request.

    Raises:
        RateLimitAppError: When the client exceeded its budget (HTTP 429).
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter()
    identifier = resolve_client_identifier(request)
    key_hash = hash_for_log(identifier)

    result = limiter.consume(identifier)
    if result.allowed:
        logger.info(
            "rate_limit.allowed",
            extra={
                "key_hash": key_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": key_hash,
            "limit": result.limit,
            "retry_after_s": retry_after,
        },
    )

    headers: dict[str, str] | None = None
    if settings.app.rate_limit_include_headers:
        headers = {
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
            "X-RateLimit-Reset": str(result.reset_at),
        }

    raise RateLimitAppError(
        code="rate_limited",
        message="Too many requests. Please try again later.",
        details={"limit": result.limit, "retry_after": retry_after},
        headers=headers,
    )
