"""Unit tests for the in-memory sliding-window rate limiter."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from portfolio_api.adapters.rate_limit.base import UNKNOWN_IDENTIFIER, normalize_identifier
from portfolio_api.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter

WINDOW = 15 * 60


def _limiter(clock: Mock, limit: int = 3, window_seconds: int = WINDOW) -> InMemorySlidingWindowRateLimiter:
    return InMemorySlidingWindowRateLimiter(limit=limit, window_seconds=window_seconds, clock=clock)


def test_allows_up_to_limit_then_blocks() -> None:
    clock = Mock(return_value=1000.0)
    limiter = _limiter(clock)

    assert limiter.check_and_record("1.2.3.4") is True
    assert limiter.check_and_record("1.2.3.4") is True
    assert limiter.check_and_record("1.2.3.4") is True

    assert limiter.check_and_record("1.2.3.4") is False


def test_blocked_result_carries_retry_metadata() -> None:
    clock = Mock(return_value=1000.0)
    limiter = _limiter(clock, limit=1)

    assert limiter.consume("k").allowed is True
    clock.return_value = 1100.0
    blocked = limiter.consume("k")

    assert blocked.allowed is False
    assert blocked.remaining == 0
    assert blocked.limit == 1
    assert blocked.retry_after_seconds == WINDOW - 100
    assert blocked.reset_at == 1000 + WINDOW


def test_other_identifier_is_unaffected() -> None:
    clock = Mock(return_value=1000.0)
    limiter = _limiter(clock)

    for _ in range(3):
        limiter.check_and_record("10.0.0.1")

    assert limiter.check_and_record("10.0.0.1") is False
    assert limiter.check_and_record("10.0.0.2") is True


def test_accepts_again_after_window_elapses() -> None:
    clock = Mock(return_value=1000.0)
    limiter = _limiter(clock)

    for _ in range(3):
        limiter.check_and_record("k")
    assert limiter.check_and_record("k") is False

    clock.return_value = 1000.0 + WINDOW + 1
    assert limiter.check_and_record("k") is True


def test_window_slides_with_oldest_request() -> None:
    clock = Mock(return_value=0.0)
    limiter = _limiter(clock)

    for t in (0.0, 600.0, 800.0):
        clock.return_value = t
        assert limiter.check_and_record("k") is True

    clock.return_value = 899.0
    assert limiter.check_and_record("k") is False

    # Only the t=0 request has aged out; one slot frees up
    clock.return_value = 900.0
    assert limiter.check_and_record("k") is True
    assert limiter.check_and_record("k") is False


def test_rejected_requests_are_not_recorded() -> None:
    clock = Mock(return_value=0.0)
    limiter = _limiter(clock, limit=1, window_seconds=10)

    assert limiter.check_and_record("k") is True
    for t in (1.0, 5.0, 9.0):
        clock.return_value = t
        assert limiter.check_and_record("k") is False

    clock.return_value = 10.0
    assert limiter.check_and_record("k") is True


@pytest.mark.parametrize("identifier", [None, "", "   ", 1234, b"1.2.3.4"])
def test_malformed_identifiers_share_placeholder_bucket(identifier: object) -> None:
    clock = Mock(return_value=1000.0)
    limiter = _limiter(clock, limit=1)

    assert normalize_identifier(identifier) == UNKNOWN_IDENTIFIER
    assert limiter.check_and_record(UNKNOWN_IDENTIFIER) is True
    assert limiter.check_and_record(identifier) is False


def test_concurrent_calls_for_one_identifier_never_exceed_limit() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=3, window_seconds=WINDOW)
    barrier = threading.Barrier(50)

    def attempt() -> bool:
        barrier.wait()
        return limiter.check_and_record("k")

    with ThreadPoolExecutor(max_workers=50) as pool:
        results = list(pool.map(lambda _: attempt(), range(50)))

    assert results.count(True) == 3
    assert results.count(False) == 47


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0, "window_seconds": 60},
        {"limit": 1, "window_seconds": 0},
    ],
)
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        InMemorySlidingWindowRateLimiter(**kwargs)


def test_invalid_cost() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=1, window_seconds=60)

    with pytest.raises(ValueError):
        limiter.consume("k", cost=0)
