"""Tests for the sliding-window rate limiter."""

import pytest

from nutrition_engine.domain.errors import RateLimitExceeded
from nutrition_engine.services.rate_limit import SlidingWindowRateLimiter
from nutrition_engine.services.store import InMemoryStore


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _limiter(clock: FakeClock, max_requests: int) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(
        store=InMemoryStore(clock=clock),
        window_seconds=60,
        max_requests=max_requests,
        clock=clock,
    )


def test_limiter_blocks_after_max_requests() -> None:
    clock = FakeClock()
    limiter = _limiter(clock, max_requests=2)

    limiter.hit("1.2.3.4:/health/assessment")
    clock.now += 10
    limiter.hit("1.2.3.4:/health/assessment")

    with pytest.raises(RateLimitExceeded) as exc_info:
        limiter.hit("1.2.3.4:/health/assessment")

    assert exc_info.value.retry_after == 50


def test_limiter_window_slides() -> None:
    clock = FakeClock()
    limiter = _limiter(clock, max_requests=1)

    limiter.hit("client")
    clock.now += 61
    limiter.hit("client")


def test_limiter_keys_are_independent() -> None:
    limiter = _limiter(FakeClock(), max_requests=1)

    limiter.hit("client:/charts")
    limiter.hit("client:/nutrition/analyze")


def test_store_expires_entries() -> None:
    clock = FakeClock()
    store = InMemoryStore(clock=clock)
    store.set("key", [1.0], ttl_seconds=30)

    assert store.get("key") == [1.0]
    clock.now += 30
    assert store.get("key") is None
    assert store.get("missing") is None


def test_store_sweeps_expired_keys_of_other_clients() -> None:
    clock = FakeClock()
    store = InMemoryStore(clock=clock)
    limiter = SlidingWindowRateLimiter(
        store=store, window_seconds=60, max_requests=5, clock=clock
    )
    for index in range(1000):
        limiter.hit(f"10.0.{index // 256}.{index % 256}:/charts")
    assert len(store) == 1000

    clock.now += 10_000
    limiter.hit("192.168.0.1:/charts")

    assert len(store) == 1
    assert store.get("ratelimit:192.168.0.1:/charts") == [clock.now]


def test_store_sweep_keeps_live_entries() -> None:
    clock = FakeClock()
    store = InMemoryStore(clock=clock, sweep_interval_seconds=10)
    store.set("short", 1, ttl_seconds=5)
    store.set("long", 2, ttl_seconds=100)

    clock.now += 20
    store.set("fresh", 3, ttl_seconds=5)

    assert len(store) == 2
    assert store.get("long") == 2
