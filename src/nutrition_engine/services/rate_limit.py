"""Sliding-window rate limiting over an injected store."""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from nutrition_engine.domain.errors import RateLimitExceeded
from nutrition_engine.services.store import KeyValueStore


@dataclass
class SlidingWindowRateLimiter:
    """Allow at most ``max_requests`` hits per key within ``window_seconds``."""

    store: KeyValueStore
    window_seconds: int = 900
    max_requests: int = 100
    clock: Callable[[], float] = time.time

    def hit(self, key: str) -> None:
        """Record a request for the key or raise RateLimitExceeded."""
        store_key = f"ratelimit:{key}"
        now = self.clock()
        cached = self.store.get(store_key)
        recent = [
            stamp
            for stamp in (cached if isinstance(cached, list) else [])
            if now - stamp < self.window_seconds
        ]
        if len(recent) >= self.max_requests:
            retry_after = math.ceil(self.window_seconds - (now - recent[0]))
            raise RateLimitExceeded(retry_after=max(retry_after, 1))
        recent.append(now)
        self.store.set(store_key, recent, ttl_seconds=self.window_seconds)
