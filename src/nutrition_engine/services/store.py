"""Expiring key-value storage injected into the rate limiter."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class KeyValueStore(Protocol):
    """Storage interface for expiring key-value data."""

    def get(self, key: str) -> object | None:
        """Return a stored value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value with a TTL in seconds."""


@dataclass
class InMemoryStore(KeyValueStore):
    """Process-local store; replicas need an external cache instead.

    Writes sweep expired entries at most once per ``sweep_interval_seconds`` so
    keys that are never read again do not accumulate.
    """

    clock: Callable[[], float] = time.time
    sweep_interval_seconds: float = 60.0
    _entries: dict[str, tuple[object, float]] = field(
        default_factory=dict, init=False, repr=False
    )
    _next_sweep: float = field(default=0.0, init=False, repr=False)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        now = self.clock()
        if now >= self._next_sweep:
            self._sweep(now)
        self._entries[key] = (value, now + ttl_seconds)

    def _sweep(self, now: float) -> None:
        expired = [
            key for key, (_, expires_at) in self._entries.items() if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self.sweep_interval_seconds
