"""TTL cache with size-bounded eviction for computed API responses."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """In-memory TTL cache, evicting expired entries then the oldest ones.

    Safe for single-threaded asyncio (no await between check and set).
    """

    def __init__(
        self,
        ttl: float,
        max_size: int = 500,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._max_size = max_size
        self._clock = clock
        self._data: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        """Get a cached value, or None if missing or expired."""
        entry = self._data.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at < self._ttl:
            return value
        del self._data[key]
        return None

    def set(self, key: str, value: Any) -> None:
        """Cache a value, evicting when over ``max_size``."""
        self._data[key] = (self._clock(), value)
        if len(self._data) > self._max_size:
            self._evict()

    def _evict(self) -> None:
        now = self._clock()
        expired = [k for k, (ts, _) in self._data.items() if now - ts >= self._ttl]
        for k in expired:
            del self._data[k]
        if len(self._data) > self._max_size:
            oldest = sorted(self._data, key=lambda k: self._data[k][0])
            for k in oldest[: len(self._data) - self._max_size]:
                del self._data[k]

    def __len__(self) -> int:
        return len(self._data)
