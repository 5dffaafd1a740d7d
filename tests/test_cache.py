"""Tests for the TTL cache."""

from __future__ import annotations

from model_scout.cache import TTLCache


class Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    """Tests for TTLCache."""

    def test_get_and_set(self) -> None:
        """Test stored values are returned."""
        cache = TTLCache(ttl=10)
        assert cache.get("a") is None
        cache.set("a", {"value": 1})
        assert cache.get("a") == {"value": 1}
        assert len(cache) == 1

    def test_expiry(self) -> None:
        """Test entries expire after the TTL."""
        clock = Clock()
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("a", 1)

        clock.now = 9.9
        assert cache.get("a") == 1
        clock.now = 10
        assert cache.get("a") is None
        assert len(cache) == 0

    def test_evicts_oldest_over_max_size(self) -> None:
        """Test oldest entry is evicted over max size."""
        clock = Clock()
        cache = TTLCache(ttl=100, max_size=2, clock=clock)
        for i, key in enumerate(("a", "b", "c")):
            clock.now = float(i)
            cache.set(key, key)

        assert len(cache) == 2
        assert cache.get("a") is None
        assert cache.get("b") == "b"
        assert cache.get("c") == "c"

    def test_evicts_expired_first(self) -> None:
        """Test expired entries are evicted before live ones."""
        clock = Clock()
        cache = TTLCache(ttl=5, max_size=2, clock=clock)
        cache.set("old", 1)
        clock.now = 4
        cache.set("newer", 2)
        clock.now = 6
        cache.set("newest", 3)

        assert cache.get("old") is None
        assert cache.get("newer") == 2
        assert cache.get("newest") == 3
