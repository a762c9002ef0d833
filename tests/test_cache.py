"""
Unit tests for the response cache.
"""
import pytest

from app.core.cache import (
    InMemoryResponseCache,
    active_history_key,
    cached,
    home_key,
    login_key,
    progress_key,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestInMemoryResponseCache:
    def test_set_and_get(self):
        cache = InMemoryResponseCache()
        cache.set("a", {"x": 1})
        assert cache.get("a") == {"x": 1}

    def test_miss_returns_none(self):
        assert InMemoryResponseCache().get("nope") is None

    def test_default_ttl_expiry(self):
        clock = FakeClock()
        cache = InMemoryResponseCache(default_ttl=60, clock=clock)
        cache.set("a", 1)
        clock.now += 59
        assert cache.get("a") == 1
        clock.now += 1
        assert cache.get("a") is None
        assert len(cache) == 0

    def test_per_key_ttl(self):
        clock = FakeClock()
        cache = InMemoryResponseCache(default_ttl=3600, clock=clock)
        cache.set("short", 1, ttl=5)
        cache.set("long", 2)
        clock.now += 10
        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_delete_only_named_key(self):
        cache = InMemoryResponseCache()
        cache.set("home_a@x", 1)
        cache.set("home_b@x", 2)
        cache.delete("home_a@x")
        assert cache.get("home_a@x") is None
        assert cache.get("home_b@x") == 2

    def test_delete_missing_key_is_noop(self):
        cache = InMemoryResponseCache()
        cache.delete("never-set")
        assert len(cache) == 0

    def test_clear(self):
        cache = InMemoryResponseCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0


class TestKeys:
    def test_key_formats(self):
        assert login_key("a@x") == "login_a@x"
        assert home_key("a@x") == "home_a@x"
        assert progress_key("a@x") == "progress_a@x"
        assert active_history_key("S1") == "active_history_S1"


class TestCached:
    def test_computes_once(self):
        cache = InMemoryResponseCache()
        calls = []

        def compute():
            calls.append(1)
            return len(calls)

        assert cached(cache, "k", compute) == 1
        assert cached(cache, "k", compute) == 1
        assert len(calls) == 1

    def test_force_recomputes_and_stores(self):
        cache = InMemoryResponseCache()
        cache.set("k", "old")
        assert cached(cache, "k", lambda: "new", force=True) == "new"
        assert cache.get("k") == "new"

    def test_errors_are_not_cached(self):
        cache = InMemoryResponseCache()

        def boom():
            raise RuntimeError("down")

        with pytest.raises(RuntimeError):
            cached(cache, "k", boom)
        assert cache.get("k") is None
