"""Unit tests for the single-slot snapshot cache."""

from __future__ import annotations

from src.services.snapshot_cache import SnapshotCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_empty_cache_misses():
    cache = SnapshotCache(clock=FakeClock())
    assert cache.get(300) is None
    assert cache.age() is None


def test_fresh_entry_is_served():
    clock = FakeClock()
    cache = SnapshotCache(clock=clock)
    cache.store({"nodes": []})

    clock.now += 299.9
    assert cache.get(300) == {"nodes": []}
    assert cache.age() == 299.9


def test_entry_expires_at_ttl():
    clock = FakeClock()
    cache = SnapshotCache(clock=clock)
    cache.store({"nodes": []})

    clock.now += 300
    assert cache.get(300) is None


def test_store_overwrites_slot():
    clock = FakeClock()
    cache = SnapshotCache(clock=clock)
    first = cache.store({"v": 1})
    clock.now += 5
    second = cache.store({"v": 2})

    assert second.timestamp > first.timestamp
    assert cache.entry is second
    assert cache.get(300) == {"v": 2}


def test_clear():
    cache = SnapshotCache(clock=FakeClock())
    cache.store({"v": 1})
    cache.clear()
    assert cache.entry is None
