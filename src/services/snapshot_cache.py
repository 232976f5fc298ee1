"""Single-slot in-memory cache for the latest graph snapshot."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class CacheEntry:
    timestamp: float
    payload: dict[str, Any]


class SnapshotCache:
    """Holds one payload and the wall-clock time it was stored.

    There is no eviction: each refresh overwrites the slot. ``refresh_lock``
    lets concurrent misses in this process wait on a single query instead of
    each hitting the database.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entry: CacheEntry | None = None
        self.refresh_lock = asyncio.Lock()

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    def get(self, ttl_seconds: int) -> dict[str, Any] | None:
        entry = self._entry
        if entry is None:
            return None
        if self._clock() - entry.timestamp < ttl_seconds:
            return entry.payload
        return None

    def age(self) -> float | None:
        if self._entry is None:
            return None
        return round(self._clock() - self._entry.timestamp, 3)

    def store(self, payload: dict[str, Any]) -> CacheEntry:
        self._entry = CacheEntry(timestamp=self._clock(), payload=payload)
        return self._entry

    def clear(self) -> None:
        self._entry = None
