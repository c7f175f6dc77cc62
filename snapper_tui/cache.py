"""Listing Cache: snapshot lists keyed by configuration name, with capture time."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .models import Snapshot


@dataclass(slots=True)
class CacheEntry:
    snapshots: list[Snapshot]
    captured_at: float


class ListingCache:
    """Time-bounded cache of snapshot listings.

    Entries are never expired on read: `get` returns stale entries too and the
    caller decides via the reported age whether to refresh.
    Owned by the event loop; not thread-safe.
    """

    def __init__(self, ttl_seconds: float = 3.0, clock: Callable[[], float] | None = None) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> tuple[list[Snapshot], float] | None:
        """Return (snapshots, age_seconds) or None when `key` was never stored."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return list(entry.snapshots), max(0.0, self._clock() - entry.captured_at)

    def put(self, key: str, snapshots: list[Snapshot]) -> None:
        self._entries[key] = CacheEntry(snapshots=list(snapshots), captured_at=self._clock())

    def is_fresh_age(self, age: float) -> bool:
        return age < self.ttl_seconds

    def invalidate_all(self) -> None:
        self._entries.clear()
