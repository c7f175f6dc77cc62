"""Free-text snapshot filter."""

from __future__ import annotations

from typing import Iterable

from ..models import Snapshot


def matches(snapshot: Snapshot, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    haystacks = (
        snapshot.description,
        snapshot.date,
        snapshot.kind,
        snapshot.cleanup,
        snapshot.user,
    )
    return any(q in h.lower() for h in haystacks) or q in str(snapshot.id)


def filter_snapshots(snapshots: Iterable[Snapshot], query: str) -> list[Snapshot]:
    """Ordered subsequence of `snapshots` matching `query` (case-insensitive)."""
    return [s for s in snapshots if matches(s, query)]
