from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from snapper_tui.app.filtering import filter_snapshots, matches
from snapper_tui.models import Snapshot

SNAPS = [
    Snapshot(id=1, config="root", kind="single", user="root", date="2024-01-01", description="Boot"),
    Snapshot(id=12, config="root", kind="pre", cleanup="number", user="root", date="2024-02-01", description="zypp install"),
    Snapshot(id=13, config="root", kind="post", cleanup="timeline", user="alice", date="2024-03-01", description=""),
]


def test_empty_query_keeps_everything() -> None:
    assert filter_snapshots(SNAPS, "") == SNAPS
    assert filter_snapshots(SNAPS, "   ") == SNAPS


def test_match_is_case_insensitive_over_all_columns() -> None:
    assert [s.id for s in filter_snapshots(SNAPS, "BOOT")] == [1]
    assert [s.id for s in filter_snapshots(SNAPS, "timeline")] == [13]
    assert [s.id for s in filter_snapshots(SNAPS, "alice")] == [13]
    assert [s.id for s in filter_snapshots(SNAPS, "2024-02")] == [12]
    assert [s.id for s in filter_snapshots(SNAPS, "1")] == [1, 12, 13]
    assert matches(SNAPS[1], "PRE")


def test_filter_is_idempotent() -> None:
    once = filter_snapshots(SNAPS, "root")
    assert filter_snapshots(once, "root") == once
