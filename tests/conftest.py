"""Pytest configuration and shared fakes for the state machine tests."""
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from snapper_tui.app import App
from snapper_tui.cache import ListingCache
from snapper_tui.config import AppConfig
from snapper_tui.jobs import JobDispatcher
from snapper_tui.models import CommandResult, Config, Snapshot
from snapper_tui.settings_service import Settings, SettingsService


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualSpawn:
    """Collects job targets so a test decides when each worker runs."""

    def __init__(self) -> None:
        self.targets = []

    def __call__(self, target, name) -> None:
        self.targets.append(target)

    def run(self, index: int) -> None:
        self.targets.pop(index)()

    def run_all(self) -> None:
        while self.targets:
            self.targets.pop(0)()


def inline_spawn(target, name) -> None:
    target()


def default_snapshots() -> dict:
    return {
        "root": [
            Snapshot(id=1, config="root", kind="single", user="root", date="2024-01-01", description="first"),
            Snapshot(id=2, config="root", kind="pre", cleanup="number", user="root", date="2024-01-02", description="second"),
            Snapshot(id=3, config="root", kind="post", cleanup="number", user="root", date="2024-01-03", description="third"),
        ],
        "home": [
            Snapshot(id=10, config="home", kind="single", user="alice", date="2024-02-01", description="home one"),
        ],
    }


class FakeClient:
    """Stands in for SnapperClient; records calls and returns canned results."""

    def __init__(self) -> None:
        self.configs = ["home", "root"]
        self.snapshots = default_snapshots()
        self.outputs: dict[str, str] = {}
        self.fail: dict[str, str] = {}
        self.raise_on: set[str] = set()
        self.calls: list[tuple] = []

    def _op(self, name: str, *args, default: str = "") -> CommandResult:
        self.calls.append((name, *args))
        if name in self.raise_on:
            raise RuntimeError(f"{name} exploded")
        if name in self.fail:
            return CommandResult.failure(self.fail[name])
        return CommandResult.success(self.outputs.get(name, default))

    def count(self, name: str, *args) -> int:
        return sum(1 for call in self.calls if call[0] == name and call[1 : 1 + len(args)] == args)

    def available_configs_fs(self) -> list[str]:
        return sorted(self.configs)

    def list_configs(self, *, elevated: bool = False) -> CommandResult:
        self.calls.append(("list_configs", elevated))
        if "list_configs" in self.fail:
            return CommandResult.failure(self.fail["list_configs"])
        return CommandResult.success([Config(name=n) for n in self.configs])

    def list_snapshots(self, config: str, *, elevated: bool = False) -> CommandResult:
        self.calls.append(("list_snapshots", config, elevated))
        if "list_snapshots" in self.fail:
            return CommandResult.failure(self.fail["list_snapshots"])
        return CommandResult.success(list(self.snapshots.get(config, [])))

    def status(self, config, from_id, to_id, *, elevated=False):
        return self._op("status", config, from_id, to_id, default="c..... /etc/fstab\n+..... /etc/new\n")

    def diff(self, config, from_id, to_id, *, elevated=False):
        return self._op("diff", config, from_id, to_id, default="--- a\n+++ b\n")

    def create(self, config, description="", *, elevated=False):
        return self._op("create", config, description)

    def modify(self, config, snapshot_id, description, *, elevated=False):
        return self._op("modify", config, snapshot_id, description)

    def delete(self, config, snapshot_id, *, elevated=False):
        return self._op("delete", config, snapshot_id)

    def mount(self, config, snapshot_id, *, elevated=False):
        return self._op("mount", config, snapshot_id)

    def umount(self, config, snapshot_id, *, elevated=False):
        return self._op("umount", config, snapshot_id)

    def rollback(self, config, snapshot_id, *, elevated=False):
        return self._op("rollback", config, snapshot_id)

    def cleanup(self, config, algorithm, *, elevated=False):
        return self._op("cleanup", config, algorithm, default="removed 2 snapshots\n")

    def get_config(self, config, *, elevated=False):
        return self._op("get_config", config, default="SYNC_ACL = yes\nTIMELINE_CREATE=no\n")

    def set_config(self, config, pairs, *, elevated=False):
        return self._op("set_config", config, list(pairs))

    def setup_quota(self, config, *, elevated=False):
        return self._op("setup_quota", config)


class FakeBootloader:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def sync_snapshot(self, snapshot_id, name, *, elevated=False):
        self.calls.append((snapshot_id, name, elevated))
        return CommandResult.success(f"synced #{snapshot_id}")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def manual_spawn() -> ManualSpawn:
    return ManualSpawn()


@pytest.fixture
def make_app(tmp_path: Path, fake_client: FakeClient, clock: FakeClock):
    """Factory for an App wired to fakes; jobs run inline unless `spawn` is given."""

    def _make(*, spawn=inline_spawn, settings: Settings | None = None) -> App:
        service = SettingsService(settings_path=tmp_path / "state.json")
        if settings is not None:
            service.save(settings)
        return App(
            fake_client,
            settings_service=service,
            bootloader=FakeBootloader(),
            dispatcher=JobDispatcher(spawn=spawn),
            cache=ListingCache(ttl_seconds=3.0, clock=clock),
            app_config=AppConfig(configs_dir=tmp_path),
        )

    return _make


@pytest.fixture
def started_app(make_app):
    """App with configs loaded and `root` selected (jobs inline)."""
    app = make_app(settings=Settings(last_selected_configuration="root"))
    app.start()
    app.on_tick()
    return app
