"""Handlers for snapper-tui CLI commands. Each returns a process exit code."""

from __future__ import annotations

from typing import Any

from snapper_tui.app.filtering import filter_snapshots
from snapper_tui.config import load_app_config
from snapper_tui.logging import get_logger
from snapper_tui.parsing import parse_config_dump
from snapper_tui.snapper import SnapperClient

_log = get_logger("cli")


def _err(msg: str) -> None:
    _log.error("snapper-tui: %s", msg)


def _client() -> SnapperClient:
    return SnapperClient(load_app_config())


def handle_ui(args: Any) -> int:
    from snapper_qt.main import main as qt_main

    return qt_main()


def handle_configs(args: Any) -> int:
    result = _client().list_configs(elevated=getattr(args, "sudo", False))
    if not result.ok:
        _err(result.message)
        return 1
    for config in result.payload:
        print(config.name)
    return 0


def handle_list(args: Any) -> int:
    result = _client().list_snapshots(args.config, elevated=getattr(args, "sudo", False))
    if not result.ok:
        _err(result.message)
        return 1
    snapshots = filter_snapshots(result.payload, getattr(args, "filter", "") or "")
    for snap in snapshots:
        print(
            f"{snap.id:>5} | {snap.kind:<6} | {snap.date:<25} | {snap.user:<8} | "
            f"{snap.cleanup:<8} | {snap.description}"
        )
    return 0


def handle_get_config(args: Any) -> int:
    result = _client().get_config(args.config, elevated=getattr(args, "sudo", False))
    if not result.ok:
        _err(result.message)
        return 1
    fields = parse_config_dump(result.text)
    width = max((len(f.key) for f in fields), default=0)
    for field in fields:
        print(f"{field.key:<{width}} = {field.value}")
    return 0
