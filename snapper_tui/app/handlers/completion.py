"""Completion poll: route finished background jobs back into the state machine.

Called once per tick. Each tracked slot is checked without blocking; a result
is applied at most once and only while its slot still tracks it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from ...errors import mentions_unknown_config
from ...jobs import (
    BootloaderSync,
    Cleanup,
    CreateSnapshot,
    DeleteSnapshot,
    DiffRange,
    GetConfigForEdit,
    ModifySnapshot,
    Mount,
    PendingOp,
    PollResult,
    PollState,
    Rollback,
    SetConfig,
    SetupQuota,
    Slot,
    SnapshotListing,
    StatusRange,
    Umount,
    ViewConfig,
)
from ...logging import get_logger
from ...models import CommandResult
from ...parsing import first_line, parse_config_dump
from ..modes import CONFIG_FORM, DETAILS, NORMAL

if TYPE_CHECKING:
    from ..application import App

logger = get_logger(__name__)


def poll_all(app: App) -> None:
    for slot in (Slot.CONFIGS, Slot.SNAPSHOTS, Slot.OPERATION):
        polled = app.dispatcher.poll(slot)
        if polled is None:
            continue
        op, result = polled
        _ROUTES[slot](app, op, result)


def _as_result(polled: PollResult) -> CommandResult | None:
    """None when the worker died without sending anything."""
    if polled.state is PollState.DISCONNECTED:
        return None
    value = polled.value
    if isinstance(value, CommandResult):
        return value
    return CommandResult.failure(f"unexpected job result: {value!r}")


# -- configuration list --------------------------------------------------------


def _on_configs(app: App, op: PendingOp, polled: PollResult) -> None:
    result = _as_result(polled)
    if result is None:
        app.status = "Loading configs failed (disconnected)"
        return
    if not result.ok:
        app.status = f"Failed to list configs: {result.message}"
        return
    app.configs = list(result.payload or [])
    if not app.configs:
        app.config_index = None
        app.show_snapshots([])
        app.status = "No snapper configs found"
        return
    names = [c.name for c in app.configs]
    wanted = app.selected_config_name() or app.preferred_config
    if wanted in names:
        index = names.index(wanted)
    else:
        index = min(app.config_index or 0, len(names) - 1)
    app.status = ""
    app.select_config(index)


# -- snapshot listing --------------------------------------------------------


def _on_snapshots(app: App, op: PendingOp, polled: PollResult) -> None:
    config = op.config if isinstance(op, SnapshotListing) else ""
    result = _as_result(polled)
    if result is None:
        app.status = "Loading snapshots failed (disconnected)"
        return
    still_selected = app.selected_config_name() == config
    if result.ok:
        snapshots = list(result.payload or [])
        app.cache.put(config, snapshots)
        if still_selected:
            app.show_snapshots(snapshots)
            app.status = ""
        return
    message = f"Failed to list snapshots for {config}: {result.message}"
    if mentions_unknown_config(result.message):
        known = app.client.available_configs_fs()
        if known:
            message += f" | Known configs: {', '.join(known)}"
    app.status = message
    if still_selected:
        app.show_snapshots([])


# -- operations ------------------------------------------------------------


def _show_details(app: App, title: str, text: str) -> None:
    app.details.set_content(text, title=title)
    app.mode = DETAILS


def _summary(text: str, done: str, prefix: str) -> str:
    line = first_line(text)
    return f"{prefix}: {line}" if line else done


def _reload_after_change(app: App) -> None:
    app.cache.invalidate_all()
    app.load_snapshots_for_selected()


def _status_done(app: App, op: StatusRange, result: CommandResult) -> None:
    _show_details(app, f"Status {op.from_id}..{op.to_id}", result.text)


def _diff_done(app: App, op: DiffRange, result: CommandResult) -> None:
    _show_details(app, f"Diff {op.from_id}..{op.to_id}", result.text)


def _cleanup_done(app: App, op: Cleanup, result: CommandResult) -> None:
    _show_details(app, f"Cleanup: {op.algorithm}", result.text)
    _reload_after_change(app)


def _view_config_done(app: App, op: ViewConfig, result: CommandResult) -> None:
    _show_details(app, f"Config: {op.config}", result.text)


def _bootloader_done(app: App, op: BootloaderSync, result: CommandResult) -> None:
    _show_details(app, f"Limine sync for {op.name} (#{op.id}): result", result.text)


def _mount_done(app: App, op: Mount, result: CommandResult) -> None:
    app.status = _summary(result.text, f"Mounted #{op.id}", f"Mounted #{op.id}")
    app.mode = NORMAL


def _umount_done(app: App, op: Umount, result: CommandResult) -> None:
    app.status = _summary(result.text, f"Unmounted #{op.id}", f"Unmounted #{op.id}")
    app.mode = NORMAL


def _rollback_done(app: App, op: Rollback, result: CommandResult) -> None:
    app.mode = NORMAL
    app.refresh_all()
    app.status = _summary(result.text, f"Rollback to #{op.id} completed", f"Rollback #{op.id}")


def _quota_done(app: App, op: SetupQuota, result: CommandResult) -> None:
    app.mode = NORMAL
    app.refresh_all()
    app.status = _summary(result.text, "Quota setup completed", "Quota")


def _set_config_done(app: App, op: SetConfig, result: CommandResult) -> None:
    app.mode = NORMAL
    _reload_after_change(app)
    app.status = _summary(result.text, "Config updated", "Set-config")


def _config_for_edit_done(app: App, op: GetConfigForEdit, result: CommandResult) -> None:
    app.config_fields = parse_config_dump(result.text)
    app.field_index = 0 if app.config_fields else None
    app.status = ""
    app.mode = CONFIG_FORM


def _create_done(app: App, op: CreateSnapshot, result: CommandResult) -> None:
    app.mode = NORMAL
    _reload_after_change(app)
    app.status = f"Created snapshot in {op.config}"


def _modify_done(app: App, op: ModifySnapshot, result: CommandResult) -> None:
    app.mode = NORMAL
    _reload_after_change(app)
    app.status = f"Edited snapshot #{op.id}"


def _delete_done(app: App, op: DeleteSnapshot, result: CommandResult) -> None:
    app.mode = NORMAL
    _reload_after_change(app)
    app.status = f"Deleted snapshot #{op.id}"


_ON_SUCCESS: dict[type, Callable[[App, Any, CommandResult], None]] = {
    StatusRange: _status_done,
    DiffRange: _diff_done,
    Cleanup: _cleanup_done,
    ViewConfig: _view_config_done,
    BootloaderSync: _bootloader_done,
    Mount: _mount_done,
    Umount: _umount_done,
    Rollback: _rollback_done,
    SetupQuota: _quota_done,
    SetConfig: _set_config_done,
    GetConfigForEdit: _config_for_edit_done,
    CreateSnapshot: _create_done,
    ModifySnapshot: _modify_done,
    DeleteSnapshot: _delete_done,
}


def _on_operation(app: App, op: PendingOp, polled: PollResult) -> None:
    result = _as_result(polled)
    if result is None:
        app.status = "Operation failed (disconnected)"
        app.mode = NORMAL
        return
    if not result.ok:
        app.status = f"Operation failed: {result.message}"
        app.mode = NORMAL
        return
    handler = _ON_SUCCESS.get(type(op))
    if handler is None:
        logger.error("no completion route for %r", op)
        app.mode = NORMAL
        return
    handler(app, op, result)


_ROUTES: dict[Slot, Callable[[App, PendingOp, PollResult], None]] = {
    Slot.CONFIGS: _on_configs,
    Slot.SNAPSHOTS: _on_snapshots,
    Slot.OPERATION: _on_operation,
}
