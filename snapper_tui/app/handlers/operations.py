"""Snapshot and configuration commands: prompts, confirmations and job launches.

Every job closure captures plain copies (client, config name, ids, elevated
flag) so the worker never touches App state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...jobs import (
    BootloaderSync,
    Cleanup,
    CreateSnapshot,
    DeleteSnapshot,
    DiffRange,
    GetConfigForEdit,
    ModifySnapshot,
    Mount,
    Rollback,
    SetupQuota,
    Slot,
    StatusRange,
    Umount,
    ViewConfig,
)
from ...logging import get_logger
from ..modes import NORMAL, InputKind, Mode, ModeKind, plain_mode
from . import config_form

if TYPE_CHECKING:
    from ...models import Snapshot
    from ..application import App
    from ..scroll_view import ScrollView

logger = get_logger(__name__)

CLEANUP_PROMPT = "Enter cleanup algorithm (e.g., number, timeline, empty-pre-post)"

_DECLINED = {
    ModeKind.CONFIRM_DELETE: "Delete cancelled",
    ModeKind.CONFIRM_ROLLBACK: "Rollback cancelled",
    ModeKind.CONFIRM_CLEANUP: "Cleanup cancelled",
}


def _require_config(app: App) -> str | None:
    name = app.selected_config_name()
    if name is None:
        app.status = "Select a config first"
    return name


def _require_snapshot(app: App, hint: str = "Select a snapshot") -> Snapshot | None:
    snap = app.selected_snapshot()
    if snap is None:
        app.status = hint
    return snap


def _range_for_selection(app: App) -> tuple[int, int] | None:
    """(previous row id, selected id), or (0, selected id) on the first row."""
    snap = _require_snapshot(app)
    if snap is None:
        return None
    index = app.snapshot_index or 0
    from_id = app.filtered[index - 1].id if index > 0 else 0
    return from_id, snap.id


# -- read-only views --------------------------------------------------------


def start_status(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    span = _range_for_selection(app)
    if span is None:
        return
    from_id, to_id = span
    client, elevated = app.client, app.elevated
    app.details.set_content("", title=f"Status {from_id}..{to_id}")
    app.start_operation(
        StatusRange(from_id, to_id),
        lambda: client.status(cfg, from_id, to_id, elevated=elevated),
        f"Fetching status {from_id}..{to_id}",
    )


def start_diff(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    span = _range_for_selection(app)
    if span is None:
        return
    from_id, to_id = span
    client, elevated = app.client, app.elevated
    app.details.set_content("", title=f"Diff {from_id}..{to_id}")
    app.start_operation(
        DiffRange(from_id, to_id),
        lambda: client.diff(cfg, from_id, to_id, elevated=elevated),
        f"Fetching diff {from_id}..{to_id}",
    )


def start_view_config(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    client, elevated = app.client, app.elevated
    app.start_operation(
        ViewConfig(cfg),
        lambda: client.get_config(cfg, elevated=elevated),
        f"Loading config: {cfg}",
    )


def start_config_edit(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    app.config_fields = []
    app.field_index = None
    client, elevated = app.client, app.elevated
    app.start_operation(
        GetConfigForEdit(cfg),
        lambda: client.get_config(cfg, elevated=elevated),
        "Loading config for edit…",
    )


# -- single-snapshot operations ----------------------------------------------


def start_mount(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    snap = _require_snapshot(app)
    if snap is None:
        return
    client, elevated, snap_id = app.client, app.elevated, snap.id
    app.start_operation(
        Mount(snap_id),
        lambda: client.mount(cfg, snap_id, elevated=elevated),
        f"Mounting #{snap_id}",
    )


def start_umount(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    snap = _require_snapshot(app)
    if snap is None:
        return
    client, elevated, snap_id = app.client, app.elevated, snap.id
    app.start_operation(
        Umount(snap_id),
        lambda: client.umount(cfg, snap_id, elevated=elevated),
        f"Unmounting #{snap_id}",
    )


def start_bootloader_sync(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    snap = _require_snapshot(app)
    if snap is None:
        return
    bootloader, elevated, snap_id = app.bootloader, app.elevated, snap.id
    name = f"{cfg}-{snap_id}"
    app.details.set_content("", title=f"Limine sync for {name}")
    app.start_operation(
        BootloaderSync(snap_id, name),
        lambda: bootloader.sync_snapshot(snap_id, name, elevated=elevated),
        f"Syncing snapshot #{snap_id} to Limine…",
    )


def start_setup_quota(app: App) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    client, elevated = app.client, app.elevated
    app.start_operation(
        SetupQuota(cfg),
        lambda: client.setup_quota(cfg, elevated=elevated),
        f"Setting up quota for {cfg}",
    )


# -- prompts and confirmations ----------------------------------------------


def start_create(app: App) -> None:
    if _require_config(app) is None:
        return
    app.input.clear()
    app.mode = Mode.input(InputKind.CREATE)


def start_edit(app: App) -> None:
    if _require_config(app) is None:
        return
    snap = _require_snapshot(app, "Select a snapshot to edit")
    if snap is None:
        return
    app.input.set(snap.description)
    app.mode = Mode.input(InputKind.EDIT, snapshot_id=snap.id)


def start_filter_input(app: App) -> None:
    app.input.set(app.filter_text)
    app.mode = Mode.input(InputKind.FILTER)


def start_cleanup_input(app: App) -> None:
    if _require_config(app) is None:
        return
    app.input.clear()
    app.mode = Mode.input(InputKind.CLEANUP_ALGORITHM)


def start_delete_confirm(app: App) -> None:
    snap = _require_snapshot(app, "Select a snapshot to delete")
    if snap is None:
        return
    app.mode = Mode.confirm_delete(snap.id)


def start_rollback_confirm(app: App) -> None:
    snap = _require_snapshot(app, "Select a snapshot to rollback")
    if snap is None:
        return
    app.mode = Mode.confirm_rollback(snap.id)


def cancel_input(app: App) -> None:
    """Leave Input mode without side effects, back to where it was opened from."""
    previous = app.mode.previous
    app.input.clear()
    app.mode = plain_mode(previous)
    if previous is ModeKind.NORMAL:
        app.status = "Cancelled"


def submit_input(app: App) -> None:
    mode = app.mode
    text = app.input.text.strip()
    app.input.clear()
    kind = mode.input_kind
    if kind is InputKind.CREATE:
        _submit_create(app, text)
    elif kind is InputKind.EDIT and mode.snapshot_id is not None:
        _submit_edit(app, mode.snapshot_id, text)
    elif kind is InputKind.CLEANUP_ALGORITHM:
        _submit_cleanup_algorithm(app, text)
    elif kind is InputKind.FILTER:
        _submit_filter(app, text)
    elif kind is InputKind.DETAILS_SEARCH:
        _submit_search(app, app.details, text, mode.previous)
    elif kind is InputKind.HELP_SEARCH:
        _submit_search(app, app.help, text, mode.previous)
    elif kind is InputKind.CONFIG_FIELD and mode.field_index is not None:
        config_form.finish_field_edit(app, mode.field_index, text)
    else:
        app.mode = NORMAL


def _submit_create(app: App, description: str) -> None:
    app.mode = NORMAL
    cfg = _require_config(app)
    if cfg is None:
        return
    client, elevated = app.client, app.elevated
    app.start_operation(
        CreateSnapshot(cfg),
        lambda: client.create(cfg, description, elevated=elevated),
        f"Creating snapshot in {cfg}…",
    )


def _submit_edit(app: App, snap_id: int, description: str) -> None:
    app.mode = NORMAL
    cfg = _require_config(app)
    if cfg is None:
        return
    client, elevated = app.client, app.elevated
    app.start_operation(
        ModifySnapshot(snap_id),
        lambda: client.modify(cfg, snap_id, description, elevated=elevated),
        f"Updating snapshot #{snap_id}…",
    )


def _submit_cleanup_algorithm(app: App, algorithm: str) -> None:
    if not algorithm:
        app.status = CLEANUP_PROMPT
        app.mode = NORMAL
        return
    app.mode = Mode.confirm_cleanup(algorithm)


def _submit_filter(app: App, query: str) -> None:
    app.filter_text = query
    app.apply_filter()
    app.snapshot_index = 0 if app.filtered else None
    app.persist()
    app.mode = NORMAL


def _submit_search(app: App, view: ScrollView, query: str, back: ModeKind) -> None:
    app.mode = plain_mode(back)
    if not query:
        return
    if not view.search(query):
        app.status = f"No match for '{query}'"


def confirm(app: App) -> None:
    mode = app.mode
    app.mode = NORMAL
    if mode.kind is ModeKind.CONFIRM_DELETE and mode.snapshot_id is not None:
        _run_delete(app, mode.snapshot_id)
    elif mode.kind is ModeKind.CONFIRM_ROLLBACK and mode.snapshot_id is not None:
        _run_rollback(app, mode.snapshot_id)
    elif mode.kind is ModeKind.CONFIRM_CLEANUP and mode.algorithm:
        _run_cleanup(app, mode.algorithm)


def decline(app: App) -> None:
    app.status = _DECLINED.get(app.mode.kind, "Cancelled")
    app.mode = NORMAL


def _run_delete(app: App, snap_id: int) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    client, elevated = app.client, app.elevated
    app.start_operation(
        DeleteSnapshot(snap_id),
        lambda: client.delete(cfg, snap_id, elevated=elevated),
        f"Deleting snapshot #{snap_id}…",
    )


def _run_rollback(app: App, snap_id: int) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    client, elevated = app.client, app.elevated
    app.start_operation(
        Rollback(snap_id),
        lambda: client.rollback(cfg, snap_id, elevated=elevated),
        f"Rolling back to #{snap_id}",
    )


def _run_cleanup(app: App, algorithm: str) -> None:
    cfg = _require_config(app)
    if cfg is None:
        return
    client, elevated = app.client, app.elevated
    app.details.set_content("", title=f"Cleanup: {algorithm}")
    app.start_operation(
        Cleanup(algorithm),
        lambda: client.cleanup(cfg, algorithm, elevated=elevated),
        f"Cleaning up: {algorithm}",
    )


def cancel_loading(app: App) -> None:
    """Stop waiting for the operation. The external command is not interrupted."""
    op = app.dispatcher.cancel(Slot.OPERATION)
    if op is not None:
        logger.warning("stopped waiting for %s; the external command may still complete", op)
    app.mode = NORMAL
    app.status = "Cancelled"
