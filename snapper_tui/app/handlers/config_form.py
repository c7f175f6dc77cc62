"""Config form: browse parsed get-config fields, edit values, apply with set-config."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...jobs import SetConfig
from ..modes import CONFIG_FORM, NORMAL, InputKind, Mode, ModeKind

if TYPE_CHECKING:
    from ..application import App


def move_field(app: App, delta: int) -> None:
    if not app.config_fields:
        return
    if app.field_index is None:
        app.field_index = 0
        return
    app.field_index = max(0, min(app.field_index + delta, len(app.config_fields) - 1))


def first_field(app: App) -> None:
    if app.config_fields:
        app.field_index = 0


def last_field(app: App) -> None:
    if app.config_fields:
        app.field_index = len(app.config_fields) - 1


def start_field_edit(app: App) -> None:
    index = app.field_index
    if index is None or not (0 <= index < len(app.config_fields)):
        return
    app.input.set(app.config_fields[index].value)
    app.mode = Mode.input(InputKind.CONFIG_FIELD, previous=ModeKind.CONFIG_FORM, field_index=index)


def finish_field_edit(app: App, index: int, value: str) -> None:
    if 0 <= index < len(app.config_fields):
        app.config_fields[index].set_value(value)
    app.mode = CONFIG_FORM


def pending_pairs(app: App) -> list[str]:
    """KEY=value arguments for every modified field, in form order."""
    return [f"{f.key}={f.value}" for f in app.config_fields if f.modified]


def apply_changes(app: App) -> None:
    cfg = app.selected_config_name()
    if cfg is None:
        app.status = "Select a config first"
        app.mode = NORMAL
        return
    pairs = pending_pairs(app)
    if not pairs:
        app.status = "No changes to apply"
        app.mode = NORMAL
        return
    client, elevated = app.client, app.elevated
    app.start_operation(
        SetConfig(cfg),
        lambda: client.set_config(cfg, pairs, elevated=elevated),
        "Applying config changes…",
    )
