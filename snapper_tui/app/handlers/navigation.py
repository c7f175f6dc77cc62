"""List navigation, focus and mouse handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..events import MouseEvent, MouseKind
from ..modes import Focus, ModeKind

if TYPE_CHECKING:
    from ..application import App

WHEEL_STEP = 3


def toggle_focus(app: App) -> None:
    app.focus = Focus.CONFIGS if app.focus is Focus.SNAPSHOTS else Focus.SNAPSHOTS


def move_selection(app: App, delta: int) -> None:
    """Move the selection of the focused list by `delta`, clamped to its bounds."""
    if app.focus is Focus.CONFIGS:
        if not app.configs:
            return
        current = app.config_index if app.config_index is not None else 0
        target = max(0, min(current + delta, len(app.configs) - 1))
        if target != app.config_index:
            app.select_config(target)
        return
    if not app.filtered:
        return
    current = app.snapshot_index if app.snapshot_index is not None else 0
    app.snapshot_index = max(0, min(current + delta, len(app.filtered) - 1))


def select_first(app: App) -> None:
    if app.focus is Focus.CONFIGS:
        if app.configs and app.config_index != 0:
            app.select_config(0)
    elif app.filtered:
        app.snapshot_index = 0


def select_last(app: App) -> None:
    if app.focus is Focus.CONFIGS:
        last = len(app.configs) - 1
        if last >= 0 and app.config_index != last:
            app.select_config(last)
    elif app.filtered:
        app.snapshot_index = len(app.filtered) - 1


def select_prev_config(app: App) -> None:
    if not app.configs:
        return
    current = app.config_index if app.config_index is not None else 0
    app.select_config(max(0, current - 1))


def select_next_config(app: App) -> None:
    if not app.configs:
        return
    current = app.config_index if app.config_index is not None else 0
    app.select_config(min(current + 1, len(app.configs) - 1))


def on_mouse(app: App, event: MouseEvent) -> None:
    if event.kind is MouseKind.LEFT_CLICK:
        return
    step = -1 if event.kind is MouseKind.SCROLL_UP else 1
    if app.mode.kind is ModeKind.DETAILS:
        app.details.scroll_by(step * WHEEL_STEP)
    elif app.mode.kind is ModeKind.HELP:
        app.help.scroll_by(step * WHEEL_STEP)
    elif app.mode.kind is ModeKind.NORMAL:
        move_selection(app, step)
