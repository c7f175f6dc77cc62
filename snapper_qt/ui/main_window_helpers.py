"""Pure formatting helpers for the main window (no Qt imports, unit-testable)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from snapper_tui.app.modes import Focus, InputKind, ModeKind

if TYPE_CHECKING:
    from snapper_tui.app import App

SPINNER_FRAMES = "|/-\\"
CURSOR_MARK = "▏"
SNAPSHOT_HEADERS = ("#", "Type", "Date", "User", "Cleanup", "Description")
FOOTER_HINTS = (
    "q quit · r refresh · c create · e edit · d delete · Enter status · x diff · "
    "m mount · U umount · R rollback · K cleanup · C config · g edit config · "
    "Q quota · Y limine · f fullscreen · F filter · o focus · u userdata · S sudo · ? help"
)

_INPUT_PROMPTS = {
    InputKind.CREATE: "New snapshot description",
    InputKind.EDIT: "Description",
    InputKind.CLEANUP_ALGORITHM: "Cleanup algorithm (number, timeline, empty-pre-post)",
    InputKind.FILTER: "Filter",
    InputKind.DETAILS_SEARCH: "Search",
    InputKind.HELP_SEARCH: "Search help",
    InputKind.CONFIG_FIELD: "Value",
}


def spinner_frame(tick: int) -> str:
    return SPINNER_FRAMES[tick % len(SPINNER_FRAMES)]


def status_line(app: App) -> str:
    parts = [
        f"focus: {'configs' if app.focus is Focus.CONFIGS else 'snapshots'}",
        f"sudo: {'on' if app.elevated else 'off'}",
    ]
    if app.filter_text:
        parts.append(f"filter: {app.filter_text}")
    loading_for = app.snapshots_loading_for
    if loading_for:
        parts.append(f"{spinner_frame(app.tick_count)} {loading_for}")
    if app.status:
        parts.append(app.status)
    return " | ".join(parts)


def config_labels(app: App) -> list[str]:
    return [c.name for c in app.configs]


def snapshot_rows(app: App) -> list[tuple[str, str, str, str, str, str]]:
    return [
        (str(s.id), s.kind, s.date, s.user, s.cleanup, s.description)
        for s in app.filtered
    ]


def userdata_line(app: App) -> str:
    snap = app.selected_snapshot()
    if snap is None:
        return "No snapshot selected"
    return (
        f"#{snap.id} · config: {snap.config or '-'} · user: {snap.user or '-'} · "
        f"cleanup: {snap.cleanup or '-'} · type: {snap.kind or '-'}"
    )


def input_with_cursor(text: str, cursor: int) -> str:
    return text[:cursor] + CURSOR_MARK + text[cursor:]


def config_form_text(app: App) -> str:
    if not app.config_fields:
        return "(no editable fields)"
    lines = []
    for index, field in enumerate(app.config_fields):
        marker = ">" if index == app.field_index else " "
        star = " *" if field.modified else ""
        lines.append(f"{marker} {field.key} = {field.value}{star}")
    lines.append("")
    lines.append("Enter/e edit · s/y apply · Esc cancel")
    return "\n".join(lines)


def overlay(app: App) -> tuple[str, str, int] | None:
    """(title, body, scroll line) for the current modal state, None in Normal mode."""
    mode = app.mode
    kind = mode.kind
    if kind is ModeKind.NORMAL:
        return None
    if kind is ModeKind.DETAILS:
        return app.details.title, app.details.text, app.details.offset
    if kind is ModeKind.HELP:
        return app.help.title, app.help.text, app.help.offset
    if kind is ModeKind.CONFIG_FORM:
        return "Edit config", config_form_text(app), app.field_index or 0
    if kind is ModeKind.LOADING:
        return "Working", f"{spinner_frame(app.tick_count)} {app.loading_message}\n\nEsc cancel", 0
    if kind is ModeKind.CONFIRM_DELETE:
        return "Confirm", f"Delete snapshot #{mode.snapshot_id}? (y/n)", 0
    if kind is ModeKind.CONFIRM_ROLLBACK:
        return "Confirm", f"Rollback to snapshot #{mode.snapshot_id}? (y/n)", 0
    if kind is ModeKind.CONFIRM_CLEANUP:
        return "Confirm", f"Run cleanup '{mode.algorithm}'? (y/n)", 0
    prompt = _INPUT_PROMPTS.get(mode.input_kind, "Input") if mode.input_kind else "Input"
    body = f"{prompt}: {input_with_cursor(app.input.text, app.input.cursor)}\n\nEnter submit · Esc cancel"
    return prompt, body, 0
