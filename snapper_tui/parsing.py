"""Output Parser: turn snapper's loosely-structured text into typed records.

Every function here is pure and total: lines that do not fit a known layout
are dropped, never raised on.
"""

from __future__ import annotations

import re
from typing import Callable

from .models import ConfigField, Snapshot

NO_DESCRIPTION = "(no description)"

# Alternate vertical bars seen across snapper versions and terminals.
_BAR_GLYPHS = ("│", "┃", "┆", "┊", "║", "¦")
_RULER_EXTRA = set("-+=|_:")
_ID_RE = re.compile(r"^(\d+)[*+-]?$", re.ASCII)
_SPACE_RUN_RE = re.compile(r" {2,}")
_DUMP_HEADER_RE = re.compile(r"^key\s*(\||\s)\s*value\b", re.IGNORECASE)


def normalize_bars(text: str) -> str:
    for glyph in _BAR_GLYPHS:
        text = text.replace(glyph, "|")
    return text


def _is_box_drawing(ch: str) -> bool:
    return "─" <= ch <= "╿"


def is_ruler_line(line: str) -> bool:
    """True for separator rows: only box-drawing, ASCII ruler or whitespace characters."""
    stripped = line.strip()
    if not stripped:
        return False
    return all(ch.isspace() or _is_box_drawing(ch) or ch in _RULER_EXTRA for ch in stripped)


def _skippable(line: str) -> bool:
    return not line or line.startswith("#") or is_ruler_line(line)


def parse_snapshot_id(token: str) -> int | None:
    """Parse a snapshot number; tolerates snapper's trailing '*', '+' or '-' markers."""
    m = _ID_RE.match(token.strip())
    if not m:
        return None
    return int(m.group(1))


def placeholder_description(cleanup: str, kind: str) -> str:
    cleanup = cleanup.strip()
    kind = kind.strip()
    if cleanup and cleanup != "-":
        return f"[{cleanup}]"
    if kind and kind != "-":
        return f"[{kind}]"
    return NO_DESCRIPTION


def parse_snapshot_listing(text: str, config: str = "") -> list[Snapshot]:
    """Parse `snapper list --columns number,date,user,description,cleanup,type`.

    Six '|' separated fields per row; rows with fewer than six fields are read
    with the older three-field layout (number | date | description).
    """
    snaps: list[Snapshot] = []
    for raw in text.splitlines():
        line = raw.strip()
        if _skippable(line):
            continue
        parts = [p.strip() for p in normalize_bars(line).split("|", 5)]
        snap_id = parse_snapshot_id(parts[0])
        if snap_id is None:
            continue
        if len(parts) == 6:
            _, date, user, desc, cleanup, kind = parts
            snaps.append(
                Snapshot(
                    id=snap_id,
                    config=config,
                    kind=kind,
                    cleanup=cleanup,
                    user=user,
                    date=date,
                    description=desc or placeholder_description(cleanup, kind),
                )
            )
        elif len(parts) >= 3:
            snaps.append(
                Snapshot(
                    id=snap_id,
                    config=config,
                    date=parts[1],
                    description=parts[2] or NO_DESCRIPTION,
                )
            )
    return snaps


def parse_wide_listing(text: str, config: str = "") -> list[Snapshot]:
    """Parse the default `snapper list` table of snapper versions without --columns.

    Layout: # | Type | Pre # | Date | User | Cleanup | Description [| Userdata].
    """
    snaps: list[Snapshot] = []
    for raw in text.splitlines():
        line = raw.strip()
        if _skippable(line):
            continue
        parts = [p.strip() for p in normalize_bars(line).split("|")]
        snap_id = parse_snapshot_id(parts[0])
        if snap_id is None:
            continue
        if len(parts) >= 7:
            kind, date, user, cleanup, desc = parts[1], parts[3], parts[4], parts[5], parts[6]
            snaps.append(
                Snapshot(
                    id=snap_id,
                    config=config,
                    kind=kind,
                    cleanup=cleanup,
                    user=user,
                    date=date,
                    description=desc or placeholder_description(cleanup, kind),
                )
            )
        elif len(parts) >= 4:
            snaps.append(
                Snapshot(
                    id=snap_id,
                    config=config,
                    kind=parts[1],
                    date=parts[3],
                    description=parts[-1] or NO_DESCRIPTION,
                )
            )
    return snaps


def parse_config_names(text: str, exists: Callable[[str], bool] | None = None) -> list[str]:
    """Extract configuration names from `snapper list-configs` output."""
    names: set[str] = set()
    for raw in text.splitlines():
        line = normalize_bars(raw.strip())
        if _skippable(line):
            continue
        low = line.lower()
        if low.startswith("config") or "subvolume" in low:
            continue
        if "|" in line:
            token = line.split("|", 1)[0].strip()
        else:
            token = (line.split() or [""])[0]
        token = token.strip("*")
        if not token or token.lower() in {"name", "configs"}:
            continue
        names.add(token)
    if exists is not None:
        names = {n for n in names if exists(n)}
    return sorted(names)


def _split_pipe(line: str) -> tuple[str, str] | None:
    if "|" not in line:
        return None
    key, value = line.split("|", 1)
    return key.strip(), value.strip()


def _split_equals(line: str) -> tuple[str, str] | None:
    if "=" not in line:
        return None
    key, value = line.split("=", 1)
    return key.strip(), value.strip()


def _split_colon(line: str) -> tuple[str, str] | None:
    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    if key.strip().lower() == "config":
        return None
    return key.strip(), value.strip()


def _split_tab(line: str) -> tuple[str, str] | None:
    if "\t" not in line:
        return None
    key, value = line.split("\t", 1)
    return key.strip(), value.strip()


def _split_spaces(line: str) -> tuple[str, str] | None:
    m = _SPACE_RUN_RE.search(line)
    if not m:
        return None
    key, value = line[: m.start()].strip(), line[m.end() :].strip()
    if not value:
        return None
    return key, value


# Order matters: the first heuristic producing a non-empty key wins.
KEY_VALUE_HEURISTICS: tuple[Callable[[str], tuple[str, str] | None], ...] = (
    _split_pipe,
    _split_equals,
    _split_colon,
    _split_tab,
    _split_spaces,
)


def split_key_value(line: str) -> tuple[str, str] | None:
    for heuristic in KEY_VALUE_HEURISTICS:
        pair = heuristic(line)
        if pair is None:
            continue
        key, value = pair
        key = key[:-1].rstrip() if key.endswith(":") else key
        if key:
            return key, value
    return None


def parse_config_dump(text: str) -> list[ConfigField]:
    """Parse `snapper get-config` output into editable fields.

    Accepts 'Key | Value' tables, key=value, 'Key: Value', tab separated and
    column-aligned (two or more spaces) layouts.
    """
    fields: list[ConfigField] = []
    for raw in text.splitlines():
        line = raw.strip()
        if _skippable(line) or _DUMP_HEADER_RE.match(normalize_bars(line)):
            continue
        pair = split_key_value(normalize_bars(line))
        if pair is None:
            continue
        fields.append(ConfigField.parsed(*pair))
    return fields


def first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""
