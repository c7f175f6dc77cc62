"""Interaction modes of the application state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ModeKind(str, Enum):
    NORMAL = "normal"
    INPUT = "input"
    CONFIRM_DELETE = "confirm_delete"
    CONFIRM_ROLLBACK = "confirm_rollback"
    CONFIRM_CLEANUP = "confirm_cleanup"
    HELP = "help"
    DETAILS = "details"
    LOADING = "loading"
    CONFIG_FORM = "config_form"


class InputKind(str, Enum):
    """What a submitted input buffer is used for."""

    CREATE = "create"
    EDIT = "edit"
    CLEANUP_ALGORITHM = "cleanup_algorithm"
    FILTER = "filter"
    DETAILS_SEARCH = "details_search"
    HELP_SEARCH = "help_search"
    CONFIG_FIELD = "config_field"


class Focus(str, Enum):
    CONFIGS = "configs"
    SNAPSHOTS = "snapshots"


@dataclass(frozen=True, slots=True)
class Mode:
    """Exactly one Mode is active. Payload fields are only meaningful for their kind.

    - INPUT: `input_kind`, `previous` (where cancel returns), `snapshot_id` for EDIT,
      `field_index` for CONFIG_FIELD.
    - CONFIRM_DELETE / CONFIRM_ROLLBACK: `snapshot_id`.
    - CONFIRM_CLEANUP: `algorithm`.
    """

    kind: ModeKind
    input_kind: InputKind | None = None
    previous: ModeKind = ModeKind.NORMAL
    snapshot_id: int | None = None
    field_index: int | None = None
    algorithm: str = ""

    @classmethod
    def input(
        cls,
        input_kind: InputKind,
        *,
        previous: ModeKind = ModeKind.NORMAL,
        snapshot_id: int | None = None,
        field_index: int | None = None,
    ) -> Mode:
        return cls(
            ModeKind.INPUT,
            input_kind=input_kind,
            previous=previous,
            snapshot_id=snapshot_id,
            field_index=field_index,
        )

    @classmethod
    def confirm_delete(cls, snapshot_id: int) -> Mode:
        return cls(ModeKind.CONFIRM_DELETE, snapshot_id=snapshot_id)

    @classmethod
    def confirm_rollback(cls, snapshot_id: int) -> Mode:
        return cls(ModeKind.CONFIRM_ROLLBACK, snapshot_id=snapshot_id)

    @classmethod
    def confirm_cleanup(cls, algorithm: str) -> Mode:
        return cls(ModeKind.CONFIRM_CLEANUP, algorithm=algorithm)


NORMAL = Mode(ModeKind.NORMAL)
HELP = Mode(ModeKind.HELP)
DETAILS = Mode(ModeKind.DETAILS)
LOADING = Mode(ModeKind.LOADING)
CONFIG_FORM = Mode(ModeKind.CONFIG_FORM)

_PLAIN_MODES = {
    ModeKind.NORMAL: NORMAL,
    ModeKind.HELP: HELP,
    ModeKind.DETAILS: DETAILS,
    ModeKind.LOADING: LOADING,
    ModeKind.CONFIG_FORM: CONFIG_FORM,
}


def plain_mode(kind: ModeKind) -> Mode:
    """Mode for a payload-free kind (used to return from Input); falls back to Normal."""
    return _PLAIN_MODES.get(kind, NORMAL)
