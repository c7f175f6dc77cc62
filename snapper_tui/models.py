"""Data models shared by the snapper client, parser and state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(slots=True)
class Config:
    """A snapper configuration (named scope of snapshots)."""

    name: str


@dataclass(slots=True)
class Snapshot:
    """One row of a snapper listing. `kind` holds snapper's Type column."""

    id: int
    config: str
    kind: str = ""
    cleanup: str = ""
    user: str = ""
    date: str = ""
    description: str = ""


@dataclass(slots=True)
class ConfigField:
    """Editable key/value pair parsed from `snapper get-config`."""

    key: str
    value: str
    original: str
    modified: bool = False

    @classmethod
    def parsed(cls, key: str, value: str) -> ConfigField:
        return cls(key=key, value=value, original=value, modified=False)

    def set_value(self, value: str) -> None:
        self.value = value
        self.modified = value != self.original


@dataclass(slots=True)
class CommandResult:
    """Normalized outcome of one external call.

    `payload` carries the output text, or parsed records for listing calls.
    `message` is a one-line, user-facing failure reason.
    """

    status: Literal["ok", "error"] = "ok"
    payload: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def text(self) -> str:
        return self.payload if isinstance(self.payload, str) else ""

    @classmethod
    def success(cls, payload: Any = "") -> CommandResult:
        return cls(status="ok", payload=payload)

    @classmethod
    def failure(cls, message: str) -> CommandResult:
        return cls(status="error", payload=None, message=message)
