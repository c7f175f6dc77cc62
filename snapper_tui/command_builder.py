"""Build validated snapper argument vectors for each logical command."""

from __future__ import annotations

from typing import Sequence

SUPPORTED_COMMANDS = {
    "list-configs",
    "list",
    "list-wide",
    "status",
    "diff",
    "create",
    "modify",
    "delete",
    "mount",
    "umount",
    "rollback",
    "cleanup",
    "get-config",
    "set-config",
    "setup-quota",
}

LIST_COLUMNS = "number,date,user,description,cleanup,type"

_ID_COMMANDS = {"modify", "delete", "mount", "umount", "rollback"}
_RANGE_COMMANDS = {"status", "diff"}


def build_snapper_args(
    *,
    command: str,
    config: str = "",
    snapshot_id: int | None = None,
    from_id: int | None = None,
    to_id: int | None = None,
    description: str = "",
    algorithm: str = "",
    pairs: Sequence[str] = (),
) -> list[str]:
    """Return the argument vector (without the snapper binary) for `command`."""
    if command not in SUPPORTED_COMMANDS:
        raise ValueError(f"Unsupported command: {command}")
    if command == "list-configs":
        return ["list-configs"]
    if not config.strip():
        raise ValueError("config is required")

    args = ["-c", config.strip()]
    if command == "list":
        return args + ["list", "--columns", LIST_COLUMNS]
    if command == "list-wide":
        return args + ["list"]
    if command in _RANGE_COMMANDS:
        if from_id is None or to_id is None or from_id < 0 or to_id < 0:
            raise ValueError(f"a non-negative range is required for {command}")
        return args + [command, f"{from_id}..{to_id}"]
    if command in _ID_COMMANDS:
        if snapshot_id is None or snapshot_id < 0:
            raise ValueError(f"snapshot_id is required for {command}")
        args += [command, str(snapshot_id)]
        if command == "modify":
            args += ["-d", description]
        return args
    if command == "create":
        return args + ["create", "-d", description]
    if command == "cleanup":
        if not algorithm.strip():
            raise ValueError("algorithm is required for cleanup")
        return args + ["cleanup", algorithm.strip()]
    if command == "set-config":
        if not pairs:
            raise ValueError("at least one KEY=value pair is required for set-config")
        bad = [p for p in pairs if "=" not in p]
        if bad:
            raise ValueError(f"invalid set-config pair: {bad[0]}")
        return args + ["set-config", *pairs]
    return args + [command]
