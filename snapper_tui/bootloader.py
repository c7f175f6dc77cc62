"""Limine bootloader collaborator: sync snapper snapshots into boot entries.

The actual entry generation is delegated to `limine-snapper-sync`; this module
only locates the tools and reports their output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from .executor import execute, has_cmd
from .logging import get_logger
from .models import CommandResult

logger = get_logger(__name__)

LIMINE_CONF_CANDIDATES = (
    "/boot/limine.conf",
    "/boot/limine/limine.conf",
    "/boot/EFI/limine/limine.conf",
    "/efi/limine.conf",
    "/efi/EFI/limine/limine.conf",
    "/boot/efi/EFI/limine/limine.conf",
)

SYNC_TOOL = "limine-snapper-sync"


class LimineSync:
    def __init__(
        self,
        *,
        executor: Callable[..., CommandResult] = execute,
        which: Callable[[str], bool] = has_cmd,
        conf_candidates: Sequence[str] = LIMINE_CONF_CANDIDATES,
    ) -> None:
        self._execute = executor
        self._which = which
        self._conf_candidates = tuple(conf_candidates)

    def is_installed(self) -> bool:
        return self._which("limine")

    def has_sync(self) -> bool:
        return self._which(SYNC_TOOL)

    def detect_limine_conf(self) -> Path | None:
        for candidate in self._conf_candidates:
            path = Path(candidate)
            if path.is_file():
                return path
        return None

    def sync_snapshot(self, snapshot_id: int, name: str, *, elevated: bool = False) -> CommandResult:
        """Regenerate Limine snapshot entries; payload is a human-readable log."""
        if not self.has_sync():
            hint = "" if self.is_installed() else " (limine itself is not installed either)"
            return CommandResult.failure(f"{SYNC_TOOL} not found in PATH{hint}")
        conf = self.detect_limine_conf()
        logger.info("syncing snapshot #%s of %s to Limine (conf: %s)", snapshot_id, name, conf)
        result = self._execute(SYNC_TOOL, [], elevated=elevated, label=SYNC_TOOL)
        if not result.ok:
            return result
        lines = [
            f"Snapshot: {name} #{snapshot_id}",
            f"limine.conf: {conf if conf is not None else 'not found'}",
            "",
            result.text.rstrip() or f"{SYNC_TOOL} finished without output",
        ]
        return CommandResult.success("\n".join(lines))
