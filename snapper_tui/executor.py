"""Command Executor: run one external program and normalize the outcome.

Blocking; call it from a background job, never from the event loop.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import Sequence

from .errors import FailureKind, classify_failure, failure_hint
from .logging import get_logger
from .models import CommandResult

logger = get_logger(__name__)


def has_cmd(cmd: str) -> bool:
    return shutil.which(cmd) is not None


def build_argv(cmd: str, args: Sequence[str], *, elevated: bool) -> list[str]:
    """Prefix with non-interactive sudo so a password prompt fails fast instead of hanging."""
    if elevated:
        return ["sudo", "-n", cmd, *args]
    return [cmd, *args]


def run(
    cmd: str,
    args: Sequence[str],
    *,
    elevated: bool = False,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    argv = build_argv(cmd, args, elevated=elevated)
    logger.debug("exec: %s", " ".join(argv))
    return subprocess.run(
        argv,
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
        timeout=timeout,
    )


def execute(
    cmd: str,
    args: Sequence[str],
    *,
    elevated: bool = False,
    timeout: float | None = None,
    label: str = "",
) -> CommandResult:
    """Run `cmd args` and return stdout on success or a hinted failure message."""
    name = label or cmd
    try:
        proc = run(cmd, args, elevated=elevated, timeout=timeout)
    except FileNotFoundError:
        missing = "sudo" if elevated and not has_cmd("sudo") else cmd
        return CommandResult.failure(f"{missing} not found in PATH")
    except subprocess.TimeoutExpired:
        return CommandResult.failure(f"{name} timed out after {timeout}s")
    except OSError as exc:
        return CommandResult.failure(f"error running {name}: {exc}")
    if proc.returncode == 0:
        return CommandResult.success(proc.stdout or "")
    err = (proc.stderr or "").strip() or f"exit code {proc.returncode}"
    message = f"{name} failed: {err}{failure_hint(err, elevated=elevated)}"
    kind = classify_failure(err)
    # environment and privilege failures log as warnings
    log = logger.info if kind is FailureKind.COMMAND else logger.warning
    log("%s failure: %s", kind.value, message)
    return CommandResult.failure(message)
