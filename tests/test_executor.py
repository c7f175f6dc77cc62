from pathlib import Path
import subprocess
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from snapper_tui import executor
from snapper_tui.errors import FailureKind, classify_failure, failure_hint, mentions_unknown_config


class _Recorder:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "", exc: Exception | None = None) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.exc = exc
        self.argv: list[str] | None = None

    def __call__(self, argv, **kwargs):
        self.argv = argv
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(argv, self.returncode, self.stdout, self.stderr)


def test_build_argv_prefixes_non_interactive_sudo() -> None:
    assert executor.build_argv("snapper", ["list-configs"], elevated=False) == ["snapper", "list-configs"]
    assert executor.build_argv("snapper", ["list-configs"], elevated=True) == ["sudo", "-n", "snapper", "list-configs"]


def test_execute_success_returns_stdout(monkeypatch) -> None:
    rec = _Recorder(stdout="1 | a\n")
    monkeypatch.setattr(executor.subprocess, "run", rec)
    result = executor.execute("snapper", ["-c", "root", "list"], elevated=True)
    assert result.ok
    assert result.text == "1 | a\n"
    assert rec.argv == ["sudo", "-n", "snapper", "-c", "root", "list"]


def test_execute_failure_uses_stderr_and_hint(monkeypatch) -> None:
    monkeypatch.setattr(executor.subprocess, "run", _Recorder(returncode=1, stderr="Unknown config.\n"))
    result = executor.execute("snapper", ["-c", "nope", "list"], label="snapper list")
    assert not result.ok
    assert result.message.startswith("snapper list failed: Unknown config.")
    assert "hint: check the config name" in result.message


def test_execute_failure_without_stderr_reports_exit_code(monkeypatch) -> None:
    monkeypatch.setattr(executor.subprocess, "run", _Recorder(returncode=3))
    result = executor.execute("snapper", ["list-configs"])
    assert result.message == "snapper failed: exit code 3"


def test_execute_missing_binary(monkeypatch) -> None:
    monkeypatch.setattr(executor.subprocess, "run", _Recorder(exc=FileNotFoundError("snapper")))
    monkeypatch.setattr(executor, "has_cmd", lambda cmd: True)
    result = executor.execute("snapper", ["list-configs"])
    assert result.message == "snapper not found in PATH"


def test_execute_missing_sudo_is_reported(monkeypatch) -> None:
    monkeypatch.setattr(executor.subprocess, "run", _Recorder(exc=FileNotFoundError("sudo")))
    monkeypatch.setattr(executor, "has_cmd", lambda cmd: cmd != "sudo")
    result = executor.execute("snapper", ["list-configs"], elevated=True)
    assert result.message == "sudo not found in PATH"


def test_execute_timeout(monkeypatch) -> None:
    monkeypatch.setattr(executor.subprocess, "run", _Recorder(exc=subprocess.TimeoutExpired(["snapper"], 5)))
    result = executor.execute("snapper", ["list"], timeout=5, label="snapper list")
    assert result.message == "snapper list timed out after 5s"


class _LogRecorder:
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def debug(self, fmt, *args) -> None:
        self.records.append(("debug", fmt % args))

    def info(self, fmt, *args) -> None:
        self.records.append(("info", fmt % args))

    def warning(self, fmt, *args) -> None:
        self.records.append(("warning", fmt % args))


def test_execute_logs_failure_kind_at_matching_level(monkeypatch) -> None:
    log = _LogRecorder()
    monkeypatch.setattr(executor, "logger", log)

    monkeypatch.setattr(executor.subprocess, "run", _Recorder(returncode=1, stderr="Illegal snapshot.\n"))
    executor.execute("snapper", ["-c", "root", "delete", "7"], label="snapper delete")
    monkeypatch.setattr(executor.subprocess, "run", _Recorder(returncode=1, stderr="Failure (org.freedesktop.DBus.Error.AccessDenied)."))
    executor.execute("snapper", ["-c", "root", "delete", "7"], label="snapper delete")

    failures = [r for r in log.records if r[0] != "debug"]
    assert failures[0] == ("info", "command failure: snapper delete failed: Illegal snapshot.")
    assert failures[1][0] == "warning"
    assert failures[1][1].startswith("privilege failure: snapper delete failed: Failure")


def test_password_prompt_hint_only_when_elevated() -> None:
    msg = "sudo: a password is required"
    assert "sudo -v" in failure_hint(msg, elevated=True)
    assert "toggle sudo" not in failure_hint(msg, elevated=True)
    assert failure_hint("Permission denied", elevated=False) == " (hint: press 'S' to toggle sudo mode)"
    assert "sudoers" in failure_hint("Permission denied", elevated=True)
    assert failure_hint("something else", elevated=True) == ""


def test_classify_failure() -> None:
    assert classify_failure("snapper not found in PATH") is FailureKind.ENVIRONMENT
    assert classify_failure("Unknown config 'x'") is FailureKind.ENVIRONMENT
    assert classify_failure("Failure (org.freedesktop.DBus.Error.AccessDenied)") is FailureKind.PRIVILEGE
    assert classify_failure("Illegal snapshot.") is FailureKind.COMMAND
    assert mentions_unknown_config("snapper list failed: Unknown config.")
    assert not mentions_unknown_config("Illegal snapshot.")
