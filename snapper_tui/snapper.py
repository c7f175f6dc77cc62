"""Snapper client: every snapper operation as a CommandResult-returning call.

Blocking. The state machine only calls these from inside background jobs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from .command_builder import build_snapper_args
from .config import AppConfig, load_app_config
from .executor import execute
from .logging import get_logger
from .models import CommandResult, Config
from .parsing import parse_config_names, parse_snapshot_listing, parse_wide_listing

logger = get_logger(__name__)

Executor = Callable[..., CommandResult]

DEFAULT_CREATE_DESCRIPTION = "Created via snapper-tui"


class SnapperClient:
    """Thin adapter that keeps the snapper binary and configs directory in one place."""

    def __init__(self, config: AppConfig | None = None, executor: Executor = execute) -> None:
        self._config = config or load_app_config()
        self._execute = executor

    @property
    def configs_dir(self) -> Path:
        return self._config.configs_dir

    def _run(self, *, command: str, elevated: bool, **kwargs) -> CommandResult:
        try:
            args = build_snapper_args(command=command, **kwargs)
        except ValueError as exc:
            return CommandResult.failure(str(exc))
        return self._execute(
            self._config.snapper_bin,
            args,
            elevated=elevated,
            label=f"snapper {command}",
        )

    def _unknown(self, config: str) -> CommandResult | None:
        if self.config_exists(config):
            return None
        return CommandResult.failure(f"Unknown config '{config}' (not found in {self.configs_dir})")

    def available_configs_fs(self) -> list[str]:
        """Config names present in the configs directory, sorted."""
        try:
            entries = list(self.configs_dir.iterdir())
        except OSError:
            return []
        return sorted(p.name for p in entries if p.is_file() and not p.name.startswith("."))

    def config_exists(self, name: str) -> bool:
        return bool(name) and (self.configs_dir / name).exists()

    def list_configs(self, *, elevated: bool = False) -> CommandResult:
        """Payload: list[Config]. Reads the configs directory, then `snapper list-configs`."""
        names = self.available_configs_fs()
        if names:
            return CommandResult.success([Config(name=n) for n in names])
        result = self._run(command="list-configs", elevated=elevated)
        if not result.ok:
            return result
        parsed = parse_config_names(result.text, exists=self.config_exists)
        logger.debug("list-configs fallback found %d configs", len(parsed))
        return CommandResult.success([Config(name=n) for n in parsed])

    def list_snapshots(self, config: str, *, elevated: bool = False) -> CommandResult:
        """Payload: list[Snapshot]. Falls back to the wide table when --columns is unsupported."""
        unknown = self._unknown(config)
        if unknown is not None:
            return unknown
        result = self._run(command="list", config=config, elevated=elevated)
        if result.ok:
            return CommandResult.success(parse_snapshot_listing(result.text, config))
        logger.debug("list --columns failed for %s, retrying plain list", config)
        wide = self._run(command="list-wide", config=config, elevated=elevated)
        if not wide.ok:
            return wide
        return CommandResult.success(parse_wide_listing(wide.text, config))

    def status(self, config: str, from_id: int, to_id: int, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="status", from_id=from_id, to_id=to_id, elevated=elevated)

    def diff(self, config: str, from_id: int, to_id: int, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="diff", from_id=from_id, to_id=to_id, elevated=elevated)

    def create(self, config: str, description: str = "", *, elevated: bool = False) -> CommandResult:
        description = description.strip() or DEFAULT_CREATE_DESCRIPTION
        return self._checked(config, command="create", description=description, elevated=elevated)

    def modify(self, config: str, snapshot_id: int, description: str, *, elevated: bool = False) -> CommandResult:
        return self._checked(
            config,
            command="modify",
            snapshot_id=snapshot_id,
            description=description,
            elevated=elevated,
        )

    def delete(self, config: str, snapshot_id: int, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="delete", snapshot_id=snapshot_id, elevated=elevated)

    def mount(self, config: str, snapshot_id: int, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="mount", snapshot_id=snapshot_id, elevated=elevated)

    def umount(self, config: str, snapshot_id: int, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="umount", snapshot_id=snapshot_id, elevated=elevated)

    def rollback(self, config: str, snapshot_id: int, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="rollback", snapshot_id=snapshot_id, elevated=elevated)

    def cleanup(self, config: str, algorithm: str, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="cleanup", algorithm=algorithm, elevated=elevated)

    def get_config(self, config: str, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="get-config", elevated=elevated)

    def set_config(self, config: str, pairs: Sequence[str], *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="set-config", pairs=tuple(pairs), elevated=elevated)

    def setup_quota(self, config: str, *, elevated: bool = False) -> CommandResult:
        return self._checked(config, command="setup-quota", elevated=elevated)

    def _checked(self, config: str, *, command: str, elevated: bool, **kwargs) -> CommandResult:
        unknown = self._unknown(config)
        if unknown is not None:
            return unknown
        return self._run(command=command, config=config, elevated=elevated, **kwargs)
