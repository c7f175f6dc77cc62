"""Runtime configuration for snapper-tui (environment overrides over defaults)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIGS_DIR = "/etc/snapper/configs"
DEFAULT_CACHE_TTL = 3.0
DEFAULT_TICK_MS = 100
DEFAULT_PAGE_SIZE = 10
APP_DIR_NAME = "snapper-tui"


@dataclass(slots=True)
class AppConfig:
    configs_dir: Path
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL
    tick_interval_ms: int = DEFAULT_TICK_MS
    page_size: int = DEFAULT_PAGE_SIZE
    snapper_bin: str = "snapper"


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def settings_dir() -> Path:
    """Directory holding state.json: $XDG_CONFIG_HOME, then ~/.config, then cwd."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "").strip()
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    home = os.environ.get("HOME", "").strip()
    if home:
        return Path(home) / ".config" / APP_DIR_NAME
    return Path(f".{APP_DIR_NAME}")


def load_app_config() -> AppConfig:
    """Load configuration from defaults and optional SNAPPER_TUI_* env overrides."""
    configs_dir = os.environ.get("SNAPPER_TUI_CONFIGS_DIR", "").strip() or DEFAULT_CONFIGS_DIR
    return AppConfig(
        configs_dir=Path(configs_dir),
        cache_ttl_seconds=_env_float("SNAPPER_TUI_CACHE_TTL", DEFAULT_CACHE_TTL),
        tick_interval_ms=max(10, _env_int("SNAPPER_TUI_TICK_MS", DEFAULT_TICK_MS)),
        page_size=max(1, _env_int("SNAPPER_TUI_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
        snapper_bin=os.environ.get("SNAPPER_TUI_SNAPPER_BIN", "").strip() or "snapper",
    )
