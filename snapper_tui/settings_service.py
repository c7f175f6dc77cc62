"""Persist user preferences between runs (elevated mode, layout flags, last selection)."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .config import settings_dir
from .logging import get_logger

logger = get_logger(__name__)

SETTINGS_FILE_NAME = "state.json"


@dataclass(slots=True)
class Settings:
    elevated_mode: bool = False
    fullscreen_flag: bool = False
    last_selected_configuration: str | None = None
    filter_text: str | None = None
    show_userdata: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Missing or mistyped fields fall back to defaults."""

        def _bool(key: str) -> bool:
            value = data.get(key)
            return value if isinstance(value, bool) else False

        def _opt_str(key: str) -> str | None:
            value = data.get(key)
            return value if isinstance(value, str) else None

        return cls(
            elevated_mode=_bool("elevated_mode"),
            fullscreen_flag=_bool("fullscreen_flag"),
            last_selected_configuration=_opt_str("last_selected_configuration"),
            filter_text=_opt_str("filter_text"),
            show_userdata=_bool("show_userdata"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class SettingsService:
    """Store preferences in <config dir>/snapper-tui/state.json by default."""

    def __init__(self, settings_path: Path | None = None) -> None:
        self._path = settings_path or settings_dir() / SETTINGS_FILE_NAME

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        if not self._path.exists():
            return Settings()
        try:
            raw = self._path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("ignoring unreadable settings file %s: %s", self._path, exc)
            return Settings()
        return Settings.from_dict(data) if isinstance(data, dict) else Settings()

    def save(self, settings: Settings) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(settings.to_dict(), ensure_ascii=True, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.warning("could not save settings to %s: %s", self._path, exc)
