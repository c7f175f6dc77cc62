"""Centralized logging helpers for the core and its front-ends."""

from __future__ import annotations

import logging
import os
import sys

_ROOT_LOGGER = "snapper_tui"
_configured = False


def _resolve_level() -> int:
    raw = os.environ.get("SNAPPER_TUI_LOG_LEVEL", "").strip().upper()
    if raw:
        return getattr(logging, raw, logging.INFO)
    return logging.INFO


def _ensure_handler(logger: logging.Logger) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False


def configure_logging(*, quiet: bool = False, verbose: bool = False) -> None:
    """Set snapper_tui.* logger levels from CLI flags. Flags override the env level."""
    global _configured
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = _resolve_level()
    root = logging.getLogger(_ROOT_LOGGER)
    root.setLevel(level)
    _ensure_handler(root)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the snapper_tui namespace."""
    if name == _ROOT_LOGGER or name.startswith(f"{_ROOT_LOGGER}."):
        full = name
    else:
        full = f"{_ROOT_LOGGER}.{name}"
    root = logging.getLogger(_ROOT_LOGGER)
    if not _configured:
        _ensure_handler(root)
        root.setLevel(_resolve_level())
    return logging.getLogger(full)
