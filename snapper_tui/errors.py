"""Failure taxonomy and user-facing hints for external command errors."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Where a failed external call came from."""

    ENVIRONMENT = "environment"
    PRIVILEGE = "privilege"
    COMMAND = "command"


_UNKNOWN_CONFIG_MARKERS = ("unknown config", "config not found")
_PRIVILEGE_MARKERS = ("permission", "dbus", "access denied", "not authorized")
_PASSWORD_MARKER = "a password is required"


def classify_failure(message: str) -> FailureKind:
    low = message.lower()
    if any(m in low for m in _UNKNOWN_CONFIG_MARKERS) or "not found in path" in low:
        return FailureKind.ENVIRONMENT
    if _PASSWORD_MARKER in low or any(m in low for m in _PRIVILEGE_MARKERS):
        return FailureKind.PRIVILEGE
    return FailureKind.COMMAND


def failure_hint(message: str, *, elevated: bool) -> str:
    """Return a short hint (with leading space) for a failure message, or ''."""
    low = message.lower()
    if any(m in low for m in _UNKNOWN_CONFIG_MARKERS):
        return " (hint: check the config name; see the snapper configs directory)"
    if _PASSWORD_MARKER in low and elevated:
        return " (hint: run 'sudo -v' to cache credentials)"
    if any(m in low for m in _PRIVILEGE_MARKERS):
        if elevated:
            return " (hint: elevated call was refused; check sudoers for snapper)"
        return " (hint: press 'S' to toggle sudo mode)"
    return ""


def mentions_unknown_config(message: str) -> bool:
    low = message.lower()
    return any(m in low for m in _UNKNOWN_CONFIG_MARKERS)
