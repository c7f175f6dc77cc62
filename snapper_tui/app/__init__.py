"""Application state machine for the snapper front-end."""

from .application import App
from .events import Key, KeyEvent, MouseEvent, MouseKind
from .modes import Focus, InputKind, Mode, ModeKind

__all__ = [
    "App",
    "Focus",
    "InputKind",
    "Key",
    "KeyEvent",
    "Mode",
    "ModeKind",
    "MouseEvent",
    "MouseKind",
]
