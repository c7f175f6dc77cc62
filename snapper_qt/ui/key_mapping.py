"""Translate Qt key codes into front-end independent KeyEvents."""

from __future__ import annotations

from PySide6.QtCore import Qt

from snapper_tui.app.events import Key, KeyEvent

_SPECIAL_KEYS = {
    int(Qt.Key.Key_Return): Key.ENTER,
    int(Qt.Key.Key_Enter): Key.ENTER,
    int(Qt.Key.Key_Escape): Key.ESC,
    int(Qt.Key.Key_Tab): Key.TAB,
    int(Qt.Key.Key_Backtab): Key.BACKTAB,
    int(Qt.Key.Key_Up): Key.UP,
    int(Qt.Key.Key_Down): Key.DOWN,
    int(Qt.Key.Key_Left): Key.LEFT,
    int(Qt.Key.Key_Right): Key.RIGHT,
    int(Qt.Key.Key_PageUp): Key.PAGE_UP,
    int(Qt.Key.Key_PageDown): Key.PAGE_DOWN,
    int(Qt.Key.Key_Home): Key.HOME,
    int(Qt.Key.Key_End): Key.END,
    int(Qt.Key.Key_Backspace): Key.BACKSPACE,
    int(Qt.Key.Key_Delete): Key.DELETE,
}

_KEY_A = int(Qt.Key.Key_A)
_KEY_Z = int(Qt.Key.Key_Z)


def translate_key(key: int, text: str, *, ctrl: bool = False) -> KeyEvent | None:
    """None for keys the state machine does not handle (bare modifiers, F-keys)."""
    key = int(key)
    special = _SPECIAL_KEYS.get(key)
    if special is not None:
        return KeyEvent(special)
    if ctrl and _KEY_A <= key <= _KEY_Z:
        return KeyEvent.of(chr(ord("a") + key - _KEY_A), ctrl=True)
    if text and text.isprintable():
        return KeyEvent.of(text)
    return None
