"""Front-end independent input events relayed by the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Key(str, Enum):
    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    BACKTAB = "backtab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    BACKSPACE = "backspace"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    key: Key
    char: str = ""
    ctrl: bool = False

    @classmethod
    def of(cls, char: str, *, ctrl: bool = False) -> KeyEvent:
        return cls(Key.CHAR, char=char, ctrl=ctrl)

    def is_char(self, char: str) -> bool:
        return self.key is Key.CHAR and not self.ctrl and self.char == char


class MouseKind(str, Enum):
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    LEFT_CLICK = "left_click"


@dataclass(frozen=True, slots=True)
class MouseEvent:
    kind: MouseKind
