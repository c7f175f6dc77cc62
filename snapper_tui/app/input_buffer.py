"""Single-line text buffer with a cursor counted in characters."""

from __future__ import annotations


class InputBuffer:
    def __init__(self, text: str = "") -> None:
        self._text = text
        self._cursor = len(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @cursor.setter
    def cursor(self, value: int) -> None:
        self._cursor = max(0, min(value, len(self._text)))

    def set(self, text: str) -> None:
        """Replace the content and put the cursor at its end."""
        self._text = text
        self._cursor = len(text)

    def clear(self) -> None:
        self.set("")

    def insert(self, chars: str) -> None:
        pos = self._cursor
        self._text = self._text[:pos] + chars + self._text[pos:]
        self.cursor = pos + len(chars)

    def backspace(self) -> None:
        if self._cursor == 0:
            return
        pos = self._cursor - 1
        self._text = self._text[:pos] + self._text[pos + 1 :]
        self.cursor = pos

    def delete(self) -> None:
        pos = self._cursor
        if pos >= len(self._text):
            return
        self._text = self._text[:pos] + self._text[pos + 1 :]

    def move_left(self) -> None:
        self.cursor = self._cursor - 1

    def move_right(self) -> None:
        self.cursor = self._cursor + 1

    def move_home(self) -> None:
        self._cursor = 0

    def move_end(self) -> None:
        self._cursor = len(self._text)
