"""Scrollable, searchable text pane shared by the Details and Help overlays."""

from __future__ import annotations


class ScrollView:
    def __init__(self, text: str = "", title: str = "") -> None:
        self.title = title
        self.query = ""
        self._lines = text.splitlines()
        self._offset = 0

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def max_offset(self) -> int:
        return max(0, len(self._lines) - 1)

    def set_content(self, text: str, title: str | None = None) -> None:
        """Replace the content and reset the scroll position to the top."""
        self._lines = text.splitlines()
        self._offset = 0
        if title is not None:
            self.title = title

    def scroll_to(self, offset: int) -> None:
        self._offset = max(0, min(offset, self.max_offset))

    def scroll_by(self, delta: int) -> None:
        self.scroll_to(self._offset + delta)

    def home(self) -> None:
        self._offset = 0

    def end(self) -> None:
        self._offset = self.max_offset

    def search(self, query: str) -> bool:
        """Remember `query` and jump to its next occurrence (wrapping)."""
        self.query = query.strip()
        return self.find_next()

    def find_next(self, wrap: bool = True) -> bool:
        if not self.query:
            return False
        needle = self.query.lower()
        start = min(self._offset + 1, len(self._lines))
        candidates = list(range(start, len(self._lines)))
        if wrap:
            candidates += list(range(0, start))
        return self._jump(needle, candidates)

    def find_prev(self, wrap: bool = True) -> bool:
        if not self.query:
            return False
        needle = self.query.lower()
        start = self._offset - 1
        candidates = list(range(start, -1, -1))
        if wrap:
            candidates += list(range(len(self._lines) - 1, start, -1))
        return self._jump(needle, candidates)

    def _jump(self, needle: str, candidates: list[int]) -> bool:
        for index in candidates:
            if needle in self._lines[index].lower():
                self._offset = index
                return True
        return False
