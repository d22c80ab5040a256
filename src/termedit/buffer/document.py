"""Line storage and the four primitive line mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .state import Cursor


@dataclass(slots=True)
class BufferDocument:
    """Mutable list-of-lines text storage.

    Invariant: ``_lines`` is never empty; an empty file is one empty line.
    Every effective mutation bumps ``version`` and sets ``dirty``. Callers are
    expected to pass positions already checked with ``ensure_cursor``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.split("\n"), version=0, dirty=False)

    def to_text(self) -> str:
        return "\n".join(self._lines)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def replace_lines(self, lines: Iterable[str]) -> None:
        """Swap in a whole new set of lines (undo/redo restore)."""

        self._lines = list(lines) or [""]
        self._touch()

    def insert_char(self, row: int, col: int, ch: str) -> Cursor:
        line = self._lines[row]
        self._lines[row] = line[:col] + ch + line[col:]
        self._touch()
        return (row, col + len(ch))

    def delete_char_before(self, row: int, col: int) -> Cursor:
        if col > 0:
            line = self._lines[row]
            self._lines[row] = line[: col - 1] + line[col:]
            self._touch()
            return (row, col - 1)
        if row > 0:
            return self.merge_with_previous(row)
        return (0, 0)

    def split_line(self, row: int, col: int) -> Cursor:
        line = self._lines[row]
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])
        self._touch()
        return (row + 1, 0)

    def merge_with_previous(self, row: int) -> Cursor:
        if row <= 0:
            return (0, 0)
        current = self._lines.pop(row)
        previous_len = len(self._lines[row - 1])
        self._lines[row - 1] += current
        self._touch()
        return (row - 1, previous_len)

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
