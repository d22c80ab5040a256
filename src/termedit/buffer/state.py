"""Where the cursor sits, and the check that keeps it inside the document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .document import BufferDocument

Cursor = Tuple[int, int]


class BufferValidationError(RuntimeError):
    """A position that does not exist in the document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(document: "BufferDocument", cursor: Cursor) -> Cursor:
    """Return ``cursor`` unchanged if it names a row and a column within it.

    The column may equal the line length (the position after the last char).
    """

    row, col = cursor
    if not 0 <= row < document.line_count:
        raise BufferValidationError(
            f"row {row} outside 0..{document.line_count - 1}", cursor=cursor
        )
    width = len(document.get_line(row))
    if not 0 <= col <= width:
        raise BufferValidationError(
            f"column {col} outside 0..{width} on row {row}", cursor=cursor
        )
    return cursor


@dataclass(slots=True)
class BufferState:
    """The ``(row, col)`` cursor of a buffer."""

    cursor: Cursor = (0, 0)

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)
