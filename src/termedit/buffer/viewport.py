"""Scroll window mapping buffer coordinates onto the terminal grid."""

from __future__ import annotations

from dataclasses import dataclass

from .state import Cursor

STATUS_ROWS = 1


@dataclass(slots=True)
class Viewport:
    """Fixed-size terminal window plus horizontal/vertical scroll offsets.

    The last ``STATUS_ROWS`` rows of the screen belong to the status bar, so
    only ``text_rows`` rows show buffer content.
    """

    screen_rows: int = 24
    screen_cols: int = 80
    row_offset: int = 0
    col_offset: int = 0

    def __post_init__(self) -> None:
        self.resize(self.screen_rows, self.screen_cols)

    @property
    def text_rows(self) -> int:
        return self.screen_rows - STATUS_ROWS

    def resize(self, rows: int, cols: int) -> None:
        self.screen_rows = max(STATUS_ROWS + 1, rows)
        self.screen_cols = max(1, cols)

    def recompute_scroll(self, cursor: Cursor) -> None:
        """Shift offsets by the minimum needed to keep ``cursor`` visible."""

        row, col = cursor
        if col < self.col_offset:
            self.col_offset = col
        elif col >= self.col_offset + self.screen_cols:
            self.col_offset = col - self.screen_cols + 1
        if row < self.row_offset:
            self.row_offset = row
        elif row >= self.row_offset + self.text_rows:
            self.row_offset = row - self.text_rows + 1

    def to_screen(self, cursor: Cursor) -> Cursor:
        row, col = cursor
        return (row - self.row_offset, col - self.col_offset)
