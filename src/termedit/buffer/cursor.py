"""Cursor motions over a BufferDocument.

Each function is pure: it takes the document and a cursor and returns the
target cursor, always inside the document's bounds.
"""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor


def clamp_cursor(document: BufferDocument, row: int, col: int) -> Cursor:
    max_row = max(0, document.line_count - 1)
    row = max(0, min(row, max_row))
    col = max(0, min(col, document.line_length(row)))
    return (row, col)


def move_left(document: BufferDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if col > 0:
        return (row, col - 1)
    if row == 0:
        return (0, 0)
    return (row - 1, document.line_length(row - 1))


def move_right(document: BufferDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if col < document.line_length(row):
        return (row, col + 1)
    if row >= document.line_count - 1:
        return (row, col)
    return (row + 1, 0)


def move_up(document: BufferDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if row == 0:
        return cursor
    return (row - 1, min(col, document.line_length(row - 1)))


def move_down(document: BufferDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if row >= document.line_count - 1:
        return cursor
    return (row + 1, min(col, document.line_length(row + 1)))


def move_home(document: BufferDocument, cursor: Cursor) -> Cursor:
    del document
    return (cursor[0], 0)


def move_end(document: BufferDocument, cursor: Cursor) -> Cursor:
    return (cursor[0], document.line_length(cursor[0]))


__all__ = [
    "clamp_cursor",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_home",
    "move_end",
]
