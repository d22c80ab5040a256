"""Cursor movement actions for Normal mode."""

from __future__ import annotations

from typing import Callable

from termedit.buffer import Cursor, cursor as motions
from termedit.buffer.document import BufferDocument
from termedit.modes.base_mode import ModeContext, ModeResult

Motion = Callable[[BufferDocument, Cursor], Cursor]


def _apply_motion(context: ModeContext, motion: Motion) -> ModeResult:
    buffer = context.buffer
    target = motion(buffer.document, buffer.cursor)
    buffer.set_cursor(*target)
    context.viewport.recompute_scroll(target)
    context.bus.emit("cursor.move", {"cursor": target})
    return ModeResult(consumed=True, status="move")


def cursor_left(context: ModeContext, match) -> ModeResult:
    del match
    return _apply_motion(context, motions.move_left)


def cursor_right(context: ModeContext, match) -> ModeResult:
    del match
    return _apply_motion(context, motions.move_right)


def cursor_up(context: ModeContext, match) -> ModeResult:
    del match
    return _apply_motion(context, motions.move_up)


def cursor_down(context: ModeContext, match) -> ModeResult:
    del match
    return _apply_motion(context, motions.move_down)


def cursor_home(context: ModeContext, match) -> ModeResult:
    del match
    return _apply_motion(context, motions.move_home)


def cursor_end(context: ModeContext, match) -> ModeResult:
    del match
    return _apply_motion(context, motions.move_end)


__all__ = [
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "cursor_down",
    "cursor_home",
    "cursor_end",
]
