"""Content-mutating actions: typing, backspace, line split, undo/redo."""

from __future__ import annotations

from termedit.modes.base_mode import ModeContext, ModeResult


def _after_edit(context: ModeContext, label: str) -> ModeResult:
    cursor = context.buffer.cursor
    context.viewport.recompute_scroll(cursor)
    context.bus.emit("buffer.edit", {"label": label, "cursor": cursor})
    return ModeResult(consumed=True, status=label)


def insert_text(context: ModeContext, text: str) -> ModeResult:
    """Insert printable ``text`` one character at a time at the cursor."""

    for ch in text:
        context.buffer.insert_char(ch)
    return _after_edit(context, "insert")


def delete_backward(context: ModeContext, match) -> ModeResult:
    del match
    if context.buffer.cursor == (0, 0):
        return ModeResult(consumed=True, status="noop")
    context.buffer.backspace()
    return _after_edit(context, "backspace")


def split_line(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.newline()
    return _after_edit(context, "newline")


def undo(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.undo():
        return ModeResult(consumed=True, status="noop", message="nothing_to_undo")
    return _after_edit(context, "undo")


def redo(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.redo():
        return ModeResult(consumed=True, status="noop", message="nothing_to_redo")
    return _after_edit(context, "redo")


__all__ = ["insert_text", "delete_backward", "split_line", "undo", "redo"]
