"""High-level buffer façade combining document, cursor, history, and file."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from termedit.runtime import telemetry

from .document import BufferDocument
from .files import PathLike, read_text, write_text
from .state import BufferState, Cursor, ensure_cursor
from .undo import EditorSnapshot, History


class Buffer:
    """The single editable text of a session.

    Mutations go through ``insert_char``/``backspace``/``newline`` which record
    an undo snapshot first; cursor-only changes go through ``set_cursor``.
    """

    def __init__(
        self,
        *,
        filename: Optional[str] = None,
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        history: Optional[History] = None,
    ) -> None:
        self.filename = filename
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.history = history or History()
        self.logger = telemetry.get_logger("termedit.buffer")

    @classmethod
    def from_text(cls, text: str, *, filename: Optional[str] = None) -> "Buffer":
        return cls(filename=filename, document=BufferDocument.from_text(text))

    @classmethod
    def load(cls, path: PathLike, *, history: Optional[History] = None) -> "Buffer":
        """Read ``path`` into a buffer with an empty undo history.

        A passed-in ``history`` is cleared; ``BufferIOError`` propagates when
        the file cannot be read.
        """

        text = read_text(path)
        buffer = cls(
            filename=os.fspath(path),
            document=BufferDocument.from_text(text),
            history=history,
        )
        buffer.history.clear()
        telemetry.record_event(
            "buffer.load",
            data={"path": buffer.filename, "lines": buffer.document.line_count},
        )
        return buffer

    @classmethod
    def open(cls, path: PathLike, *, history: Optional[History] = None) -> "Buffer":
        """Load ``path`` if it exists, else start an empty buffer named after it."""

        if os.path.exists(path):
            return cls.load(path, history=history)
        return cls(filename=os.fspath(path), history=history)

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self.document.snapshot())

    def set_cursor(self, row: int, col: int) -> Cursor:
        ensure_cursor(self.document, (row, col))
        self.state.set_cursor(row, col)
        return self.state.cursor

    # -- editing ---------------------------------------------------------

    def edit(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def insert_char(self, ch: str) -> Cursor:
        with self.edit("insert_char") as edit:
            row, col = edit.cursor
            self.state.set_cursor(*self.document.insert_char(row, col, ch))
        return self.cursor

    def backspace(self) -> Cursor:
        if self.cursor == (0, 0):
            return self.cursor
        with self.edit("backspace") as edit:
            row, col = edit.cursor
            self.state.set_cursor(*self.document.delete_char_before(row, col))
        return self.cursor

    def newline(self) -> Cursor:
        with self.edit("split_line") as edit:
            row, col = edit.cursor
            self.state.set_cursor(*self.document.split_line(row, col))
        return self.cursor

    # -- history ---------------------------------------------------------

    def snapshot(self) -> EditorSnapshot:
        return EditorSnapshot(lines=self.lines, cursor=self.cursor)

    def record(self) -> None:
        self.history.record(self.snapshot())

    def undo(self) -> bool:
        restored = self.history.undo(self.snapshot())
        if restored is None:
            return False
        self._restore(restored)
        return True

    def redo(self) -> bool:
        restored = self.history.redo(self.snapshot())
        if restored is None:
            return False
        self._restore(restored)
        return True

    def _restore(self, snapshot: EditorSnapshot) -> None:
        self.document.replace_lines(snapshot.lines)
        self.state.set_cursor(*snapshot.cursor)

    # -- files -----------------------------------------------------------

    def save(self) -> Optional[int]:
        """Write the buffer to ``filename``.

        Returns the number of characters written, or ``None`` when the buffer
        has no filename. ``BufferIOError`` propagates and leaves ``dirty`` set.
        """

        if not self.filename:
            return None
        with telemetry.span(
            "buffer::save",
            component="buffer",
            metadata={"path": self.filename},
        ):
            written = write_text(self.filename, self.document.to_text())
        self.document.dirty = False
        return written


class Transaction(AbstractContextManager["Transaction"]):
    """Checks the cursor, records an undo snapshot, and profiles one user edit.

    An invalid cursor raises ``BufferValidationError`` before anything is
    recorded; ``cursor`` holds the checked position inside the block.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.cursor: Cursor = buffer.cursor
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self.cursor = ensure_cursor(self.buffer.document, self.buffer.cursor)
        self.buffer.record()
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"cursor": self.cursor},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
