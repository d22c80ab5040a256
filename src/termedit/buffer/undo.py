"""Snapshot-based linear undo/redo."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from .state import Cursor


@dataclass(frozen=True, slots=True)
class EditorSnapshot:
    lines: tuple[str, ...]
    cursor: Cursor


class History:
    """Two stacks of full snapshots.

    ``record`` is called before a user edit; it invalidates everything on the
    redo stack. ``undo``/``redo`` take the *current* state so it can be pushed
    onto the opposite stack before the popped snapshot is handed back.
    """

    def __init__(self, *, limit: Optional[int] = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("limit must be positive")
        self._undo: Deque[EditorSnapshot] = deque(maxlen=limit)
        self._redo: List[EditorSnapshot] = []

    def record(self, snapshot: EditorSnapshot) -> None:
        self._undo.append(snapshot)
        self._redo.clear()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self, current: EditorSnapshot) -> Optional[EditorSnapshot]:
        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: EditorSnapshot) -> Optional[EditorSnapshot]:
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    @property
    def depth(self) -> tuple[int, int]:
        return (len(self._undo), len(self._redo))
