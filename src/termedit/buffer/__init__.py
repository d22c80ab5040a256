"""Buffer model, cursor arithmetic, viewport, and undo history."""

from .buffer import Buffer, Transaction
from .document import BufferDocument
from .files import BufferIOError
from .state import BufferState, BufferValidationError, Cursor, ensure_cursor
from .undo import EditorSnapshot, History
from .viewport import Viewport

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferIOError",
    "BufferState",
    "BufferValidationError",
    "Cursor",
    "EditorSnapshot",
    "History",
    "Transaction",
    "Viewport",
    "ensure_cursor",
]
