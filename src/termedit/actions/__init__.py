"""Editing verbs bound to keys by the default keymaps."""

from .core import enter_search_mode, exit_to_normal_mode, quit_editor
from .editing import delete_backward, insert_text, redo, split_line, undo
from .file import save_buffer
from .motion import (
    cursor_down,
    cursor_end,
    cursor_home,
    cursor_left,
    cursor_right,
    cursor_up,
)
from .search import extend_query, next_match, previous_match, shorten_query

__all__ = [
    "enter_search_mode",
    "exit_to_normal_mode",
    "quit_editor",
    "insert_text",
    "delete_backward",
    "split_line",
    "undo",
    "redo",
    "save_buffer",
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "cursor_down",
    "cursor_home",
    "cursor_end",
    "extend_query",
    "shorten_query",
    "next_match",
    "previous_match",
]
