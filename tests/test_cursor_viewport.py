from __future__ import annotations

from termedit.buffer import BufferDocument, Viewport
from termedit.buffer.cursor import (
    clamp_cursor,
    move_down,
    move_end,
    move_home,
    move_left,
    move_right,
    move_up,
)


def make_document(text: str = "hello\nhi\nworld!") -> BufferDocument:
    return BufferDocument.from_text(text)


def test_left_at_line_start_wraps_to_previous_line_end() -> None:
    document = make_document()

    assert move_left(document, (1, 0)) == (0, 5)
    assert move_left(document, (1, 2)) == (1, 1)
    assert move_left(document, (0, 0)) == (0, 0)


def test_right_at_line_end_wraps_to_next_line_start() -> None:
    document = make_document()

    assert move_right(document, (0, 5)) == (1, 0)
    assert move_right(document, (0, 1)) == (0, 2)
    assert move_right(document, (2, 6)) == (2, 6)


def test_vertical_moves_clamp_column() -> None:
    document = make_document()

    assert move_down(document, (0, 4)) == (1, 2)
    assert move_up(document, (2, 6)) == (1, 2)
    assert move_up(document, (0, 3)) == (0, 3)
    assert move_down(document, (2, 1)) == (2, 1)


def test_home_and_end() -> None:
    document = make_document()

    assert move_home(document, (2, 3)) == (2, 0)
    assert move_end(document, (2, 3)) == (2, 6)


def test_clamp_cursor_bounds_both_axes() -> None:
    document = make_document()

    assert clamp_cursor(document, 10, 10) == (2, 6)
    assert clamp_cursor(document, -1, -4) == (0, 0)


def test_viewport_reserves_status_row() -> None:
    viewport = Viewport(screen_rows=5, screen_cols=10)

    assert viewport.text_rows == 4


def test_viewport_scrolls_right_by_minimum() -> None:
    viewport = Viewport(screen_rows=5, screen_cols=10)

    viewport.recompute_scroll((0, 12))

    assert viewport.col_offset == 3
    assert viewport.col_offset <= 12 < viewport.col_offset + viewport.screen_cols


def test_viewport_scrolls_left_to_cursor() -> None:
    viewport = Viewport(screen_rows=5, screen_cols=10, col_offset=8)

    viewport.recompute_scroll((0, 2))

    assert viewport.col_offset == 2


def test_viewport_keeps_offset_when_cursor_visible() -> None:
    viewport = Viewport(screen_rows=5, screen_cols=10, col_offset=4)

    viewport.recompute_scroll((0, 9))

    assert viewport.col_offset == 4


def test_viewport_scrolls_vertically() -> None:
    viewport = Viewport(screen_rows=5, screen_cols=10)

    viewport.recompute_scroll((6, 0))
    assert viewport.row_offset == 3

    viewport.recompute_scroll((1, 0))
    assert viewport.row_offset == 1
    assert viewport.to_screen((2, 4)) == (1, 4)


def test_viewport_resize_enforces_minimum() -> None:
    viewport = Viewport()

    viewport.resize(0, 0)

    assert viewport.screen_rows == 2
    assert viewport.screen_cols == 1
    assert viewport.text_rows == 1
