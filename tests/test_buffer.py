from __future__ import annotations

from pathlib import Path

import pytest

from termedit.buffer import (
    Buffer,
    BufferDocument,
    BufferIOError,
    BufferValidationError,
    History,
)


def make_buffer(text: str, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    buffer = Buffer.from_text(text)
    buffer.set_cursor(*cursor)
    return buffer


def test_empty_document_has_one_line() -> None:
    document = BufferDocument()

    assert document.snapshot() == ("",)
    assert BufferDocument.from_text("").snapshot() == ("",)


def test_insert_char_advances_cursor_and_marks_dirty() -> None:
    buffer = make_buffer("ac", (0, 1))

    cursor = buffer.insert_char("b")

    assert buffer.lines == ("abc",)
    assert cursor == (0, 2)
    assert buffer.dirty


def test_enter_at_end_of_line_opens_empty_line() -> None:
    buffer = make_buffer("abc", (0, 3))

    buffer.newline()

    assert buffer.lines == ("abc", "")
    assert buffer.cursor == (1, 0)


def test_enter_mid_line_splits_text() -> None:
    buffer = make_buffer("hello", (0, 2))

    buffer.newline()

    assert buffer.lines == ("he", "llo")
    assert buffer.cursor == (1, 0)


def test_backspace_at_line_start_merges_with_previous() -> None:
    buffer = make_buffer("ab\ncd", (1, 0))

    buffer.backspace()

    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (0, 2)


def test_backspace_mid_line_removes_previous_char() -> None:
    buffer = make_buffer("abc", (0, 2))

    buffer.backspace()

    assert buffer.lines == ("ac",)
    assert buffer.cursor == (0, 1)


def test_backspace_at_origin_is_noop() -> None:
    buffer = make_buffer("abc")

    buffer.backspace()

    assert buffer.lines == ("abc",)
    assert buffer.cursor == (0, 0)
    assert not buffer.dirty
    assert not buffer.history.can_undo()


def test_edit_sequences_keep_buffer_and_cursor_valid() -> None:
    buffer = make_buffer("")
    script = "ab\n\bc\n\n\b\b\b\b\bxyz\b\n"
    for step in script:
        if step == "\n":
            buffer.newline()
        elif step == "\b":
            buffer.backspace()
        else:
            buffer.insert_char(step)
        row, col = buffer.cursor
        assert buffer.document.line_count >= 1
        assert 0 <= row < buffer.document.line_count
        assert 0 <= col <= buffer.document.line_length(row)


def test_set_cursor_rejects_out_of_range() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferValidationError):
        buffer.set_cursor(0, 4)
    with pytest.raises(BufferValidationError):
        buffer.set_cursor(1, 0)


def test_edit_with_stale_cursor_leaves_history_alone() -> None:
    buffer = make_buffer("ab")
    buffer.insert_char("c")
    buffer.undo()
    buffer.state.set_cursor(3, 0)

    with pytest.raises(BufferValidationError):
        buffer.insert_char("x")

    assert buffer.history.depth == (0, 1)
    assert buffer.lines == ("ab",)


def test_undo_restores_state_before_edit_and_redo_reapplies() -> None:
    buffer = make_buffer("ab\ncd", (1, 0))
    buffer.backspace()

    assert buffer.undo()
    assert buffer.lines == ("ab", "cd")
    assert buffer.cursor == (1, 0)

    assert buffer.redo()
    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (0, 2)


def test_new_edit_after_undo_clears_redo() -> None:
    buffer = make_buffer("")
    buffer.insert_char("a")
    buffer.insert_char("b")
    buffer.undo()

    buffer.insert_char("c")

    assert buffer.lines == ("ac",)
    assert not buffer.redo()
    assert buffer.lines == ("ac",)


def test_undo_and_redo_on_empty_history_are_noops() -> None:
    buffer = make_buffer("abc", (0, 1))

    assert not buffer.undo()
    assert not buffer.redo()
    assert buffer.lines == ("abc",)
    assert buffer.cursor == (0, 1)


def test_cursor_moves_do_not_record_history() -> None:
    buffer = make_buffer("abc")

    buffer.set_cursor(0, 3)

    assert buffer.history.depth == (0, 0)


def test_history_limit_drops_oldest_snapshots() -> None:
    buffer = Buffer(history=History(limit=2))
    for ch in "abc":
        buffer.insert_char(ch)

    assert buffer.undo()
    assert buffer.undo()
    assert not buffer.undo()
    assert buffer.lines == ("a",)


def test_history_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        History(limit=0)


def test_load_reads_lines_and_starts_clean(tmp_path: Path) -> None:
    path = tmp_path / "three.txt"
    path.write_text("one\ntwo\nthree", encoding="utf-8")

    buffer = Buffer.load(path)

    assert buffer.lines == ("one", "two", "three")
    assert buffer.filename == str(path)
    assert not buffer.dirty
    assert buffer.cursor == (0, 0)


def test_load_clears_a_reused_history(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("fresh", encoding="utf-8")
    history = History()
    scratch = Buffer(history=history)
    scratch.insert_char("a")
    scratch.insert_char("b")
    scratch.undo()
    assert history.depth == (1, 1)

    buffer = Buffer.load(path, history=history)

    assert buffer.history is history
    assert history.depth == (0, 0)
    assert not buffer.undo()
    assert buffer.lines == ("fresh",)


def test_open_missing_path_names_empty_buffer(tmp_path: Path) -> None:
    path = tmp_path / "new.txt"

    buffer = Buffer.open(path)

    assert buffer.lines == ("",)
    assert buffer.filename == str(path)
    assert not path.exists()


def test_load_failure_raises_buffer_io_error(tmp_path: Path) -> None:
    with pytest.raises(BufferIOError) as info:
        Buffer.load(tmp_path)

    assert info.value.action == "read"
    assert info.value.path == str(tmp_path)
    assert isinstance(info.value, OSError)


def test_load_rejects_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "binary.bin"
    path.write_bytes(b"\xff\xfe\x00")

    with pytest.raises(BufferIOError, match="not valid utf-8"):
        Buffer.load(path)


def test_save_writes_joined_lines_and_clears_dirty(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    buffer = Buffer.open(path)
    for ch in "hi":
        buffer.insert_char(ch)
    buffer.newline()
    buffer.insert_char("x")

    written = buffer.save()

    assert path.read_text(encoding="utf-8") == "hi\nx"
    assert written == 4
    assert not buffer.dirty


def test_save_preserves_trailing_newline_from_load(tmp_path: Path) -> None:
    path = tmp_path / "trailing.txt"
    path.write_text("a\n", encoding="utf-8")
    buffer = Buffer.load(path)

    buffer.save()

    assert buffer.lines == ("a", "")
    assert path.read_text(encoding="utf-8") == "a\n"


def test_save_without_filename_returns_none_and_keeps_dirty() -> None:
    buffer = make_buffer("")
    buffer.insert_char("x")

    assert buffer.save() is None
    assert buffer.dirty


def test_failed_save_keeps_dirty_and_content(tmp_path: Path) -> None:
    buffer = Buffer.open(tmp_path / "missing" / "out.txt")
    buffer.insert_char("x")

    with pytest.raises(BufferIOError) as info:
        buffer.save()

    assert info.value.action == "write"
    assert buffer.dirty
    assert buffer.lines == ("x",)
