from __future__ import annotations

from termedit.adapters.textual.render import (
    CURSOR_STYLE,
    TOKEN_STYLES,
    frame_to_text,
    row_to_text,
)
from termedit.buffer import Buffer, Viewport
from termedit.render import FILLER, Frame, FrameRow, StyledRun, build_frame
from termedit.search import SearchEngine
from termedit.syntax import TokenClass


def make_frame(*, prompt: str | None = None, cursor: tuple[int, int] = (0, 2)) -> Frame:
    return Frame(
        rows=(
            FrameRow(runs=(StyledRun("ab", TokenClass.PLAIN),)),
            FrameRow(runs=(StyledRun(FILLER, TokenClass.PLAIN),), filler=True),
        ),
        status="st",
        prompt=prompt,
        cursor=cursor,
        mode="normal",
    )


def test_build_frame_truncates_status_to_width() -> None:
    buffer = Buffer.from_text("", filename="a_rather_long_file_name.txt")

    frame = build_frame(buffer, Viewport(screen_rows=3, screen_cols=12))

    assert frame.status == "a_rather_lon"


def test_build_frame_prompt_overlays_status() -> None:
    buffer = Buffer.from_text("abc\nabc")
    engine = SearchEngine(buffer)
    engine.set_query("c")
    engine.next_match()

    frame = build_frame(buffer, Viewport(), mode="search", search=engine.state)

    assert frame.prompt == "Search: c (2/2)"
    assert frame.status_line == "Search: c (2/2)"
    assert frame.mode == "search"
    assert frame.cursor == (1, 2)


def test_row_to_text_styles_tokens() -> None:
    row = FrameRow(
        runs=(StyledRun("fn", TokenClass.KEYWORD), StyledRun(" x", TokenClass.PLAIN))
    )

    text = row_to_text(row)

    assert text.plain == "fn x"
    assert text.spans[0].style == TOKEN_STYLES[TokenClass.KEYWORD]
    assert (text.spans[0].start, text.spans[0].end) == (0, 2)


def test_frame_to_text_pads_status_and_places_cursor() -> None:
    text = frame_to_text(make_frame(), width=5)

    assert text.plain == "ab \n~\nst   "
    cursor_spans = [span for span in text.spans if span.style == CURSOR_STYLE]
    assert [(span.start, span.end) for span in cursor_spans] == [(2, 3)]


def test_frame_to_text_moves_cursor_to_prompt() -> None:
    text = frame_to_text(make_frame(prompt="Search: q"), width=12)

    assert text.plain.splitlines()[-1] == "Search: q   "
    cursor_spans = [span for span in text.spans if span.style == CURSOR_STYLE]
    status_start = len("ab\n~\n")
    assert [(span.start, span.end) for span in cursor_spans] == [
        (status_start + 9, status_start + 10)
    ]
