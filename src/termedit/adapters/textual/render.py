"""Turn a Frame into a Rich ``Text`` block for a Textual widget."""

from __future__ import annotations

from typing import Mapping

from rich.style import Style
from rich.text import Text

from termedit.render import Frame, FrameRow
from termedit.syntax import TokenClass

TOKEN_STYLES: Mapping[TokenClass, Style] = {
    TokenClass.COMMENT: Style(color="bright_black", italic=True),
    TokenClass.STRING: Style(color="green"),
    TokenClass.NUMBER: Style(color="magenta"),
    TokenClass.KEYWORD: Style(color="yellow", bold=True),
    TokenClass.TYPE: Style(color="cyan"),
    TokenClass.PLAIN: Style(),
}
FILLER_STYLE = Style(color="blue", dim=True)
STATUS_STYLE = Style(reverse=True)
CURSOR_STYLE = Style(color="black", bgcolor="white")


def row_to_text(row: FrameRow) -> Text:
    line = Text(no_wrap=True, overflow="crop")
    for run in row.runs:
        line.append(run.text, style=FILLER_STYLE if row.filler else TOKEN_STYLES[run.kind])
    return line


def frame_to_text(frame: Frame, width: int) -> Text:
    """Render rows, the status/prompt bar, and a block cursor."""

    cursor_row, cursor_col = frame.cursor
    lines = [row_to_text(row) for row in frame.rows]
    status = Text(frame.status_line.ljust(width)[:width], style=STATUS_STYLE)
    lines.append(status)

    if frame.prompt is not None:
        cursor_row, cursor_col = len(frame.rows), min(len(frame.prompt), width - 1)
    if 0 <= cursor_row < len(lines) and 0 <= cursor_col < width:
        target = lines[cursor_row]
        if cursor_col >= len(target):
            target.append(" " * (cursor_col - len(target) + 1))
        target.stylize(CURSOR_STYLE, cursor_col, cursor_col + 1)

    return Text("\n", no_wrap=True, overflow="crop").join(lines)


__all__ = ["TOKEN_STYLES", "frame_to_text", "row_to_text"]
