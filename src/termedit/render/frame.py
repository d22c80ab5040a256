"""Frame description handed to a render driver after each keystroke."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from termedit.buffer import Buffer, Cursor, Viewport
from termedit.search import SearchState
from termedit.syntax import TokenClass, clip_tokens, tokenize

FILLER = "~"
NO_NAME = "[No Name]"


@dataclass(frozen=True, slots=True)
class StyledRun:
    text: str
    kind: TokenClass


@dataclass(frozen=True, slots=True)
class FrameRow:
    runs: tuple[StyledRun, ...]
    filler: bool = False

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything needed for one full-screen redraw.

    ``rows`` has ``viewport.text_rows`` entries; ``status`` (or ``prompt`` in
    Search mode, which overlays it) is the last screen row. ``cursor`` is in
    screen coordinates.
    """

    rows: tuple[FrameRow, ...]
    status: str
    prompt: Optional[str]
    cursor: Cursor
    mode: str

    @property
    def status_line(self) -> str:
        return self.prompt if self.prompt is not None else self.status


def render_line(line: str, viewport: Viewport) -> FrameRow:
    tokens = clip_tokens(tokenize(line), viewport.col_offset, viewport.screen_cols)
    return FrameRow(runs=tuple(StyledRun(token.text, token.kind) for token in tokens))


def status_text(buffer: Buffer, message: Optional[str] = None) -> str:
    name = os.path.basename(buffer.filename) if buffer.filename else NO_NAME
    modified = " [+]" if buffer.dirty else ""
    row, col = buffer.cursor
    parts = [f"{name}{modified}", f"Ln {row + 1}, Col {col + 1}"]
    if message:
        parts.append(message)
    return " | ".join(parts)


def prompt_text(search: SearchState) -> str:
    counter = ""
    if search.query:
        if search.results:
            counter = f" ({search.current_index + 1}/{len(search.results)})"
        else:
            counter = " (no matches)"
    return f"Search: {search.query}{counter}"


def build_frame(
    buffer: Buffer,
    viewport: Viewport,
    *,
    mode: str = "normal",
    search: Optional[SearchState] = None,
    message: Optional[str] = None,
) -> Frame:
    viewport.recompute_scroll(buffer.cursor)
    lines = buffer.document.snapshot()
    rows = []
    for screen_row in range(viewport.text_rows):
        index = viewport.row_offset + screen_row
        if index < len(lines):
            rows.append(render_line(lines[index], viewport))
        else:
            rows.append(
                FrameRow(runs=(StyledRun(FILLER, TokenClass.PLAIN),), filler=True)
            )

    width = viewport.screen_cols
    prompt = prompt_text(search)[:width] if search is not None else None
    return Frame(
        rows=tuple(rows),
        status=status_text(buffer, message)[:width],
        prompt=prompt,
        cursor=viewport.to_screen(buffer.cursor),
        mode=mode,
    )


__all__ = [
    "FILLER",
    "Frame",
    "FrameRow",
    "StyledRun",
    "build_frame",
    "prompt_text",
    "render_line",
    "status_text",
]
