"""Incremental, case-insensitive substring search over a buffer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from termedit.buffer import Buffer, Cursor, Viewport
from termedit.runtime import telemetry


@dataclass(slots=True)
class SearchState:
    query: str = ""
    results: List[Cursor] = field(default_factory=list)
    current_index: int = 0

    @property
    def current(self) -> Optional[Cursor]:
        if not self.results:
            return None
        return self.results[self.current_index]


def find_matches(lines: Iterable[str], query: str) -> List[Cursor]:
    """All non-overlapping occurrences of ``query``, row-major, left to right."""

    if not query:
        return []
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return [
        (row, match.start())
        for row, line in enumerate(lines)
        for match in pattern.finditer(line)
    ]


class SearchEngine:
    """Owns one ``SearchState`` and moves the buffer cursor between matches."""

    def __init__(self, buffer: Buffer, viewport: Optional[Viewport] = None) -> None:
        self.buffer = buffer
        self.viewport = viewport
        self.state = SearchState()

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def results(self) -> List[Cursor]:
        return self.state.results

    def set_query(self, query: str) -> List[Cursor]:
        with telemetry.span(
            "search::scan",
            component="search",
            metadata={"length": len(query)},
        ) as handle:
            self.state.query = query
            self.state.results = find_matches(self.buffer.document.snapshot(), query)
            self.state.current_index = 0
            handle.add_metadata("matches", len(self.state.results))
        if self.state.results:
            self._jump()
        return self.state.results

    def extend_query(self, text: str) -> List[Cursor]:
        return self.set_query(self.state.query + text)

    def shorten_query(self) -> List[Cursor]:
        return self.set_query(self.state.query[:-1])

    def next_match(self) -> Optional[Cursor]:
        if not self.state.results:
            return None
        self.state.current_index = (self.state.current_index + 1) % len(
            self.state.results
        )
        return self._jump()

    def previous_match(self) -> Optional[Cursor]:
        if not self.state.results:
            return None
        self.state.current_index = (self.state.current_index - 1) % len(
            self.state.results
        )
        return self._jump()

    def clear(self) -> None:
        self.state = SearchState()

    def _jump(self) -> Cursor:
        row, col = self.state.results[self.state.current_index]
        self.buffer.set_cursor(row, col)
        if self.viewport is not None:
            self.viewport.recompute_scroll((row, col))
        return (row, col)


__all__ = ["SearchEngine", "SearchState", "find_matches"]
