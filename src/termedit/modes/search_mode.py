"""Search mode: an incremental query prompt over the buffer."""

from __future__ import annotations

from termedit.actions import search as search_actions
from termedit.search import SearchEngine

from .base_mode import KeyInput, ModeResult
from .keymapped import KeymapMode, key_token


class SearchMode(KeymapMode):
    """Owns a ``SearchEngine`` for as long as the mode is active.

    The engine lives in ``context.extras["search"]`` so actions and the frame
    builder can reach it; it is discarded on exit.
    """

    name = "search"

    @property
    def engine(self) -> SearchEngine | None:
        engine = self.context.extras.get("search")
        return engine if isinstance(engine, SearchEngine) else None

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.extras["search"] = SearchEngine(
            self.context.buffer, self.context.viewport
        )
        self.flags["search_active"] = True
        self.context.bus.emit("search.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        engine = self.context.extras.pop("search", None)
        self.flags["search_active"] = False
        query = engine.query if isinstance(engine, SearchEngine) else ""
        self.context.bus.emit("search.end", query)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.lookup((key_token(key),))
        if result.status == "match" and result.match:
            return self.run(result.match)
        text = key.printable
        if text:
            return search_actions.extend_query(self.context, text)
        return ModeResult(consumed=False, status="miss", message="unhandled")
