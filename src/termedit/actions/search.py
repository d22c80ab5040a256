"""Actions driving the search engine while Search mode is active."""

from __future__ import annotations

from termedit.modes.base_mode import ModeContext, ModeResult
from termedit.search import SearchEngine


def search_engine(context: ModeContext) -> SearchEngine:
    engine = context.extras.get("search")
    if not isinstance(engine, SearchEngine):
        raise RuntimeError("search action used outside of search mode")
    return engine


def _report(context: ModeContext, engine: SearchEngine, status: str) -> ModeResult:
    state = engine.state
    context.bus.emit(
        "search.update",
        {"query": state.query, "matches": len(state.results), "current": state.current},
    )
    return ModeResult(consumed=True, status=status if state.results else "search_miss")


def extend_query(context: ModeContext, text: str) -> ModeResult:
    engine = search_engine(context)
    engine.extend_query(text)
    return _report(context, engine, "search_update")


def shorten_query(context: ModeContext, match) -> ModeResult:
    del match
    engine = search_engine(context)
    engine.shorten_query()
    return _report(context, engine, "search_update")


def next_match(context: ModeContext, match) -> ModeResult:
    del match
    engine = search_engine(context)
    engine.next_match()
    return _report(context, engine, "search_next")


def previous_match(context: ModeContext, match) -> ModeResult:
    del match
    engine = search_engine(context)
    engine.previous_match()
    return _report(context, engine, "search_previous")


__all__ = [
    "extend_query",
    "next_match",
    "previous_match",
    "search_engine",
    "shorten_query",
]
