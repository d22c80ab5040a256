"""Incremental substring search."""

from .engine import SearchEngine, SearchState, find_matches

__all__ = ["SearchEngine", "SearchState", "find_matches"]
