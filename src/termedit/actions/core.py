"""Mode switching and quitting."""

from __future__ import annotations

from termedit.modes.base_mode import ModeContext, ModeResult


def enter_search_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="search", message="enter_search")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_search")


def quit_editor(context: ModeContext, match) -> ModeResult:
    del match
    context.bus.emit("editor.quit", {"dirty": context.buffer.dirty})
    return ModeResult(consumed=True, status="quit")


__all__ = [
    "enter_search_mode",
    "exit_to_normal_mode",
    "quit_editor",
]
