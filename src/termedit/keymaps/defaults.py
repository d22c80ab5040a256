"""Built-in keymaps for Normal and Search mode."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry


def default_actions() -> tuple[ActionRef, ...]:
    # Imported here: action modules import the mode layer, which imports keymaps.
    from termedit.actions import core, editing, file, motion, search

    return (
        ActionRef(id="core.quit", handler=core.quit_editor, description="Quit"),
        ActionRef(
            id="core.enter_search",
            handler=core.enter_search_mode,
            description="Start an incremental search",
        ),
        ActionRef(
            id="core.exit_to_normal",
            handler=core.exit_to_normal_mode,
            description="Return to normal mode",
        ),
        ActionRef(id="file.save", handler=file.save_buffer, description="Save file"),
        ActionRef(id="edit.undo", handler=editing.undo, description="Undo"),
        ActionRef(id="edit.redo", handler=editing.redo, description="Redo"),
        ActionRef(
            id="edit.backspace",
            handler=editing.delete_backward,
            description="Delete the character before the cursor",
        ),
        ActionRef(
            id="edit.newline",
            handler=editing.split_line,
            description="Split the line at the cursor",
        ),
        ActionRef(id="motion.left", handler=motion.cursor_left),
        ActionRef(id="motion.right", handler=motion.cursor_right),
        ActionRef(id="motion.up", handler=motion.cursor_up),
        ActionRef(id="motion.down", handler=motion.cursor_down),
        ActionRef(id="motion.home", handler=motion.cursor_home),
        ActionRef(id="motion.end", handler=motion.cursor_end),
        ActionRef(
            id="search.next",
            handler=search.next_match,
            description="Jump to the next match",
        ),
        ActionRef(
            id="search.previous",
            handler=search.previous_match,
            description="Jump to the previous match",
        ),
        ActionRef(
            id="search.backspace",
            handler=search.shorten_query,
            description="Drop the last query character",
        ),
    )


def _bind(binding_id: str, mode: str, key: str, action_id: str) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(key),
        action_id=action_id,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal.quit", "normal", "ctrl+q", "core.quit"),
    _bind("normal.save", "normal", "ctrl+s", "file.save"),
    _bind("normal.undo", "normal", "ctrl+z", "edit.undo"),
    _bind("normal.redo", "normal", "ctrl+y", "edit.redo"),
    _bind("normal.search", "normal", "ctrl+f", "core.enter_search"),
    _bind("normal.backspace", "normal", "BACKSPACE", "edit.backspace"),
    _bind("normal.enter", "normal", "ENTER", "edit.newline"),
    _bind("normal.left", "normal", "LEFT", "motion.left"),
    _bind("normal.right", "normal", "RIGHT", "motion.right"),
    _bind("normal.up", "normal", "UP", "motion.up"),
    _bind("normal.down", "normal", "DOWN", "motion.down"),
    _bind("normal.home", "normal", "HOME", "motion.home"),
    _bind("normal.end", "normal", "END", "motion.end"),
    _bind("search.exit_escape", "search", "ESC", "core.exit_to_normal"),
    _bind("search.next_enter", "search", "ENTER", "search.next"),
    _bind("search.next_down", "search", "DOWN", "search.next"),
    _bind("search.previous_up", "search", "UP", "search.previous"),
    _bind("search.backspace", "search", "BACKSPACE", "search.backspace"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    for action in default_actions():
        registry.register_action(action, replace=replace)

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())
    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "default_actions", "DEFAULT_BINDINGS"]
