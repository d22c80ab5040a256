"""Adapter that feeds host key events into an Editor and pushes frames back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from termedit.editor import Editor
from termedit.modes import KeyInput, ModeResult
from termedit.modes.base_mode import (
    BACKSPACE,
    DOWN,
    END,
    ENTER,
    ESC,
    HOME,
    LEFT,
    RIGHT,
    UP,
)
from termedit.render import Frame

NAMED_KEYS = {
    "left": LEFT,
    "right": RIGHT,
    "up": UP,
    "down": DOWN,
    "home": HOME,
    "end": END,
    "backspace": BACKSPACE,
    "enter": ENTER,
    "return": ENTER,
    "escape": ESC,
}

NormalizedKey = Tuple[str, Optional[str], Tuple[str, ...]]


def normalize_key(key: str, character: Optional[str] = None) -> NormalizedKey:
    """Translate a Textual key name (``"ctrl+s"``, ``"left"``, ``"a"``).

    Returns ``(key, text, modifiers)`` in the engine's vocabulary.
    """

    *modifiers, base = key.split("+") if key != "+" else ["+"]
    modifiers = [mod.lower() for mod in modifiers]
    named = NAMED_KEYS.get(base.lower())
    if named is not None:
        return (named, None, tuple(modifiers))

    command = {"ctrl", "alt", "meta"}.intersection(modifiers)
    if character and character.isprintable() and not command:
        return (character, character, ())
    if modifiers:
        return (base.lower(), None, tuple(modifiers))
    return (base.upper(), None, ())


def _ignore(*_args: object, **_kwargs: object) -> None:
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update the host UI."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _ignore
    handle_event: Callable[[str, object | None], None] = _ignore
    exit: Callable[[], None] = _ignore
    log: Callable[[str], None] = _ignore


class TextualEditorAdapter:
    """Bridges an ``Editor`` and its bus events to a host-friendly surface."""

    EVENTS = (
        "buffer.saved",
        "buffer.save_failed",
        "search.start",
        "search.end",
        "search.update",
        "editor.quit",
    )

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        for event in self.EVENTS:
            editor.bus.subscribe(
                event, lambda payload, name=event: self._relay(name, payload)
            )
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch one already-normalized key and redraw."""

        key_input = KeyInput(
            key=key, text=text, modifiers=tuple(str(mod).lower() for mod in modifiers)
        )
        self._trace("key", key=key, text=text, mods=key_input.modifiers)
        result = self.editor.dispatch(key_input)
        self._trace(
            "result",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        if result.message and result.status in {"saved", "save_failed"}:
            self.hooks.update_status(result.message)
        self.refresh()
        if not self.editor.running:
            self.hooks.exit()
        return result

    def handle_host_key(self, key: str, character: Optional[str] = None) -> ModeResult:
        name, text, modifiers = normalize_key(key, character)
        return self.handle_textual_key(name, text=text, modifiers=modifiers)

    def refresh(self) -> Frame:
        frame = self.editor.build_frame()
        self.hooks.update_frame(frame)
        return frame

    def _relay(self, name: str, payload: object | None) -> None:
        self._trace("event", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _trace(self, label: str, **fields: object) -> None:
        """Log ``label`` with the editor state followed by the non-empty ``fields``."""

        buffer = self.editor.buffer
        state: Dict[str, object] = {
            "mode": self.editor.mode,
            "cursor": buffer.cursor,
            "dirty": buffer.dirty,
            "version": buffer.document.version,
        }
        state.update((key, value) for key, value in fields.items() if value is not None)
        pairs = " ".join(f"{key}={value!r}" for key, value in state.items())
        self.hooks.log(f"{label} {pairs}")


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_key"]
