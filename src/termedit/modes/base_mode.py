"""Key events, results and the context shared by editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from termedit.buffer import Buffer, Viewport

ESC = "ESC"
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
LEFT = "LEFT"
RIGHT = "RIGHT"
UP = "UP"
DOWN = "DOWN"
HOME = "HOME"
END = "END"

PRESS = "press"
REPEAT = "repeat"
RELEASE = "release"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is either a named key (``"ENTER"``, ``"LEFT"``...) or the character
    itself; ``text`` carries the printable character, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None
    kind: str = PRESS

    def has_command_modifier(self) -> bool:
        return any(mod.lower() in {"ctrl", "alt"} for mod in self.modifiers)

    @property
    def printable(self) -> Optional[str]:
        if self.text and self.text.isprintable() and not self.has_command_modifier():
            return self.text
        return None


@dataclass(slots=True)
class ModeResult:
    """What a mode did with a key.

    ``consumed`` is false when the key meant nothing in the active mode;
    ``switch_to`` names the mode the manager should enter next.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """The buffer, viewport and bus handed to every mode and action.

    ``extras`` carries per-session objects such as the keymap resolver, the
    ``when`` flags and the active search engine.
    """

    buffer: Buffer
    viewport: Viewport
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)


Listener = Callable[[object], None]


class ModeBus:
    """Named events fanned out to listeners in subscription order."""

    def __init__(self) -> None:
        self._listeners: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback``; the returned function unsubscribes it."""

        listeners = self._listeners.setdefault(event, [])
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in tuple(self._listeners.get(event, ())):
            callback(payload)


class Mode:
    """A named key handler; subclasses override ``handle_key``."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        """Called when the mode becomes active, with the mode it replaced."""

    def on_exit(self, next_mode: Optional[str]) -> None:
        """Called before the manager activates ``next_mode``."""

    def handle_key(self, key: KeyInput) -> ModeResult:
        raise NotImplementedError
