"""Mode manager coordinating Normal/Search dispatch."""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Type

from termedit.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from termedit.keymaps.models import normalize_modifiers
from termedit.runtime import telemetry

from .base_mode import PRESS, KeyInput, Mode, ModeContext, ModeResult

DEFAULT_DEBOUNCE_MS = 50


class KeyDebouncer:
    """Rejects a press identical to the one just before it within ``window_ms``.

    Every press, rejected or not, becomes the new reference, so a held key
    repeating faster than the window yields a single press. A window of 0
    accepts everything.
    """

    def __init__(self, window_ms: int, clock: Callable[[], float]) -> None:
        if window_ms < 0:
            raise ValueError("debounce_ms cannot be negative")
        self.window_ms = window_ms
        self._clock = clock
        self._last: Optional[tuple[str, tuple[str, ...]]] = None
        self._last_at = 0.0

    def accept(self, key: KeyInput) -> bool:
        now = self._clock()
        signature = (key.key, normalize_modifiers(key.modifiers))
        bounce = (
            self.window_ms > 0
            and signature == self._last
            and (now - self._last_at) * 1000.0 < self.window_ms
        )
        self._last, self._last_at = signature, now
        return not bounce


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    The keymap registry, resolver and ``when`` flags are published in
    ``context.extras`` for modes and actions to share. Only ``press`` events
    reach a mode, and only those the debouncer lets through.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self.debouncer = KeyDebouncer(debounce_ms, clock)
        self.logger = telemetry.get_logger("termedit.modes")
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None

        registry = keymap_registry
        if registry is None:
            registry = KeymapRegistry(logger_name="termedit.keymaps")
            if load_defaults:
                load_default_keymaps(registry)
        self.keymap_registry = registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            registry, logger_name="termedit.keymaps"
        )
        extras = self.context.extras
        extras.setdefault("keymap_registry", self.keymap_registry)
        extras.setdefault("keymap_resolver", self.keymap_resolver)
        extras.setdefault("keymap_flags", {})

    @property
    def debounce_ms(self) -> int:
        return self.debouncer.window_ms

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    def register_mode(self, mode_cls: Type[Mode], /, *args: object, **kwargs: object) -> Mode:
        """Instantiate ``mode_cls``; the first mode registered becomes active."""

        mode = mode_cls(self.context, *args, **kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        target = self._modes.get(name)
        if target is None:
            raise KeyError(f"Unknown mode '{name}'")
        current = self.active_mode
        if current is target:
            return
        if current is not None:
            current.on_exit(name)
        self._active = name
        target.on_enter(current.name if current else None)
        telemetry.record_event("mode.switch", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        if key.kind != PRESS:
            return ModeResult(consumed=False, status="ignored", message=key.kind)
        if not self.debouncer.accept(key):
            return ModeResult(consumed=False, status="debounced")

        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
