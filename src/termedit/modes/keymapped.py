"""Base for modes that consult the keymap before treating a key as text."""

from __future__ import annotations

from typing import MutableMapping, Sequence, cast

from termedit.keymaps import KeymapResolver, KeyStroke, ResolutionMatch, ResolutionResult
from termedit.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


def key_token(key: KeyInput) -> str:
    """Spell ``key`` the way bindings do, e.g. ``ctrl+s``."""

    return KeyStroke(key.key, tuple(key.modifiers)).token


class KeymapMode(Mode):
    """Shares the manager's resolver and ``when`` flags with its subclasses."""

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        resolver = context.extras.get("keymap_resolver")
        if not isinstance(resolver, KeymapResolver):
            raise RuntimeError(f"{self.name} mode needs a 'keymap_resolver' in extras")
        self.resolver = resolver
        self.flags = cast(
            MutableMapping[str, bool], context.extras.setdefault("keymap_flags", {})
        )
        self.logger = telemetry.get_logger(f"termedit.modes.{self.name}")

    def lookup(self, tokens: Sequence[str]) -> ResolutionResult:
        return self.resolver.resolve(self.name, tokens, context=self.flags)

    def run(self, match: ResolutionMatch) -> ModeResult:
        """Invoke the bound action; a handler returning nothing counts as consumed."""

        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["KeymapMode", "key_token"]
