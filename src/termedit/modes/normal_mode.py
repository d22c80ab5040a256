"""Normal mode: typing edits the buffer, bindings drive everything else."""

from __future__ import annotations

from termedit.actions import editing

from .base_mode import KeyInput, ModeContext, ModeResult
from .keymapped import KeymapMode, key_token


class NormalMode(KeymapMode):
    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._typed: list[str] = []

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._typed.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._typed.append(key_token(key))
        result = self.lookup(self._typed)
        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        self._typed.clear()
        if result.status == "match" and result.match:
            return self.run(result.match)
        text = key.printable
        if text:
            return editing.insert_text(self.context, text)
        return ModeResult(consumed=False, status="miss", message="unhandled")
