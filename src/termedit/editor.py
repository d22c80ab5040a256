"""Editor controller: owns the session state and routes keystrokes."""

from __future__ import annotations

import time
from typing import Callable, Optional

from termedit.buffer import Buffer, History, Viewport
from termedit.buffer.files import PathLike
from termedit.config import EditorConfig
from termedit.keymaps import KeymapRegistry
from termedit.modes import KeyInput, ModeBus, ModeContext, ModeResult, NormalMode, SearchMode
from termedit.modes.mode_manager import ModeManager
from termedit.render import Frame, build_frame
from termedit.runtime import telemetry
from termedit.search import SearchEngine


class Editor:
    """One editing session: buffer, viewport, modes, and the last message.

    Construct it explicitly and feed it ``KeyInput`` values; nothing here
    touches the terminal.
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        config: Optional[EditorConfig] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer = buffer or Buffer(history=History(limit=self.config.undo_limit))
        self.viewport = Viewport(self.config.screen_rows, self.config.screen_cols)
        self.bus = ModeBus()
        self.context = ModeContext(buffer=self.buffer, viewport=self.viewport, bus=self.bus)
        self.manager = ModeManager(
            self.context,
            keymap_registry=keymap_registry,
            debounce_ms=self.config.debounce_ms,
            clock=clock,
        )
        self.manager.register_mode(NormalMode)
        self.manager.register_mode(SearchMode)
        self.running = True
        self.message: Optional[str] = None
        self.logger = telemetry.get_logger("termedit.editor")
        self.bus.subscribe("editor.quit", self._on_quit)

    @classmethod
    def open(
        cls,
        path: Optional[PathLike] = None,
        *,
        config: Optional[EditorConfig] = None,
        **kwargs: object,
    ) -> "Editor":
        """Start a session on ``path``; ``BufferIOError`` propagates on read failure."""

        config = config or EditorConfig()
        history = History(limit=config.undo_limit)
        buffer = Buffer.open(path, history=history) if path else Buffer(history=history)
        return cls(buffer, config=config, **kwargs)  # type: ignore[arg-type]

    @property
    def mode(self) -> str:
        active = self.manager.active_mode
        return active.name if active else "normal"

    @property
    def search(self) -> Optional[SearchEngine]:
        engine = self.context.extras.get("search")
        return engine if isinstance(engine, SearchEngine) else None

    def resize(self, rows: int, cols: int) -> None:
        self.viewport.resize(rows, cols)
        self.viewport.recompute_scroll(self.buffer.cursor)

    def dispatch(self, key: KeyInput) -> ModeResult:
        if not self.running:
            return ModeResult(consumed=False, status="stopped")
        result = self.manager.handle_key(key)
        self._update_message(result)
        return result

    def build_frame(self) -> Frame:
        search = self.search
        return build_frame(
            self.buffer,
            self.viewport,
            mode=self.mode,
            search=search.state if search else None,
            message=self.message,
        )

    def _update_message(self, result: ModeResult) -> None:
        if result.status in {"saved", "save_failed"}:
            self.message = result.message
        elif result.consumed:
            self.message = None

    def _on_quit(self, payload: object | None) -> None:
        self.running = False
        telemetry.record_event("editor.quit", data={"state": payload})


__all__ = ["Editor"]
