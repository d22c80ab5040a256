"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use termedit.adapters.textual.app"
    ) from exc

from termedit.buffer import BufferIOError
from termedit.config import EditorConfig
from termedit.editor import Editor
from termedit.render import Frame
from termedit.runtime import telemetry
from termedit.runtime.telemetry import PRESETS

from .controller import TextualEditorAdapter, TextualUIHooks
from .render import frame_to_text


class TermEditApp(App[None]):
    """Full-screen Textual host: one widget redrawn from each Frame."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
		width: 1fr;
		padding: 0;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, editor: Editor) -> None:
        super().__init__()
        self.editor = editor
        self.adapter: TextualEditorAdapter | None = None
        self._view: Static | None = None
        self.logger = telemetry.get_logger("termedit.adapters.textual")

    def compose(self) -> ComposeResult:
        self._view = Static("", id="editor-view")
        yield self._view

    def on_mount(self) -> None:
        self.editor.resize(self.size.height, self.size.width)
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            exit=self.exit,
            log=self.logger.debug,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)

    def on_resize(self, event: events.Resize) -> None:
        self.editor.resize(event.size.height, event.size.width)
        if self.adapter:
            self.adapter.refresh()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_host_key(event.key, event.character)
        event.stop()
        event.prevent_default()

    def _update_frame(self, frame: Frame) -> None:
        if self._view:
            self._view.update(frame_to_text(frame, self.editor.viewport.screen_cols))


def _non_negative_ms(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected milliseconds, got '{text}'") from None
    if value < 0:
        raise argparse.ArgumentTypeError("cannot be negative")
    return value


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termedit", description="Edit a text file in the terminal."
    )
    parser.add_argument("path", nargs="?", help="File to open or create")
    parser.add_argument(
        "--debounce-ms",
        type=_non_negative_ms,
        default=None,
        help="Drop identical key presses arriving within this many ms (0 disables)",
    )
    parser.add_argument(
        "--log-preset",
        choices=PRESETS,
        default=None,
        help="Telemetry preset (default: tui, or $TERMEDIT_LOG_PRESET)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = EditorConfig.from_env().with_overrides(
        debounce_ms=args.debounce_ms, log_preset=args.log_preset
    )
    telemetry.configure(preset=config.log_preset)
    try:
        editor = Editor.open(args.path, config=config)
    except BufferIOError as exc:
        raise SystemExit(f"termedit: {exc}") from exc
    TermEditApp(editor).run()


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
