"""Textual host for the editor.

Only ``app`` imports Textual; the controller is usable (and testable) alone.
"""

from .controller import TextualEditorAdapter, TextualUIHooks, normalize_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_key"]
