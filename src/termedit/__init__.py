"""Terminal text editor engine with a Textual host."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "editor",
    "keymaps",
    "modes",
    "render",
    "runtime",
    "search",
    "syntax",
]

__version__ = "0.1.0"
