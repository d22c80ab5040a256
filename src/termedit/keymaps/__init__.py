"""Key bindings: value types, the registry, the trie resolver and the defaults."""

from .defaults import DEFAULT_BINDINGS, load_default_keymaps
from .models import ActionRef, Binding, KeySequence, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "DEFAULT_BINDINGS",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "RegistryStats",
    "ResolutionMatch",
    "ResolutionResult",
    "WhenClause",
    "load_default_keymaps",
]
