"""Mode manager and the Normal/Search dispatch modes."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .search_mode import SearchMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "SearchMode",
]
