"""Editor settings resolved from the environment and the command line."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from termedit.modes.mode_manager import DEFAULT_DEBOUNCE_MS
from termedit.runtime.telemetry import ENV_PREFIX, PRESETS


def _env_int(key: str, fallback: Optional[int]) -> Optional[int]:
    value = os.environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    undo_limit: Optional[int] = None
    screen_rows: int = 24
    screen_cols: int = 80
    log_preset: str = "tui"

    def __post_init__(self) -> None:
        if self.debounce_ms < 0:
            raise ValueError("debounce_ms cannot be negative")
        if self.undo_limit is not None and self.undo_limit <= 0:
            raise ValueError("undo_limit must be positive")
        if self.log_preset not in PRESETS:
            raise ValueError(f"Unknown log preset '{self.log_preset}'")

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Read ``TERMEDIT_*`` variables; unusable values fall back to the defaults."""

        defaults = cls()
        debounce = _env_int("DEBOUNCE_MS", None)
        undo_limit = _env_int("UNDO_LIMIT", None)
        preset = os.environ.get(f"{ENV_PREFIX}LOG_PRESET")
        if debounce is None or debounce < 0:
            debounce = defaults.debounce_ms
        return cls(
            debounce_ms=debounce,
            undo_limit=undo_limit if undo_limit and undo_limit > 0 else None,
            log_preset=preset if preset in PRESETS else defaults.log_preset,
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        """Return a copy with every non-``None`` value in ``changes`` applied."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["EditorConfig"]
