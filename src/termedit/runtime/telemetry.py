"""Logging and profiling for the editor, backed by telelog.

The host calls ``configure`` once, usually with one of ``PRESETS``. Everything
else goes through ``get_logger``, ``record_event`` and ``span``; the first of
those to run configures telelog from ``TERMEDIT_*`` variables if nothing has
been configured yet.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional

import telelog  # type: ignore[import]

ENV_PREFIX = "TERMEDIT_"
PRESETS = ("development", "production", "performance", "tui")

# Applied to a fresh ``telelog.Config``; TERMEDIT_LOG_FILE overrides ``file``.
_PRESET_SETTINGS: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "color": True, "json": False},
    "production": {
        "level": "INFO",
        "console": False,
        "file": "termedit.log",
        "buffered": True,
    },
    "performance": {
        "level": "DEBUG",
        "console": False,
        "file": "termedit-performance.log",
        "buffered": True,
        "json": True,
    },
    # The terminal belongs to the editor while a session runs.
    "tui": {"console": False},
}

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name)


def _env_on(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _env_settings() -> Dict[str, Any]:
    settings: Dict[str, Any] = {
        "console": not _env_on("DISABLE_CONSOLE"),
        "color": not _env_on("NO_COLOR"),
    }
    if _env_on("LOG_JSON"):
        settings["json"] = True
    if _env_on("LOG_BUFFERED"):
        settings["buffered"] = True
        settings["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return settings


def _build(settings: Mapping[str, Any]) -> Any:
    config = telelog.Config()
    config.with_min_level(settings.get("level") or (_env("LOG_LEVEL") or "INFO").upper())
    console = settings.get("console", True)
    config.with_console_output(console)
    if console:
        config.with_colored_output(settings.get("color", True))
    if "json" in settings:
        config.with_json_format(settings["json"])
    log_file = _env("LOG_FILE") or settings.get("file")
    if log_file:
        config.with_file_output(log_file)
    if settings.get("buffered"):
        config.with_buffering(True)
        if settings.get("buffer_size"):
            config.with_buffer_size(settings["buffer_size"])
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> Any:
    """Install a telelog configuration and drop cached loggers.

    Pass an explicit ``telelog.Config`` or the name of a preset, not both.
    With neither, settings come from ``TERMEDIT_*`` environment variables.
    """

    global _config
    if config is not None and preset is not None:
        raise ValueError("configure() takes either config or preset")
    if preset is not None:
        if preset not in _PRESET_SETTINGS:
            raise ValueError(f"Unknown preset '{preset}'")
        config = _build(_PRESET_SETTINGS[preset])
    elif config is None:
        config = _build(_env_settings())

    config.with_profiling(True)
    _config = config
    _loggers.clear()
    return config


def get_logger(name: Optional[str] = None) -> Any:
    key = name or _env("LOGGER") or "termedit"
    logger = _loggers.get(key)
    if logger is None:
        if _config is None:
            configure()
        logger = _loggers[key] = telelog.Logger.with_config(key, _config)
    return logger


def _emit(logger: Any, level: str, message: str, fields: Mapping[str, Any]) -> None:
    level = level.lower()
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in fields.items()])
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'")
    plain(f"{message} {dict(fields)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is reported if the block fails."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        fields: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            fields["component"] = self.component
        _emit(self.logger, "error", "span::fail", fields)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component=True`` also tracks the block as a telelog component called
    ``name``; a string picks the component name. ``metadata`` is pushed as
    logger context until the block exits. Exceptions are logged and re-raised.
    """

    logger = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    else:
        component_name = component if isinstance(component, str) else None
    handle = SpanHandle(logger, name, component_name)

    with ExitStack() as stack:
        for key, value in (metadata or {}).items():
            handle.add_metadata(key, value)
            logger.add_context(key, handle.metadata[key])
            stack.callback(logger.remove_context, key)
        if component_name:
            stack.enter_context(logger.track_component(component_name))
        stack.enter_context(logger.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
