"""Telemetry for the editor, backed by telelog.

The rest of the package only touches four names:

``configure(...)`` -- swap the active telelog configuration (or a preset)
``get_logger(name)`` -- cached logger bound to the active configuration
``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- profile a block, optionally as a tracked component

The editor owns the terminal while it runs, so nothing is written to the
console unless ``RAWEDIT_CONSOLE_LOG`` is set; log lines go to the file named
by ``RAWEDIT_LOG_FILE`` instead.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "RAWEDIT_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "rawedit")

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Plain description of a telelog setup, turned into a ``tl.Config``."""

    level: str = "INFO"
    log_file: Optional[str] = None
    console: bool = False
    colored: bool = True
    json: bool = False
    buffer_size: Optional[int] = None

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size is not None:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # Spans rely on ``logger.profile`` timings.
        config.with_profiling(True)
        return config


# preset name -> (level, fallback log file, json, buffered)
PRESETS: Dict[str, Tuple[str, str, bool, bool]] = {
    "development": ("DEBUG", "rawedit-debug.log", False, False),
    "production": ("INFO", "rawedit.log", False, True),
    "performance": ("DEBUG", "rawedit-performance.log", True, True),
}


def preset_settings(preset: str) -> LogSettings:
    try:
        level, fallback_file, json, buffered = PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{preset}'; expected one of {sorted(PRESETS)}."
        ) from None
    return LogSettings(
        level=level,
        log_file=_env("LOG_FILE") or fallback_file,
        json=json,
        buffer_size=2048 if buffered else None,
    )


def env_settings() -> LogSettings:
    """Read ``RAWEDIT_LOG_*`` and ``RAWEDIT_CONSOLE_LOG`` from the environment."""

    buffer_size = None
    if _env_flag("LOG_BUFFERED"):
        buffer_size = int(_env("LOG_BUFFER_SIZE") or "2048")
    return LogSettings(
        level=(_env("LOG_LEVEL") or "INFO").upper(),
        log_file=_env("LOG_FILE") or None,
        console=_env_flag("CONSOLE_LOG"),
        colored=not _env_flag("NO_COLOR"),
        json=_env_flag("LOG_JSON"),
        buffer_size=buffer_size,
    )


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` adopts a ready ``tl.Config``; ``preset`` picks one of
    :data:`PRESETS`. Passing neither re-reads the environment. Cached loggers
    are dropped so later ``get_logger`` calls see the new setup.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = preset_settings(preset).build()
    elif config is None:
        config = env_settings().build()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = env_settings().build()

    logger_name = name or DEFAULT_LOGGER_NAME
    log = _LOGGER_CACHE.get(logger_name)
    if log is None:
        log = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = log
    return log


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``message`` with ``payload`` through the richest method available."""

    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; lets the block attach metadata or flag failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` also tracks the block as a component of the same name;
    a string names the component explicitly. ``metadata`` is pushed onto the
    logger context for the duration of the block. An exception escaping the
    block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    context = {key: _text(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(log, name, component_name, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()
logger = get_logger()

__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "configure",
    "env_settings",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
    "logger",
]
