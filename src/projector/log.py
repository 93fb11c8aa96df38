"""Leveled terminal logging for projector, rendered with rich.

Library use is quiet by default (``warning``); raise verbosity with
``PROJECTOR_LOG_LEVEL`` or ``set_level``. Diagnostic levels write to stderr so
command output on stdout stays parseable.
"""

from __future__ import annotations

import os
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LEVEL_BY_NAME = {
    "trace": LogLevel.TRACE,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "success": LogLevel.SUCCESS,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}

_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.INFO: "",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_STDOUT_LEVELS = frozenset({LogLevel.INFO, LogLevel.SUCCESS})
_DEFAULT_LEVEL = LogLevel.WARNING
_configured_level: LogLevel | None = None


def parse_level(value: str | None) -> LogLevel:
    """Map a level name to ``LogLevel``; unknown or empty names give the default."""
    name = (value or "").strip().lower()
    return LEVEL_BY_NAME.get(name, _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = parse_level(os.environ.get("PROJECTOR_LOG_LEVEL"))
    return _configured_level


def set_level(value: str | None) -> None:
    """Set the active log level."""
    global _configured_level
    _configured_level = parse_level(value)


def is_enabled(level: LogLevel) -> bool:
    return level >= configured_level()


def _color_disabled() -> bool:
    return bool(os.environ.get("NO_COLOR") or os.environ.get("PROJECTOR_NO_COLOR"))


def emit(level: LogLevel, message: str, *, style: str | None = None) -> None:
    if not is_enabled(level):
        return
    console = Console(
        stderr=level not in _STDOUT_LEVELS,
        soft_wrap=True,
        highlight=False,
        no_color=_color_disabled(),
    )
    console.print(Text(message, style=style or _STYLES[level]))


def trace(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.TRACE, message, style=style)


def debug(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.DEBUG, message, style=style)


def info(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.INFO, message, style=style)


def success(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.SUCCESS, message, style=style)


def warning(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.WARNING, message, style=style)


def error(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.ERROR, message, style=style)
