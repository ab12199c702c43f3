"""
Severity levels.

Levels are ordered from most severe (PANIC) to most verbose (DEBUG). A logger
configured at level ``L`` emits a message of severity ``S`` when ``L >= S``.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Union

LOCAL7_FACILITY = 23


class Level(IntEnum):
    """Log severity, matching the syslog severities ceethane exposes."""

    PANIC = 0  # syslog emerg
    FATAL = 1  # syslog crit
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]

    def __format__(self, format_spec: str) -> str:
        return format(_DISPLAY_NAMES[self], format_spec)

    @property
    def display_name(self) -> str:
        """Lowercase name used by the console sink."""
        return _DISPLAY_NAMES[self]

    @property
    def syslog_severity(self) -> int:
        return _SYSLOG_SEVERITIES[self]

    @property
    def priority(self) -> int:
        """Syslog priority value on the local7 facility."""
        return (LOCAL7_FACILITY << 3) + _SYSLOG_SEVERITIES[self]

    def permits(self, severity: Level) -> bool:
        """Whether a logger configured at this level emits ``severity``."""
        return self >= severity

    def to_stdlib(self) -> int:
        return _TO_STDLIB[self]

    @classmethod
    def from_stdlib(cls, levelno: int) -> Level:
        """Map a standard ``logging`` level number onto the closest Level."""
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG

    @classmethod
    def parse(cls, value: Union[Level, int, str]) -> Level:
        """Parse a Level from an enum member, an int or a (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _ALIASES:
                return _ALIASES[key]
            if key.isdigit():
                return cls(int(key))
        raise ValueError(f"Unknown log level: {value!r}")


_DISPLAY_NAMES = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
    Level.PANIC: "panic",
}

# Severity 5 ("notice") has no Level.
_SYSLOG_SEVERITIES = {
    Level.PANIC: 0,
    Level.FATAL: 2,
    Level.ERROR: 3,
    Level.WARN: 4,
    Level.INFO: 6,
    Level.DEBUG: 7,
}

_TO_STDLIB = {
    Level.PANIC: logging.CRITICAL,
    Level.FATAL: logging.CRITICAL,
    Level.ERROR: logging.ERROR,
    Level.WARN: logging.WARNING,
    Level.INFO: logging.INFO,
    Level.DEBUG: logging.DEBUG,
}

_ALIASES = {
    **{level.name.lower(): level for level in Level},
    **{name: level for level, name in _DISPLAY_NAMES.items()},
    "critical": Level.FATAL,
    "emerg": Level.PANIC,
    "crit": Level.FATAL,
    "err": Level.ERROR,
}
