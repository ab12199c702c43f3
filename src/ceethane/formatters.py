"""
Human-readable console rendering.

Used by ``ConsoleSink(fmt="console")`` during local development; production
output is the JSON line.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .levels import Level

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "program": "\033[35m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Renders one log event as an aligned line (fixed width, right-aligned).

    Format: ``timestamp | LEVEL | program | msg key=value ...``
    """

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        Level.DEBUG: "\x1b[36m",
        Level.INFO: "\x1b[32m",
        Level.WARN: "\x1b[33m",
        Level.ERROR: "\x1b[31m",
        Level.FATAL: "\x1b[1;31m",
        Level.PANIC: "\x1b[1;31m",
    }

    MESSAGE_KEY = "msg"
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 7
    PROGRAM_WIDTH = 24
    SEPARATOR = " | "

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    @classmethod
    def _colorize_level(cls, text: str, level: Level, use_color: bool) -> str:
        if not use_color:
            return text
        return f"{cls._LEVEL_COLORS[level]}{text}{cls._RESET}"

    @classmethod
    def format(
        cls,
        name: str,
        level: Level,
        context: Mapping[str, Any],
        *,
        now: Optional[datetime] = None,
        use_color: bool = False,
    ) -> str:
        """Format a log event into an aligned string."""
        now = now or datetime.now(timezone.utc)
        timestamp = now.strftime(cls.TIMESTAMP_FORMAT)
        message_text = str(context.get(cls.MESSAGE_KEY, ""))

        extras = []
        for k, v in context.items():
            if k == cls.MESSAGE_KEY:
                continue
            extras.append(f"{cls._maybe_color(k, 'key', use_color)}={cls._maybe_color(str(v), 'dim', use_color)}")
        if extras:
            message_text = f"{message_text} " + " ".join(extras)

        return "".join(
            [
                cls._maybe_color(cls._fit_right(timestamp, cls.TIMESTAMP_WIDTH), "timestamp", use_color),
                cls.SEPARATOR,
                cls._colorize_level(cls._fit_right(level.name, cls.LEVEL_WIDTH), level, use_color),
                cls.SEPARATOR,
                cls._maybe_color(cls._fit_right(name, cls.PROGRAM_WIDTH), "program", use_color),
                cls.SEPARATOR,
                message_text,
            ]
        )
