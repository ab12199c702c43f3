"""
The structured Logger.

A Logger is an immutable value: ``kvs`` and ``with_error`` return a new Logger
carrying a merged copy of the context and never touch the receiver. Loggers
derived from a common ancestor share only the sink, so they can be extended
and used from different threads without locking.

Usage::

    ll = Logger("svc", Level.INFO, ConsoleSink()).kvs(user_id=1337)
    ll.info("hello")
    # {"user_id":1337,"msg":"hello","time":"...","level":"info","syslog_program":"svc"}
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .exceptions import LoggerPanic
from .levels import Level
from .sinks import Sink

MESSAGE_KEY = "msg"
ERROR_KEY = "err"


@dataclass(frozen=True)
class Logger:
    """Structured logger bound to a program name, a minimum level and a sink."""

    name: str
    level: Level
    # Sinks and context values need not be hashable; hash on identity fields only.
    sink: Sink = field(hash=False)
    context: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", Level.parse(self.level))
        # Private copy behind a read-only view; nothing else holds the dict.
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    def kvs(self, additions: Optional[Mapping[str, Any]] = None, /, **fields: Any) -> Logger:
        """Return a new Logger with ``additions`` and ``fields`` merged into the context."""
        merged = dict(self.context)
        if additions:
            merged.update(additions)
        merged.update(fields)
        return replace(self, context=merged)

    def with_error(self, err: BaseException) -> Logger:
        """Return a new Logger carrying ``repr(err)`` under ``err``."""
        return self.kvs({ERROR_KEY: repr(err)})

    err = with_error

    def enabled_for(self, level: Level) -> bool:
        return self.level.permits(level)

    def _send(self, level: Level, msg: object) -> None:
        pairs = dict(self.context)
        pairs[MESSAGE_KEY] = str(msg)
        try:
            self.sink.send(self.name, level, pairs)
        except Exception:
            pass  # Logging must never break the caller

    def log(self, level: Level, msg: object) -> None:
        """Emit ``msg`` at ``level`` if this logger's level permits it. Never raises."""
        if self.level.permits(level):
            self._send(level, msg)

    def debug(self, msg: object) -> None:
        if self.level.permits(Level.DEBUG):
            self._send(Level.DEBUG, msg)

    def info(self, msg: object) -> None:
        if self.level.permits(Level.INFO):
            self._send(Level.INFO, msg)

    def warn(self, msg: object) -> None:
        if self.level.permits(Level.WARN):
            self._send(Level.WARN, msg)

    warning = warn

    def error(self, msg: object) -> None:
        if self.level.permits(Level.ERROR):
            self._send(Level.ERROR, msg)

    def fatal(self, msg: object) -> None:
        if self.level.permits(Level.FATAL):
            self._send(Level.FATAL, msg)

    def panic(self, msg: object) -> None:
        """Emit ``msg`` at PANIC regardless of level, then raise ``LoggerPanic``.

        Raises:
            LoggerPanic: always, after the sink has been called.
        """
        self._send(Level.PANIC, msg)
        raise LoggerPanic(str(msg))
