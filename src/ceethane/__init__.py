"""
Ceethane: structured logging with CEE/syslog and JSON-line output.

Provides an immutable, context-carrying Logger with multiple sink support:
- syslog: CEE frames (``@cee:{...}``) over the local syslog Unix socket
- stdout: one JSON object per line
- stderr: CEE frames on standard error

Design Pattern: Strategy Pattern for sink abstraction.
Library: orjson for JSON serialization, structlog/stdlib bridges in ``integrations``.
"""

from .bootstrap import build_sink, default
from .exceptions import CeethaneError, EncodingError, LoggerPanic, TransportError
from .levels import Level
from .logger import Logger
from .sinks import ConsoleSink, FusedSink, Sink, StderrSink, SyslogSink, fuse

__all__ = [
    "CeethaneError",
    "ConsoleSink",
    "EncodingError",
    "FusedSink",
    "Level",
    "Logger",
    "LoggerPanic",
    "Sink",
    "StderrSink",
    "SyslogSink",
    "TransportError",
    "build_sink",
    "default",
    "fuse",
]
