"""
Default logger assembly.

``default()`` builds the logger most programs want: CEE frames to the local
syslog socket fused with JSON lines on stdout, named after the program.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, Optional, Union

from .config import LoggingSettings
from .levels import Level
from .logger import Logger
from .sinks import ConsoleSink, Sink, StderrSink, SyslogSink, fuse


def default_program_name() -> str:
    """Basename of the invoking program."""
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else "python"
    return os.path.basename(argv0.rstrip("/")) or "python"


def default_syslog_socket(platform: Optional[str] = None) -> str:
    platform = platform or sys.platform
    if platform == "darwin":
        return "/var/run/syslog"
    return "/dev/log"


def _syslog(settings: LoggingSettings) -> Sink:
    return SyslogSink(settings.socket or default_syslog_socket(), settings.socket_mode)


def _stdout(settings: LoggingSettings) -> Sink:
    return ConsoleSink(sys.stdout, fmt=settings.format)


def _stderr(settings: LoggingSettings) -> Sink:
    return StderrSink(sys.stderr)


_SINK_FACTORIES: dict[str, Callable[[LoggingSettings], Sink]] = {
    "syslog": _syslog,
    "stdout": _stdout,
    "stderr": _stderr,
}


def build_sink(settings: LoggingSettings) -> Sink:
    """Create the sinks named in ``settings.sinks`` and fuse them in order."""
    names = [s.strip().lower() for s in settings.sinks.split(",") if s.strip()]
    if not names:
        raise ValueError("No sinks configured")
    sinks = []
    for name in names:
        factory = _SINK_FACTORIES.get(name)
        if factory is None:
            raise ValueError(f"Unknown sink: {name!r}")
        sinks.append(factory(settings))
    return fuse(*sinks)


def default(
    level: Union[Level, str, None] = None,
    *,
    settings: Optional[LoggingSettings] = None,
) -> Logger:
    """Build the default logger.

    Args:
        level: Minimum emitted level (default: ``settings.level``)
        settings: Configuration (default: loaded from the environment)
    """
    settings = settings or LoggingSettings()
    return Logger(
        name=settings.program or default_program_name(),
        level=Level.parse(level) if level is not None else settings.level,
        sink=build_sink(settings),
    )
