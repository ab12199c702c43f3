"""
Routing of structlog events and standard-library log records into a ceethane Logger.

After ``configure_logging(ll)``, ``structlog.get_logger().info("x", k=1)`` and
``logging.getLogger("lib").warning("y")`` both end up in ``ll``'s sink with
``ll``'s context, gated at ``ll``'s level.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import structlog
from structlog.typing import EventDict, WrappedLogger

from .levels import Level
from .logger import Logger

_METHOD_LEVELS = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "msg": Level.INFO,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "error": Level.ERROR,
    "exception": Level.ERROR,
    "critical": Level.FATAL,
    "fatal": Level.FATAL,
}


def level_for_method(method_name: str) -> Level:
    """Map a structlog method name onto a Level (unknown names log at INFO)."""
    return _METHOD_LEVELS.get(method_name, Level.INFO)


def get_logger(name: Optional[str] = None) -> Any:
    """Get a structlog logger, optionally tagged with a ``logger`` field."""
    # wrap_logger() takes a positional "logger" argument, so bind the field instead
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger().bind(logger=name)


# =============================================================================
# Structlog
# =============================================================================


class SinkRenderer:
    """Final structlog processor that hands the event to a ceethane Logger.

    The ``event`` key becomes the message; every other key becomes context.
    Returns an empty string, the wrapped logger writes nowhere.
    """

    def __init__(self, logger: Logger):
        self._logger = logger

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        pairs = dict(event_dict)
        message = pairs.pop("event", "")
        self._logger.kvs(pairs).log(level_for_method(method_name), message)
        return ""


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def configure_structlog(logger: Logger) -> None:
    """Configure structlog processors and factory to render into ``logger``."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            SinkRenderer(logger),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logger.level.to_stdlib()),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# =============================================================================
# Standard library logging
# =============================================================================


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records to a ceethane Logger.

    The record's logger name is attached as ``logger`` and an attached
    exception as ``err``.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET):
        super().__init__(level)
        self._logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = record.getMessage()
            ll = self._logger.kvs(logger=record.name)
            if record.exc_info and record.exc_info[1] is not None:
                ll = ll.with_error(record.exc_info[1])
            ll.log(Level.from_stdlib(record.levelno), msg)
        except Exception:
            self.handleError(record)


def configure_logging(logger: Logger, *, intercept_stdlib: bool = True) -> None:
    """
    Make ``logger`` the destination of structlog and (optionally) stdlib logging.

    Args:
        logger: Logger whose sink, context and level receive the events
        intercept_stdlib: Replace the root logger's handlers with a redirect
    """
    configure_structlog(logger)

    if intercept_stdlib:
        root_logger = logging.getLogger()
        root_logger.handlers = []
        root_logger.setLevel(logger.level.to_stdlib())
        root_logger.addHandler(RedirectStdLibHandler(logger))
