"""
Log sinks.

A sink is anything with a ``send(name, level, context)`` method. Sinks are
best effort: encoding and delivery failures are swallowed and the message is
dropped, so a broken log destination never breaks the caller.

Sinks are shared by every logger derived from a common ancestor and must be
safe to call from several threads.
"""

from __future__ import annotations

import sys
import threading
from datetime import datetime, timezone
from functools import reduce
from typing import Any, Callable, Literal, Mapping, Optional, Protocol, TextIO, runtime_checkable

from .encoding import encode_cee_frame, encode_console_line
from .exceptions import CeethaneError, EncodingError
from .formatters import ConsoleFormatter
from .levels import Level
from .transport import SocketMode, UnixSocketTransport

LogFormat = Literal["json", "console"]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@runtime_checkable
class Sink(Protocol):
    """Destination for log events.

    Must not raise exceptions outward.
    """

    def send(self, name: str, level: Level, context: Mapping[str, Any]) -> None: ...


class ConsoleSink:
    """Writes one JSON object per line to standard output.

    Args:
        stream: Output stream (default: stdout)
        fmt: ``"json"`` or ``"console"`` (aligned, human-readable)
        clock: Source of the event timestamp
    """

    def __init__(self, stream: Optional[TextIO] = None, fmt: LogFormat = "json", clock: Optional[Clock] = None):
        if fmt not in ("json", "console"):
            raise ValueError(f"Unsupported console format: {fmt!r}")
        self._stream = stream or sys.stdout
        self._fmt = fmt
        self._clock = clock or utc_now
        self._lock = threading.Lock()

    def _render(self, name: str, level: Level, context: Mapping[str, Any]) -> str:
        if self._fmt == "json":
            return encode_console_line(name, level, context, now=self._clock())
        use_color = bool(getattr(self._stream, "isatty", lambda: False)())
        try:
            return ConsoleFormatter.format(name, level, context, now=self._clock(), use_color=use_color)
        except Exception as exc:
            # Context values are rendered with str(), which may run user code
            raise EncodingError(f"console rendering failed: {exc!r}") from exc

    def send(self, name: str, level: Level, context: Mapping[str, Any]) -> None:
        try:
            output = self._render(name, level, context)
            with self._lock:
                self._stream.write(output + "\n")
                self._stream.flush()
        except (CeethaneError, OSError, ValueError):
            return

    def __repr__(self) -> str:
        return f"ConsoleSink(fmt={self._fmt!r})"


class StderrSink:
    """Writes the full CEE frame to standard error."""

    def __init__(self, stream: Optional[TextIO] = None, clock: Optional[Clock] = None):
        self._stream = stream or sys.stderr
        self._clock = clock or utc_now
        self._lock = threading.Lock()

    def send(self, name: str, level: Level, context: Mapping[str, Any]) -> None:
        try:
            frame = encode_cee_frame(name, level, context, now=self._clock())
            with self._lock:
                self._stream.write(frame.decode("utf-8"))
                self._stream.flush()
        except (CeethaneError, OSError, ValueError):
            return

    def __repr__(self) -> str:
        return "StderrSink()"


class SyslogSink:
    """Sends CEE frames to a syslog Unix socket.

    Each ``send`` opens its own non-blocking socket; a failed delivery drops
    the message.

    Args:
        path: Syslog socket path (e.g. ``/dev/log``)
        mode: ``"datagram"`` or ``"stream"``
        clock: Source of the event timestamp
    """

    def __init__(self, path: str, mode: SocketMode = "datagram", clock: Optional[Clock] = None):
        self._transport = UnixSocketTransport(path, mode)
        self._clock = clock or utc_now

    @property
    def transport(self) -> UnixSocketTransport:
        return self._transport

    def send(self, name: str, level: Level, context: Mapping[str, Any]) -> None:
        try:
            frame = encode_cee_frame(name, level, context, now=self._clock())
            self._transport.deliver(frame)
        except CeethaneError:
            return

    def __repr__(self) -> str:
        return f"SyslogSink(path={self._transport.path!r}, mode={self._transport.mode!r})"


class FusedSink:
    """Forwards every event to two sinks, first then second."""

    def __init__(self, first: Sink, second: Sink):
        self.first = first
        self.second = second

    def send(self, name: str, level: Level, context: Mapping[str, Any]) -> None:
        for sink in (self.first, self.second):
            try:
                sink.send(name, level, context)
            except Exception:
                pass  # One broken sink must not starve the other

    def __repr__(self) -> str:
        return f"FusedSink({self.first!r}, {self.second!r})"


def fuse(*sinks: Sink) -> Sink:
    """Combine sinks left to right into nested ``FusedSink``s."""
    if not sinks:
        raise ValueError("fuse() requires at least one sink")
    return reduce(FusedSink, sinks)
