"""
Unix domain socket transport for syslog frames.

Every delivery opens its own non-blocking socket and closes it before
returning, so a transport shared between threads holds no mutable state.
"""

from __future__ import annotations

import socket
from typing import Literal

from .exceptions import TransportError

SocketMode = Literal["datagram", "stream"]

_SOCKET_TYPES = {
    "datagram": socket.SOCK_DGRAM,
    "stream": socket.SOCK_STREAM,
}


class UnixSocketTransport:
    """Fire-and-forget delivery of encoded frames to a Unix socket path.

    Args:
        path: Filesystem path of the syslog socket.
        mode: ``"datagram"`` (one frame per datagram) or ``"stream"``
            (connect, send the newline-terminated frame, close).
    """

    def __init__(self, path: str, mode: SocketMode = "datagram"):
        if mode not in _SOCKET_TYPES:
            raise ValueError(f"Unsupported socket mode: {mode!r}")
        self._path = path
        self._mode = mode

    @property
    def path(self) -> str:
        return self._path

    @property
    def mode(self) -> SocketMode:
        return self._mode

    def deliver(self, frame: bytes) -> None:
        """Send ``frame`` without blocking.

        Raises:
            TransportError: the socket could not be created, reached or
                written to (including when the write would block).
        """
        try:
            with socket.socket(socket.AF_UNIX, _SOCKET_TYPES[self._mode]) as sock:
                sock.setblocking(False)
                if self._mode == "datagram":
                    sock.sendto(frame, self._path)
                else:
                    sock.connect(self._path)
                    # A non-blocking stream may accept only part of the frame;
                    # the remainder is dropped, never retried.
                    sent = sock.send(frame)
                    if sent < len(frame):
                        raise TransportError(
                            path=self._path,
                            mode=self._mode,
                            reason=f"short write ({sent} of {len(frame)} bytes)",
                        )
        except OSError as exc:
            raise TransportError(path=self._path, mode=self._mode, reason=str(exc)) from exc

    def __repr__(self) -> str:
        return f"UnixSocketTransport(path={self._path!r}, mode={self._mode!r})"
