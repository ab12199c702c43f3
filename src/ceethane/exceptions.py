"""
Ceethane exception hierarchy.

Encoding and transport failures are raised by the encoder and the socket
transport, and are swallowed by the sinks that call them: a dropped log line
must never break the caller. ``LoggerPanic`` is the one error a Logger method
raises on purpose.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CeethaneError(Exception):
    """Root of all ceethane errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class EncodingError(CeethaneError):
    """Context could not be serialized to JSON."""

    def __init__(self, reason: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            f"Failed to encode log context: {reason}",
            code="encoding_failed",
            details=details,
        )


class TransportError(CeethaneError):
    """A frame could not be delivered to the syslog socket."""

    def __init__(self, *, path: str, mode: str, reason: str) -> None:
        super().__init__(
            f"Failed to deliver frame to {path} ({mode}): {reason}",
            code="transport_failed",
            details={"path": path, "mode": mode, "reason": reason},
        )
        self.path = path
        self.mode = mode


class LoggerPanic(CeethaneError):
    """Raised by ``Logger.panic`` once the panic message has been emitted."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="panic")
