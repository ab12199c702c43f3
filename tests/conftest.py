from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Mapping

import pytest

from ceethane.levels import Level

FIXED_NOW = datetime(2018, 4, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
FIXED_TIMESTAMP = "2018-04-01T12:30:45.000+00:00"


class RecordingSink:
    """Sink that remembers every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Level, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def send(self, name: str, level: Level, context: Mapping[str, Any]) -> None:
        with self._lock:
            self.calls.append((name, level, dict(context)))

    @property
    def levels(self) -> list[Level]:
        return [level for _, level, _ in self.calls]


class ExplodingSink:
    """Sink that breaks its own contract and raises."""

    def __init__(self) -> None:
        self.attempts = 0

    def send(self, name: str, level: Level, context: Mapping[str, Any]) -> None:
        self.attempts += 1
        raise RuntimeError("sink is broken")


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def exploding_sink() -> ExplodingSink:
    return ExplodingSink()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def _clean_ceethane_env(monkeypatch):
    """Keep the host's syslog/ceethane variables out of settings tests."""
    for var in (
        "SYSLOG_PROGRAM",
        "SYSLOG_SOCKET",
        "CEETHANE_PROGRAM",
        "CEETHANE_SOCKET",
        "CEETHANE_SOCKET_MODE",
        "CEETHANE_LEVEL",
        "CEETHANE_SINKS",
        "CEETHANE_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
