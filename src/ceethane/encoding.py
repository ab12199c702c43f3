"""
Frame encoders.

Two encodings of one log event ``(name, level, context)``:

- the CEE frame sent to syslog::

    <187>2018-04-01T12:00:00.000+00:00 svc[4242]: @cee:{"user_id":1337,"msg":"hello"}\\n

- the JSON line written to the console::

    {"user_id":1337,"msg":"hello","time":"...","level":"info","syslog_program":"svc"}

Both are pure functions of their arguments; ``now`` and ``pid`` default to the
current UTC time and process id.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

import orjson

from .exceptions import EncodingError
from .levels import Level

# Sub-second precision is not carried; the millisecond field is always 000.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.000+00:00"
CEE_COOKIE = "@cee:"

TIME_KEY = "time"
LEVEL_KEY = "level"
PROGRAM_KEY = "syslog_program"


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Compact JSON serialization using orjson.

    Raises:
        EncodingError: ``v`` holds a value orjson cannot serialize.
    """
    try:
        return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()
    except orjson.JSONEncodeError as exc:
        raise EncodingError(str(exc)) from exc


def syslog_priority(level: Level) -> int:
    return level.priority


def syslog_timestamp(now: Optional[datetime] = None) -> str:
    """Format ``now`` (naive values are taken as UTC) as a syslog timestamp."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def encode_cee_frame(
    name: str,
    level: Level,
    context: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
    pid: Optional[int] = None,
) -> bytes:
    """Encode a log event as a CEE-over-syslog frame."""
    body = orjson_dumps(dict(context))
    if pid is None:
        pid = os.getpid()
    frame = f"<{level.priority}>{syslog_timestamp(now)} {name}[{pid}]: {CEE_COOKIE}{body}\n"
    try:
        return frame.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(str(exc)) from exc


def console_event(
    name: str,
    level: Level,
    context: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Return a copy of ``context`` with the console fields injected."""
    event = dict(context)
    event[TIME_KEY] = syslog_timestamp(now)
    event[LEVEL_KEY] = level.display_name
    event[PROGRAM_KEY] = name
    return event


def encode_console_line(
    name: str,
    level: Level,
    context: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> str:
    """Encode a log event as a single JSON line (without the newline)."""
    return orjson_dumps(console_event(name, level, context, now=now))
