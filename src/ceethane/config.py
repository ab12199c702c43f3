"""
Logging Configuration.

Environment variables:
    SYSLOG_PROGRAM / CEETHANE_PROGRAM   application name (default: basename of argv[0])
    SYSLOG_SOCKET / CEETHANE_SOCKET     syslog socket path (default: platform specific)
    CEETHANE_SOCKET_MODE                datagram | stream
    CEETHANE_LEVEL                      panic | fatal | error | warn | info | debug
    CEETHANE_SINKS                      comma-separated sink names (syslog, stdout, stderr)
    CEETHANE_FORMAT                     json | console (stdout sink only)
"""

from typing import Any, Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import Level

SINK_NAMES = ("syslog", "stdout", "stderr")


class LoggingSettings(BaseSettings):
    """Environment-derived defaults for the bootstrap logger."""

    model_config = SettingsConfigDict(
        env_prefix="CEETHANE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    program: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SYSLOG_PROGRAM", "CEETHANE_PROGRAM"),
        description="Program name in the syslog header and the syslog_program field",
    )
    socket: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SYSLOG_SOCKET", "CEETHANE_SOCKET"),
        description="Syslog Unix socket path",
    )
    socket_mode: Literal["datagram", "stream"] = Field(default="datagram", description="Syslog socket type")
    level: Level = Field(default=Level.INFO, description="Minimum emitted level")
    sinks: str = Field(default="syslog,stdout", description="Comma-separated sink names")
    format: Literal["json", "console"] = Field(default="json", description="Stdout sink output format")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        return Level.parse(value)

    @field_validator("sinks")
    @classmethod
    def _check_sinks(cls, value: str) -> str:
        names = [s.strip().lower() for s in value.split(",") if s.strip()]
        if not names:
            raise ValueError("at least one sink is required")
        unknown = [name for name in names if name not in SINK_NAMES]
        if unknown:
            raise ValueError(f"unknown sink(s): {', '.join(unknown)}")
        return ",".join(names)

    @property
    def sink_names(self) -> list[str]:
        return self.sinks.split(",")
