"""
Settings and default-logger assembly tests.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from ceethane import default
from ceethane.bootstrap import build_sink, default_program_name, default_syslog_socket
from ceethane.config import LoggingSettings
from ceethane.levels import Level
from ceethane.sinks import ConsoleSink, FusedSink, StderrSink, SyslogSink


class TestLoggingSettings:
    """环境变量配置测试"""

    def test_defaults(self) -> None:
        settings = LoggingSettings(_env_file=None)
        assert settings.program is None
        assert settings.socket is None
        assert settings.socket_mode == "datagram"
        assert settings.level is Level.INFO
        assert settings.sink_names == ["syslog", "stdout"]
        assert settings.format == "json"

    def test_syslog_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("SYSLOG_PROGRAM", "billing")
        monkeypatch.setenv("SYSLOG_SOCKET", "/tmp/custom.sock")
        settings = LoggingSettings(_env_file=None)
        assert settings.program == "billing"
        assert settings.socket == "/tmp/custom.sock"

    def test_prefixed_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("CEETHANE_PROGRAM", "billing")
        monkeypatch.setenv("CEETHANE_LEVEL", "warning")
        monkeypatch.setenv("CEETHANE_SINKS", " STDOUT , stderr ")
        monkeypatch.setenv("CEETHANE_SOCKET_MODE", "stream")
        monkeypatch.setenv("CEETHANE_FORMAT", "console")
        settings = LoggingSettings(_env_file=None)
        assert settings.program == "billing"
        assert settings.level is Level.WARN
        assert settings.sink_names == ["stdout", "stderr"]
        assert settings.socket_mode == "stream"
        assert settings.format == "console"

    def test_keyword_construction(self) -> None:
        settings = LoggingSettings(_env_file=None, program="svc", socket="/tmp/x.sock", level="debug")
        assert settings.program == "svc"
        assert settings.socket == "/tmp/x.sock"
        assert settings.level is Level.DEBUG

    @pytest.mark.parametrize(
        "field, value",
        [
            ("level", "notice"),
            ("sinks", "syslog,kafka"),
            ("sinks", " , "),
            ("socket_mode", "raw"),
            ("format", "xml"),
        ],
    )
    def test_invalid_values(self, field: str, value: str) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(_env_file=None, **{field: value})

    def test_settings_are_frozen(self) -> None:
        settings = LoggingSettings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.level = Level.DEBUG  # type: ignore[misc]


class TestDefaults:
    def test_program_name_is_argv0_basename(self) -> None:
        with patch("sys.argv", ["/usr/local/bin/fake_web_app", "--flag"]):
            assert default_program_name() == "fake_web_app"

    def test_program_name_without_argv(self) -> None:
        with patch("sys.argv", []):
            assert default_program_name() == "python"

    def test_socket_per_platform(self) -> None:
        assert default_syslog_socket("darwin") == "/var/run/syslog"
        assert default_syslog_socket("linux") == "/dev/log"


class TestBuildSink:
    """Sink 组装测试"""

    def test_default_is_syslog_fused_with_stdout(self) -> None:
        sink = build_sink(LoggingSettings(_env_file=None, socket="/tmp/x.sock"))
        assert isinstance(sink, FusedSink)
        assert isinstance(sink.first, SyslogSink)
        assert isinstance(sink.second, ConsoleSink)
        assert sink.first.transport.path == "/tmp/x.sock"
        assert sink.first.transport.mode == "datagram"

    def test_platform_socket_when_unset(self) -> None:
        with patch("ceethane.bootstrap.default_syslog_socket", return_value="/var/run/syslog"):
            sink = build_sink(LoggingSettings(_env_file=None, sinks="syslog"))
        assert isinstance(sink, SyslogSink)
        assert sink.transport.path == "/var/run/syslog"

    def test_single_sink_is_not_fused(self) -> None:
        assert isinstance(build_sink(LoggingSettings(_env_file=None, sinks="stderr")), StderrSink)

    def test_unknown_sink_name(self) -> None:
        settings = LoggingSettings.model_construct(sinks="syslog,carrier")
        with pytest.raises(ValueError):
            build_sink(settings)


class TestDefaultLogger:
    def test_default_uses_settings(self) -> None:
        settings = LoggingSettings(_env_file=None, program="svc", level="error")
        ll = default(settings=settings)
        assert ll.name == "svc"
        assert ll.level is Level.ERROR
        assert dict(ll.context) == {}

    def test_explicit_level_wins(self) -> None:
        ll = default(Level.DEBUG, settings=LoggingSettings(_env_file=None, program="svc", level="error"))
        assert ll.level is Level.DEBUG

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("SYSLOG_PROGRAM", "from-env")
        monkeypatch.setenv("CEETHANE_SINKS", "stdout")
        ll = default("info")
        assert ll.name == "from-env"
        assert isinstance(ll.sink, ConsoleSink)

    def test_emits_to_stdout_even_without_syslog(self, capsys, tmp_path) -> None:
        settings = LoggingSettings(_env_file=None, program="svc", socket=str(tmp_path / "missing.sock"))
        default(Level.INFO, settings=settings).kvs(user_id=1337).info("hello")
        decoded = json.loads(capsys.readouterr().out)
        assert decoded["user_id"] == 1337
        assert decoded["msg"] == "hello"
        assert decoded["syslog_program"] == "svc"
