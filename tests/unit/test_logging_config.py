"""Tests for joidu/logging_config.py

Logs must stay off stdout, which the command-line tools keep for JSON.
"""

import io
import json

import pytest

from joidu.logging_config import get_logger, setup_logging


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    yield stream
    setup_logging(level="DEBUG")


def last_line(stream):
    return stream.getvalue().strip().splitlines()[-1]


class TestSetupLogging:
    def test_json_lines(self, log_stream):
        setup_logging(level="INFO", json_output=True, stream=log_stream)
        get_logger("joidu.focus.test").info("hyperfocus_break_accepted", focus_minutes=46)

        entry = json.loads(last_line(log_stream))
        assert entry["event"] == "hyperfocus_break_accepted"
        assert entry["focus_minutes"] == 46
        assert entry["level"] == "info"
        assert entry["logger"] == "joidu.focus.test"
        assert "timestamp" in entry

    def test_json_keeps_emoji(self, log_stream):
        setup_logging(level="INFO", json_output=True, stream=log_stream)
        get_logger("joidu.focus.test").info("encouragement", text="💙")
        assert "💙" in last_line(log_stream)

    def test_level_filters(self, log_stream):
        setup_logging(level="WARNING", json_output=True, stream=log_stream)
        logger = get_logger("joidu.focus.test")
        logger.info("energy_bucket_changed")
        logger.warning("energy_outcome_dropped")

        events = [json.loads(line)["event"] for line in log_stream.getvalue().splitlines()]
        assert events == ["energy_outcome_dropped"]

    def test_env_selects_format(self, log_stream, monkeypatch):
        monkeypatch.setenv("JOIDU_LOG_FORMAT", "json")
        monkeypatch.setenv("JOIDU_LOG_LEVEL", "DEBUG")
        setup_logging(stream=log_stream)
        get_logger("joidu.focus.test").debug("hyperfocus_session_started")
        assert json.loads(last_line(log_stream))["level"] == "debug"

    def test_console_format_by_default(self, log_stream, monkeypatch):
        monkeypatch.delenv("JOIDU_LOG_FORMAT", raising=False)
        setup_logging(level="INFO", stream=log_stream)
        get_logger("joidu.focus.test").info("focus_session_finished", minutes=30)

        line = last_line(log_stream)
        assert "focus_session_finished" in line
        assert "minutes=30" in line
        assert not line.startswith("{")

    def test_nothing_on_stdout(self, capsys):
        setup_logging(level="DEBUG")
        get_logger("joidu.focus.test").info("hyperfocus_session_ended")
        assert capsys.readouterr().out == ""
