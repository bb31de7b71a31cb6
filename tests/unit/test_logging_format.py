"""Tests for unified logging format.

Target format: 2026-01-06T14:05:52Z [source] LEVEL message
"""

from __future__ import annotations

import logging
import re
import sys
from datetime import datetime
from unittest.mock import patch

import pytest


def make_record(msg: str = "Test message", level: int = logging.INFO, args: tuple = ()) -> logging.LogRecord:
    return logging.LogRecord(name="test", level=level, pathname="", lineno=0, msg=msg, args=args, exc_info=None)


class TestISO8601Formatter:
    """Test the custom ISO8601 formatter produces correct output."""

    def test_format_matches_target_layout(self):
        from studentvote.logging_config import ISO8601Formatter

        output = ISO8601Formatter(source="signup").format(make_record())

        pattern = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z \[signup\] INFO Test message$"
        assert re.match(pattern, output), f"Output '{output}' doesn't match expected format"

    def test_timestamp_is_utc(self):
        from studentvote.logging_config import ISO8601Formatter

        timestamp_str = ISO8601Formatter(source="cli").format(make_record()).split(" ")[0]

        assert timestamp_str.endswith("Z")
        assert datetime.fromisoformat(timestamp_str.replace("Z", "+00:00")) is not None

    def test_message_formatting_with_args(self):
        from studentvote.logging_config import ISO8601Formatter

        output = ISO8601Formatter().format(make_record("Matched %s to %s", args=("Sara", "X2")))

        assert output.endswith("[app] INFO Matched Sara to X2")

    def test_exception_text_appended(self):
        from studentvote.logging_config import ISO8601Formatter

        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record("failed")
            record.exc_info = sys.exc_info()

        output = ISO8601Formatter().format(record)

        assert "failed\nTraceback" in output
        assert "ValueError: boom" in output


class TestResolveLevel:
    def test_levels(self):
        from studentvote.logging_config import TRACE, resolve_level

        assert resolve_level("TRACE") == TRACE
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level("WARNING") == logging.WARNING
        assert resolve_level(None) == logging.INFO
        assert resolve_level("INFO", debug=True) == logging.DEBUG
        assert resolve_level("nonsense") == logging.INFO


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_env_var_controls_level(self):
        from studentvote.logging_config import TRACE, configure_logging

        with patch.dict("os.environ", {"LOG_LEVEL": "TRACE"}):
            root = configure_logging(source="test")

        assert root.level == TRACE
        assert len(root.handlers) == 1

    def test_noisy_loggers_quieted(self):
        from studentvote.logging_config import configure_logging

        configure_logging(source="test", level=logging.DEBUG)

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_logger_has_trace_method(self):
        from studentvote.logging_config import get_logger

        assert callable(get_logger("studentvote.test").trace)  # type: ignore[attr-defined]
