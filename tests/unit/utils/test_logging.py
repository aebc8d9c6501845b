"""Tests for logging configuration utilities."""

from __future__ import annotations

import json
import logging
import sys

from tweenline.core.utils.logging import (
    FRAME_LOGGER_NAME,
    StructuredJSONFormatter,
    configure_logging,
    get_frame_logger,
    get_logger,
    log_performance,
)


def _record(**extra):
    record = logging.LogRecord(
        name="tweenline.test",
        level=logging.WARNING,
        pathname="/path/to/composite.py",
        lineno=42,
        msg="child %r rejected",
        args=("fade",),
        exc_info=None,
    )
    record.funcName = "add_animation"
    record.module = "composite"
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredJSONFormatter:
    """Test suite for StructuredJSONFormatter."""

    def test_basic_log_format(self):
        """Records render as JSON with level, message and context."""
        data = json.loads(StructuredJSONFormatter().format(_record()))
        assert data["level"] == "WARNING"
        assert data["message"] == "child 'fade' rejected"
        assert "timestamp" in data
        assert data["context"]["logger_name"] == "tweenline.test"
        assert data["context"]["module"] == "composite"
        assert data["context"]["function"] == "add_animation"
        assert data["context"]["line"] == 42

    def test_extra_fields(self):
        """Extra record attributes land in the context."""
        data = json.loads(
            StructuredJSONFormatter().format(_record(animator="intro", local_time=0.5, frame=3))
        )
        assert data["context"]["animator"] == "intro"
        assert data["context"]["local_time"] == 0.5
        assert data["context"]["frame"] == 3

    def test_exception_info(self):
        """Exceptions are captured in the context."""
        try:
            raise ValueError("bad duration")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        data = json.loads(StructuredJSONFormatter().format(record))
        assert data["context"]["error_type"] == "ValueError"
        assert data["context"]["error_message"] == "bad duration"
        assert "Traceback" in data["context"]["stack_trace"]


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_text_to_file(self, tmp_path, reset_logging):
        """Text logs go to the given file."""
        log_file = tmp_path / "out.log"
        configure_logging(
            level="info", format_string="%(levelname)s:%(message)s", filename=str(log_file)
        )
        logging.getLogger("tweenline.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert log_file.read_text().strip() == "INFO:hello"

    def test_structured(self, tmp_path, reset_logging):
        """Structured mode writes one JSON document per line."""
        log_file = tmp_path / "out.jsonl"
        configure_logging(level="DEBUG", filename=str(log_file), structured=True)
        logging.getLogger("tweenline.test").debug("tick")
        for handler in logging.getLogger().handlers:
            handler.flush()
        data = json.loads(log_file.read_text().splitlines()[0])
        assert data["message"] == "tick"
        assert data["level"] == "DEBUG"

    def test_frame_logger_held_back_by_default(self, reset_logging):
        """Frame tracing stays quiet even at DEBUG unless requested."""
        configure_logging(level="DEBUG")
        assert not get_frame_logger().isEnabledFor(logging.DEBUG)

    def test_trace_frames(self, tmp_path, reset_logging):
        """Frame records reach the handler with frame context attached."""
        log_file = tmp_path / "frames.jsonl"
        configure_logging(level="DEBUG", filename=str(log_file), structured=True, trace_frames=True)
        get_frame_logger().debug("frame=1", extra={"frame": 1, "local_time": 0.25})
        for handler in logging.getLogger().handlers:
            handler.flush()
        data = json.loads(log_file.read_text().splitlines()[0])
        assert data["context"]["logger_name"] == FRAME_LOGGER_NAME
        assert data["context"]["frame"] == 1
        assert data["context"]["local_time"] == 0.25


class TestLoggers:
    """Test suite for logger helpers."""

    def test_get_logger_plain(self):
        """Without context a plain logger is returned."""
        assert isinstance(get_logger("tweenline.test"), logging.Logger)

    def test_get_logger_with_context(self):
        """Context kwargs produce an adapter."""
        adapter = get_logger("tweenline.test", animator="intro")
        assert isinstance(adapter, logging.LoggerAdapter)
        assert adapter.extra == {"animator": "intro"}

    def test_frame_logger(self):
        """The frame logger has a fixed name."""
        assert get_frame_logger().name == FRAME_LOGGER_NAME

    def test_log_performance(self, caplog):
        """Decorated functions keep their result and log their duration."""

        @log_performance
        def work(x):
            return x * 2

        with caplog.at_level(logging.DEBUG, logger=FRAME_LOGGER_NAME):
            assert work(21) == 42
        assert "'work' took" in caplog.text
        assert work.__name__ == "work"
