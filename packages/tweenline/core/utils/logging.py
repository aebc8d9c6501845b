"""Logging setup for tweenline.

Text or JSON output to stdout or a file, context binding through
``LoggerAdapter``, and a separate frame logger for per-tick tracing.
"""

from __future__ import annotations

import functools
import logging
import sys
import time
from datetime import UTC, datetime
from typing import Any

from tweenline.core.logging.models import LogContext, LogEntry, LogLevel

FRAME_LOGGER_NAME = "TWEENLINE_FRAMES"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Standard record attributes that never end up in the structured context
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "asctime",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)


class StructuredJSONFormatter(logging.Formatter):
    """Render each record as one ``LogEntry`` JSON line.

    Non-standard record attributes (adapter context, ``extra=`` kwargs) are
    merged into ``context`` next to the source location.
    """

    def format(self, record: logging.LogRecord) -> str:
        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        entry = LogEntry(
            level=LogLevel.from_record(record),
            message=record.getMessage(),
            timestamp=datetime.fromtimestamp(record.created, tz=UTC),
            context=LogContext.from_record(record, extra),
        )
        return entry.to_json()


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
    trace_frames: bool = False,
) -> None:
    """Configure the root logger for tweenline hosts.

    Safe to call repeatedly; every call replaces the previous handlers.

    Args:
        level: Root level name, case-insensitive (DEBUG ... CRITICAL).
        format_string: Text format; ignored when ``structured`` is set.
        filename: Write to this file instead of stdout.
        structured: Emit one JSON ``LogEntry`` per line.
        trace_frames: Let per-frame tracing through at DEBUG. Frame logs
            are held at WARNING otherwise, since a 60 fps ticker would
            drown everything else.

    Examples:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(level="DEBUG", structured=True, filename="frames.jsonl", trace_frames=True)
    """
    handler: logging.Handler = (
        logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stdout)
    )
    handler.setFormatter(
        StructuredJSONFormatter()
        if structured
        else logging.Formatter(format_string or DEFAULT_FORMAT)
    )

    logging.basicConfig(level=getattr(logging, level.upper()), handlers=[handler], force=True)
    get_frame_logger().setLevel(logging.DEBUG if trace_frames else logging.WARNING)


def get_frame_logger() -> logging.Logger:
    """Logger for per-frame tracing (one record per tick)."""
    return logging.getLogger(FRAME_LOGGER_NAME)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Return the logger for ``name``, bound to ``context`` when any is given.

    Bound context (e.g. ``animator="intro"``) is attached to every record and
    ends up in the ``context`` object of structured logs.
    """
    base = logging.getLogger(name)
    if context:
        return logging.LoggerAdapter(base, context)
    return base


def log_performance(func):
    """Log the wall time of each call to the frame logger at DEBUG."""

    @functools.wraps(func)
    def timed(*args, **kwargs):
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            get_frame_logger().debug(
                "'%s' took %.4fs", func.__name__, time.perf_counter() - started
            )

    return timed
