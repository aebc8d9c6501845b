"""Pydantic models behind tweenline's JSON log lines."""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """Level names accepted in config files and emitted in JSON logs."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> LogLevel:
        # Custom levels (e.g. "Level 5") are reported as INFO
        try:
            return cls(record.levelname)
        except ValueError:
            return cls.INFO


class LogContext(BaseModel):
    """Where a record came from, plus any bound timeline fields.

    ``animator`` and ``local_time`` are the fields tweenline itself binds
    through ``get_logger(..., animator=...)``. Other ``extra=`` keys are kept
    as-is.
    """

    model_config = ConfigDict(extra="allow")

    logger_name: str | None = None
    module: str | None = None
    function: str | None = None
    line: int | None = None
    thread_name: str | None = None

    animator: str | None = None
    local_time: float | None = None
    frame: int | None = None

    error_type: str | None = None
    error_message: str | None = None
    stack_trace: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, record: logging.LogRecord, extra: dict[str, Any]) -> LogContext:
        fields: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread_name": record.threadName,
            **extra,
        }
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            fields["error_type"] = exc_type.__name__
            fields["error_message"] = str(exc)
            fields["stack_trace"] = record.exc_text or "".join(
                traceback.format_exception(exc_type, exc, tb)
            )
        return cls.model_validate(fields)


class LogEntry(BaseModel):
    """One JSON log line."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel
    message: str
    context: LogContext
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_json(self) -> str:
        data = self.model_dump(exclude_none=True)
        data["timestamp"] = self.timestamp.isoformat()
        return json.dumps(data, default=str)
