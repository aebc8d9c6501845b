"""Configuration models for tweenline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from tweenline.core.logging.models import LogLevel
from tweenline.core.utils.logging import DEFAULT_FORMAT


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = LogLevel.INFO
    format: str = DEFAULT_FORMAT
    structured: bool = Field(default=False, description="Emit JSON log lines instead of text")
    filename: str | None = Field(default=None, description="Log file path; stdout when unset")
    trace_frames: bool = Field(default=False, description="Emit one DEBUG record per ticker frame")


class EngineConfig(BaseModel):
    """Engine-wide defaults for hosts and the CLI."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = LoggingConfig()
    default_fps: float = Field(default=60.0, gt=0.0, description="Tick rate when none is given")
    strict: bool = Field(
        default=False,
        description="Build composites that raise on rejected operations instead of logging",
    )
