"""Configuration management for tweenline."""

from tweenline.core.config.loader import (
    configure_logging_from_config,
    detect_format,
    load_config,
    load_engine_config,
    load_timeline_document,
)
from tweenline.core.config.models import EngineConfig, LoggingConfig

__all__ = [
    # Loaders
    "configure_logging_from_config",
    "detect_format",
    "load_config",
    "load_engine_config",
    "load_timeline_document",
    # Models
    "EngineConfig",
    "LoggingConfig",
]
