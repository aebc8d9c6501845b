"""Read engine config and timeline documents from JSON or YAML files."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from tweenline.core.config.models import EngineConfig
from tweenline.core.timeline.models import TimelineDocument
from tweenline.core.utils.logging import configure_logging

logger = logging.getLogger(__name__)

# Picked up from the working directory when no config path is given
_DEFAULT_ENGINE_CONFIG_PATH = Path("tweenline.yaml")

_FORMATS_BY_SUFFIX = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

_PARSERS: dict[str, tuple[Callable[[str], Any], type[Exception], str]] = {
    "json": (json.loads, json.JSONDecodeError, "JSON"),
    "yaml": (yaml.safe_load, yaml.YAMLError, "YAML"),
}


def detect_format(file_path: Path | str) -> str:
    """Return ``"json"`` or ``"yaml"`` for a file name, by extension.

    Raises:
        ValueError: For any other extension.

    Example:
        >>> detect_format("timeline.json")
        'json'
        >>> detect_format("timeline.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    try:
        return _FORMATS_BY_SUFFIX[suffix]
    except KeyError:
        raise ValueError(f"Unsupported config format: {suffix!r}") from None


def load_config(path: str | Path) -> dict[str, Any]:
    """Parse a JSON or YAML file into a plain dict.

    An empty YAML file yields ``{}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: On an unknown extension, a parse error, or a top level
            that is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    parse, parse_error, label = _PARSERS[detect_format(path)]
    try:
        content = parse(path.read_text(encoding="utf-8"))
    except parse_error as e:
        raise ValueError(f"Invalid {label} in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(content).__name__}")
    return content


def load_engine_config(path: str | Path | None = None) -> EngineConfig:
    """Load and validate engine configuration.

    Args:
        path: Path to config file. Defaults to ``tweenline.yaml`` in the
              working directory; defaults are used when it does not exist.

    Returns:
        Validated EngineConfig

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValidationError: If config is invalid
    """
    if path is None:
        if not _DEFAULT_ENGINE_CONFIG_PATH.exists():
            return EngineConfig()
        path = _DEFAULT_ENGINE_CONFIG_PATH

    config = EngineConfig.model_validate(load_config(path))
    logger.debug("Loaded engine config from %s", path)
    return config


def load_timeline_document(path: str | Path) -> TimelineDocument:
    """Load and validate a timeline document.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the document is invalid

    Example:
        >>> doc = load_timeline_document("intro.yaml")
        >>> doc.root.kind
        'composite'
    """
    return TimelineDocument.model_validate(load_config(path))


def configure_logging_from_config(config: EngineConfig | None = None) -> None:
    """Configure Python logging from engine config.

    Args:
        config: EngineConfig instance (loads default if None)
    """
    if config is None:
        config = load_engine_config()

    configure_logging(
        level=config.logging.level.value,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
        trace_frames=config.logging.trace_frames,
    )
