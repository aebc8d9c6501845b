"""Keyframe models and value resolution."""

from tweenline.core.keyframes.models import (
    InvalidKeyframesError,
    Keyframe,
    KeyframesBuilder,
    KeyframeTrack,
    validate_keyframes,
)
from tweenline.core.keyframes.resolve import advance_cursor, cursor_hit, resolve_value

__all__ = [
    "InvalidKeyframesError",
    "Keyframe",
    "KeyframeTrack",
    "KeyframesBuilder",
    "advance_cursor",
    "cursor_hit",
    "resolve_value",
    "validate_keyframes",
]
