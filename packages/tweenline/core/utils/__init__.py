"""Shared utilities for tweenline."""

from tweenline.core.utils.math import clamp, lerp, lerp_array, segment_ratio

__all__ = [
    "clamp",
    "lerp",
    "lerp_array",
    "segment_ratio",
]
