"""Math utilities for common operations."""

from __future__ import annotations

from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def segment_ratio(ratio: float, start: float, end: float) -> float:
    """Position of ratio relative to the segment [start, end].

    0.0 maps to start and 1.0 to end; values outside the segment fall
    outside [0, 1] so callers can extrapolate. A degenerate segment maps
    everything to 0.0.

    Example:
        >>> segment_ratio(0.75, 0.5, 1.0)
        0.5
    """
    span = end - start
    if span == 0:
        return 0.0
    return (ratio - start) / span


def lerp(a: Number, b: Number, t: float) -> float:
    """Linear interpolation between a and b.

    t is not clamped, so values outside [0, 1] extrapolate along the
    same slope.

    Args:
        a: Start value
        b: End value
        t: Interpolation factor

    Returns:
        Interpolated value
    """
    return float(a) + (float(b) - float(a)) * t


def lerp_array(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Element-wise linear interpolation between two arrays.

    Args:
        a: Start array
        b: End array (same shape as a)
        t: Interpolation factor (not clamped)

    Returns:
        New float array
    """
    start = np.asarray(a, dtype=float)
    end = np.asarray(b, dtype=float)
    result: np.ndarray = start + (end - start) * t
    return result
