"""Default interpolators for common attribute types.

Every interpolator maps ``ratio`` onto the segment between two keyframes
and blends their values. Continuous types extrapolate past the segment
along the same slope; strings snap to an endpoint.
"""

from __future__ import annotations

import math

import numpy as np

from tweenline.core.interpolation.models import RGB, Point
from tweenline.core.keyframes.models import Keyframe
from tweenline.core.utils.math import lerp, lerp_array, segment_ratio


def _position(ratio: float, start: Keyframe, end: Keyframe) -> float:
    return segment_ratio(ratio, start.percentage, end.percentage)


class NumberInterpolator:
    """Linear interpolation for plain numbers.

    Example:
        >>> NumberInterpolator().lerp(1.2, Keyframe(percentage=0, value=0), Keyframe(percentage=1, value=10))
        12.0
    """

    def lerp(self, ratio: float, start: Keyframe[float], end: Keyframe[float]) -> float:
        return lerp(start.value, end.value, _position(ratio, start, end))


class IntegerInterpolator:
    """Linear interpolation floored to an integer (frame indices, sprite columns)."""

    def lerp(self, ratio: float, start: Keyframe[int], end: Keyframe[int]) -> int:
        return math.floor(lerp(start.value, end.value, _position(ratio, start, end)))


class PointInterpolator:
    """Component-wise linear interpolation for 2D points."""

    def lerp(self, ratio: float, start: Keyframe[Point], end: Keyframe[Point]) -> Point:
        t = _position(ratio, start, end)
        return Point(
            x=lerp(start.value.x, end.value.x, t),
            y=lerp(start.value.y, end.value.y, t),
        )


class RGBInterpolator:
    """Channel-wise linear interpolation for RGB colours."""

    def lerp(self, ratio: float, start: Keyframe[RGB], end: Keyframe[RGB]) -> RGB:
        t = _position(ratio, start, end)
        return RGB(
            r=lerp(start.value.r, end.value.r, t),
            g=lerp(start.value.g, end.value.g, t),
            b=lerp(start.value.b, end.value.b, t),
        )


class StringInterpolator:
    """Discrete interpolation: start value before the segment midpoint, end value after.

    Positions before the segment resolve to the start value and positions
    past it to the end value.
    """

    def lerp(self, ratio: float, start: Keyframe[str], end: Keyframe[str]) -> str:
        if _position(ratio, start, end) < 0.5:
            return start.value
        return end.value


class VectorInterpolator:
    """Element-wise linear interpolation for numpy arrays of equal shape."""

    def lerp(self, ratio: float, start: Keyframe[np.ndarray], end: Keyframe[np.ndarray]) -> np.ndarray:
        return lerp_array(start.value, end.value, _position(ratio, start, end))
