"""Attribute interpolation strategies."""

from tweenline.core.interpolation.helpers import (
    IntegerInterpolator,
    NumberInterpolator,
    PointInterpolator,
    RGBInterpolator,
    StringInterpolator,
    VectorInterpolator,
)
from tweenline.core.interpolation.models import RGB, Point
from tweenline.core.interpolation.protocols import AttributeInterpolator
from tweenline.core.interpolation.registry import (
    InterpolatorKind,
    InterpolatorNotFoundError,
    get_interpolator,
    parse_value,
)

__all__ = [
    "RGB",
    "AttributeInterpolator",
    "IntegerInterpolator",
    "InterpolatorKind",
    "InterpolatorNotFoundError",
    "NumberInterpolator",
    "Point",
    "PointInterpolator",
    "RGBInterpolator",
    "StringInterpolator",
    "VectorInterpolator",
    "get_interpolator",
    "parse_value",
]
