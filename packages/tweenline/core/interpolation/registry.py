"""Named interpolators and keyframe value parsing.

Timeline documents refer to interpolators by kind. Each kind pairs an
interpolator with a parser that turns raw (JSON/YAML) values into the
attribute type the interpolator expects.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

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


class InterpolatorNotFoundError(KeyError):
    """Raised when an interpolator kind is not registered."""

    pass


class InterpolatorKind(str, Enum):
    """Attribute types with a built-in interpolator."""

    NUMBER = "number"
    INTEGER = "integer"
    POINT = "point"
    RGB = "rgb"
    STRING = "string"
    VECTOR = "vector"


def _parse_point(raw: Any) -> Point:
    if isinstance(raw, Point):
        return raw
    if isinstance(raw, (list, tuple)):
        x, y = raw
        return Point(x=x, y=y)
    return Point.model_validate(raw)


def _parse_rgb(raw: Any) -> RGB:
    if isinstance(raw, RGB):
        return raw
    if isinstance(raw, (list, tuple)):
        r, g, b = raw
        return RGB(r=r, g=g, b=b)
    return RGB.model_validate(raw)


def _parse_vector(raw: Any) -> np.ndarray:
    return np.asarray(raw, dtype=float)


@dataclass(frozen=True)
class InterpolatorEntry:
    """Interpolator plus the parser for its keyframe values."""

    interpolator: AttributeInterpolator[Any]
    parse: Callable[[Any], Any]


_REGISTRY: dict[InterpolatorKind, InterpolatorEntry] = {
    InterpolatorKind.NUMBER: InterpolatorEntry(NumberInterpolator(), float),
    InterpolatorKind.INTEGER: InterpolatorEntry(IntegerInterpolator(), int),
    InterpolatorKind.POINT: InterpolatorEntry(PointInterpolator(), _parse_point),
    InterpolatorKind.RGB: InterpolatorEntry(RGBInterpolator(), _parse_rgb),
    InterpolatorKind.STRING: InterpolatorEntry(StringInterpolator(), str),
    InterpolatorKind.VECTOR: InterpolatorEntry(VectorInterpolator(), _parse_vector),
}


def get_interpolator_entry(kind: InterpolatorKind | str) -> InterpolatorEntry:
    """Look up the interpolator registered for ``kind``.

    Raises:
        InterpolatorNotFoundError: If ``kind`` is unknown.
    """
    try:
        return _REGISTRY[InterpolatorKind(kind)]
    except ValueError as e:
        raise InterpolatorNotFoundError(f"Unknown interpolator kind: {kind}") from e


def get_interpolator(kind: InterpolatorKind | str) -> AttributeInterpolator[Any]:
    return get_interpolator_entry(kind).interpolator


def parse_value(kind: InterpolatorKind | str, raw: Any) -> Any:
    """Convert a raw document value into the attribute type for ``kind``."""
    return get_interpolator_entry(kind).parse(raw)
