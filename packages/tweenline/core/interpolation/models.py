"""Value types for animated attributes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """2D point.

    Example:
        >>> Point(x=3, y=4)
        Point(x=3.0, y=4.0)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    x: float
    y: float


class RGB(BaseModel):
    """RGB colour with unbounded float channels.

    Channels are not clamped so that extrapolated colours stay on the
    segment's line; clamp when rendering.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    r: float
    g: float
    b: float
