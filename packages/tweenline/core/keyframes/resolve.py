"""Keyframe value resolution.

Finds the value of a keyframe track at a normalized time using binary search,
and extrapolates from the boundary segments when the (eased) time leaves the
[0, 1] range, e.g. for overshooting easing curves.
"""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from tweenline.core.interpolation.protocols import AttributeInterpolator
    from tweenline.core.keyframes.models import KeyframeTrack

T = TypeVar("T")


def resolve_value(
    target: float,
    track: KeyframeTrack[T],
    interpolator: AttributeInterpolator[T],
) -> T:
    """Resolve the attribute value at a normalized time.

    - ``target > 1`` extrapolates along the last two keyframes.
    - ``target < 0`` extrapolates along the first two keyframes.
    - Otherwise an exact keyframe hit returns that keyframe's value and any
      other target interpolates between the bracketing pair. Targets before
      the first or after the last keyframe use the boundary segment.

    Reverse playback passes ``track.reversed_view()``; the same rules then
    read the transposed (``1 - percentage``) keyframes.

    Args:
        target: Eased normalized time.
        track: Validated keyframe track (at least 2 keyframes).
        interpolator: Interpolation strategy for the attribute type.

    Returns:
        Value at ``target``.

    Example:
        >>> track = KeyframeTrack([(0.0, 0.0), (1.0, 10.0)])
        >>> resolve_value(1.2, track, NumberInterpolator())
        12.0
    """
    count = len(track)
    if target > 1.0:
        return interpolator.lerp(target, track[count - 2], track[count - 1])
    if target < 0.0:
        return interpolator.lerp(target, track[0], track[1])

    percentages = track.percentages
    index = bisect.bisect_left(percentages, target)
    if index < count and percentages[index] == target:
        return track[index].value
    if index == 0:
        return interpolator.lerp(target, track[0], track[1])
    if index == count:
        return interpolator.lerp(target, track[count - 2], track[count - 1])
    return interpolator.lerp(target, track[index - 1], track[index])


def advance_cursor(track: KeyframeTrack[T], cursor: int, target: float) -> int:
    """Move cursor past every keyframe at or before target.

    The cursor only moves forward; a restart resets it to 0.

    Returns:
        Index of the first keyframe strictly after ``target``.
    """
    percentages = track.percentages
    while cursor < len(percentages) and percentages[cursor] <= target:
        cursor += 1
    return cursor


def cursor_hit(track: KeyframeTrack[T], cursor: int, target: float) -> bool:
    """True when the keyframe under the cursor sits exactly at target."""
    return cursor < len(track) and track.percentages[cursor] == target
