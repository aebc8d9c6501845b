"""Protocol definition for attribute interpolation strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from tweenline.core.keyframes.models import Keyframe

T = TypeVar("T")


@runtime_checkable
class AttributeInterpolator(Protocol[T]):
    """Interpolation strategy for one attribute type.

    Implementations are pure: the same inputs always give the same value
    and nothing outside the return value changes.

    Continuous types extrapolate linearly when ``ratio`` falls outside
    ``[start.percentage, end.percentage]``. Discrete types (strings) snap
    to the nearest endpoint instead.

    Example:
        >>> class Halfway:
        ...     def lerp(self, ratio, start, end):
        ...         return (start.value + end.value) / 2
    """

    def lerp(self, ratio: float, start: Keyframe[T], end: Keyframe[T]) -> T:
        """Value of the attribute at ``ratio``.

        Args:
            ratio: Normalized time, in the same space as the keyframe percentages.
            start: Keyframe at the beginning of the segment.
            end: Keyframe at the end of the segment.

        Returns:
            Interpolated (or extrapolated) value.
        """
        ...
