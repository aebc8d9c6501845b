"""Keyframe models.

This module defines the keyframe primitives shared by every animation:
- Keyframe: A single (percentage, value) anchor, immutable
- KeyframeTrack: A validated, sorted sequence of keyframes for one attribute
- KeyframesBuilder: Fluent helper for assembling a track incrementally

Tracks validate on construction. Interpolation over a malformed sequence has
no meaningful answer, so it is rejected up front instead of at playback time.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar, overload

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class InvalidKeyframesError(ValueError):
    """Raised when a keyframe sequence cannot be interpolated."""

    pass


class Keyframe(BaseModel, Generic[T]):
    """A value anchored at a point of an animation's normalized time.

    This model is immutable (frozen=True).

    Attributes:
        percentage: Normalized time in range [0, 1].
        value: Attribute value at that time.

    Example:
        >>> kf = Keyframe(percentage=0.5, value=3.0)
        >>> kf.percentage
        0.5
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    percentage: float = Field(..., ge=0.0, le=1.0, description="Normalized time [0,1]")
    value: T

    def transposed(self) -> Keyframe[T]:
        """Return the keyframe mirrored in time (percentage -> 1 - percentage)."""
        return Keyframe(percentage=1.0 - self.percentage, value=self.value)


def _coerce(frame: Keyframe[T] | tuple[float, T]) -> Keyframe[T]:
    if isinstance(frame, Keyframe):
        return frame
    percentage, value = frame
    return Keyframe(percentage=percentage, value=value)


def validate_keyframes(frames: list[Keyframe[Any]]) -> None:
    """Check that frames form an interpolatable track.

    Args:
        frames: Candidate keyframes.

    Raises:
        InvalidKeyframesError: If fewer than 2 frames are given or the
            percentages are not strictly increasing.
    """
    if len(frames) < 2:
        raise InvalidKeyframesError(f"a track needs at least 2 keyframes, got {len(frames)}")
    for prev, curr in zip(frames, frames[1:]):
        if curr.percentage == prev.percentage:
            raise InvalidKeyframesError(f"duplicate keyframe percentage {curr.percentage}")
        if curr.percentage < prev.percentage:
            raise InvalidKeyframesError(
                "keyframes must be sorted by percentage: "
                f"{prev.percentage} is followed by {curr.percentage}"
            )


class KeyframeTrack(Generic[T]):
    """Immutable, validated sequence of keyframes for one attribute.

    Accepts ``Keyframe`` instances or ``(percentage, value)`` tuples.
    The reversed view (used for reverse playback) is built on first
    request and cached.

    Example:
        >>> track = KeyframeTrack([(0.0, 0.0), (1.0, 10.0)])
        >>> track.percentages
        (0.0, 1.0)
        >>> track.reversed_view()[0].value
        10.0
    """

    __slots__ = ("_frames", "_percentages", "_reversed")

    def __init__(self, keyframes: Iterable[Keyframe[T] | tuple[float, T]]) -> None:
        frames = [_coerce(frame) for frame in keyframes]
        validate_keyframes(frames)
        self._frames: tuple[Keyframe[T], ...] = tuple(frames)
        self._percentages: tuple[float, ...] = tuple(frame.percentage for frame in frames)
        self._reversed: KeyframeTrack[T] | None = None

    @classmethod
    def of(cls, keyframes: KeyframeTrack[T] | Iterable[Keyframe[T] | tuple[float, T]]) -> KeyframeTrack[T]:
        """Return keyframes unchanged if already a track, else build one."""
        if isinstance(keyframes, KeyframeTrack):
            return keyframes
        return cls(keyframes)

    @property
    def percentages(self) -> tuple[float, ...]:
        return self._percentages

    @property
    def first(self) -> Keyframe[T]:
        return self._frames[0]

    @property
    def last(self) -> Keyframe[T]:
        return self._frames[-1]

    def reversed_view(self) -> KeyframeTrack[T]:
        """Track mirrored in time: percentages become ``1 - p``, order reversed.

        The view's own reversed view is this track.
        """
        if self._reversed is None:
            view = KeyframeTrack(frame.transposed() for frame in reversed(self._frames))
            view._reversed = self
            self._reversed = view
        return self._reversed

    def __len__(self) -> int:
        return len(self._frames)

    @overload
    def __getitem__(self, index: int) -> Keyframe[T]: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Keyframe[T], ...]: ...

    def __getitem__(self, index):
        return self._frames[index]

    def __iter__(self) -> Iterator[Keyframe[T]]:
        return iter(self._frames)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyframeTrack):
            return NotImplemented
        return self._frames == other._frames

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"KeyframeTrack({list(self._frames)!r})"


class KeyframesBuilder(Generic[T]):
    """Fluent builder for keyframe tracks.

    ``from_value`` and ``to_value`` set the 0.0 and 1.0 anchors, replacing
    an existing anchor at that percentage. ``insert_at`` keeps frames sorted
    and replaces a frame at the same percentage.

    Example:
        >>> track = KeyframesBuilder().from_value(0).insert_at(0.5, 3).to_value(10).build()
        >>> [kf.value for kf in track]
        [0, 3, 10]
    """

    def __init__(self) -> None:
        self._frames: list[Keyframe[T]] = []

    @property
    def keyframes(self) -> list[Keyframe[T]]:
        return list(self._frames)

    def from_value(self, value: T) -> KeyframesBuilder[T]:
        return self.insert_at(0.0, value)

    def to_value(self, value: T) -> KeyframesBuilder[T]:
        return self.insert_at(1.0, value)

    def insert_at(self, percentage: float, value: T) -> KeyframesBuilder[T]:
        frame = Keyframe(percentage=percentage, value=value)
        index = bisect.bisect_left([kf.percentage for kf in self._frames], percentage)
        if index < len(self._frames) and self._frames[index].percentage == percentage:
            self._frames[index] = frame
        else:
            self._frames.insert(index, frame)
        return self

    def clear(self) -> KeyframesBuilder[T]:
        self._frames = []
        return self

    def build(self) -> KeyframeTrack[T]:
        """Validate and freeze the collected frames.

        Raises:
            InvalidKeyframesError: If fewer than 2 frames were collected.
        """
        return KeyframeTrack(self._frames)
