"""Single-attribute keyframe animation.

An ``Animation`` owns one keyframe track. Each ``animate(delta_time)`` call
advances its local clock, eases the normalized time, resolves the track's
value and hands it to the host's ``apply_value`` callback.

Lifecycle:
    stopped (local_time past the end)
      -> start_animation() -> running (0 <= local_time <= duration)
      -> local_time reaches duration -> loop ? running at 0 : complete
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from tweenline.core.animation.base import STOP_OFFSET, TIME_EPSILON, AnimatorBase, Hook
from tweenline.core.animation.errors import InvalidDurationError
from tweenline.core.animation.protocols import AnimatorContainer
from tweenline.core.easing.functions import EaseFn, linear
from tweenline.core.interpolation.protocols import AttributeInterpolator
from tweenline.core.keyframes.models import Keyframe, KeyframeTrack
from tweenline.core.keyframes.resolve import advance_cursor, cursor_hit, resolve_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Animation(AnimatorBase, Generic[T]):
    """Keyframe track for one attribute with easing, looping and reversal.

    Args:
        keyframes: Track or iterable of keyframes / ``(percentage, value)``
            tuples. Validated on construction.
        apply_value: Callback receiving each resolved value.
        interpolator: Strategy blending two keyframes of type T.
        duration: Length in seconds.
        loop: Restart at 0 on completion.
        parent: Container notified when the duration changes.
        set_up: Hook fired by ``start_animation``.
        tear_down: Hook fired by ``stop_animation``.
        ease_fn: Maps normalized time to eased percentage.
        reverse: Play the track backwards.
        strict: Raise instead of silently rejecting bad assignments.
        max_loop_count: Cap on loop restarts per run (None = unbounded).

    Raises:
        InvalidKeyframesError: If the keyframes are malformed.
        InvalidDurationError: If duration is negative.

    Example:
        >>> values = []
        >>> anim = Animation([(0.0, 0.0), (1.0, 10.0)], values.append, NumberInterpolator())
        >>> anim.start_animation()
        >>> anim.animate(0.5)
        >>> values
        [5.0]
    """

    def __init__(
        self,
        keyframes: KeyframeTrack[T] | Iterable[Keyframe[T] | tuple[float, T]],
        apply_value: Callable[[T], None],
        interpolator: AttributeInterpolator[T],
        duration: float = 1.0,
        loop: bool = False,
        parent: AnimatorContainer | None = None,
        set_up: Hook | None = None,
        tear_down: Hook | None = None,
        ease_fn: EaseFn = linear,
        *,
        reverse: bool = False,
        strict: bool = False,
        max_loop_count: int | None = None,
    ) -> None:
        if duration < 0:
            raise InvalidDurationError(f"duration must be >= 0, got {duration}")
        super().__init__(
            loop=loop,
            parent=parent,
            set_up=set_up,
            tear_down=tear_down,
            strict=strict,
            max_loop_count=max_loop_count,
        )
        self._track: KeyframeTrack[T] = KeyframeTrack.of(keyframes)
        self._apply_value = apply_value
        self._interpolator = interpolator
        self._ease_fn = ease_fn
        self._duration = float(duration)
        self._local_time = self._duration + STOP_OFFSET
        self._cursor = 0
        self._reverse = reverse

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_animation(self) -> None:
        self._local_time = 0.0
        self._cursor = 0
        self._loop_count = 0
        self._on_going = True
        logger.debug("Animation started (duration=%.3fs, reverse=%s)", self._duration, self._reverse)
        self.set_up()

    def stop_animation(self) -> None:
        self._on_going = False
        self._local_time = self._duration + STOP_OFFSET
        logger.debug("Animation stopped")
        self.tear_down()

    def pause_animation(self) -> None:
        self._on_going = False

    def resume_animation(self) -> None:
        # Only a run interrupted mid-timeline can resume
        if 0.0 <= self._local_time < self._duration:
            self._on_going = True

    def set_up(self) -> None:
        self._set_up_fn()

    def tear_down(self) -> None:
        self._tear_down_fn()

    def toggle_reverse(self, reverse: bool) -> None:
        if self._reverse == reverse:
            return
        self._reverse = reverse
        if self._on_going:
            self._cursor = advance_cursor(self._active_track(), 0, self._eased_percentage())
        else:
            self._cursor = 0

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def animate(self, delta_time: float) -> None:
        if not self._on_going or self._local_time > self._duration:
            return

        self._local_time += delta_time
        if abs(self._duration - self._local_time) <= TIME_EPSILON:
            self._local_time = self._duration

        target = self._eased_percentage()
        track = self._active_track()
        if cursor_hit(track, self._cursor, target):
            value = track[self._cursor].value
        else:
            value = resolve_value(target, track, self._interpolator)
        self._cursor = advance_cursor(track, self._cursor, target)
        self._apply_value(value)

        if self._local_time >= self._duration:
            self._on_going = False
            if self._consume_loop():
                self._local_time = 0.0
                self._cursor = 0
                self._on_going = True
                logger.debug("Animation looped (%d)", self._loop_count)

    def _eased_percentage(self) -> float:
        raw = self._local_time / self._duration if self._duration > 0 else 1.0
        if raw > 1.0:
            return self._ease_fn(1.0)
        return self._ease_fn(raw)

    def _active_track(self) -> KeyframeTrack[T]:
        return self._track.reversed_view() if self._reverse else self._track

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def duration(self) -> float:
        return self._duration

    @duration.setter
    def duration(self, duration: float) -> None:
        if duration < 0:
            self._reject(InvalidDurationError(f"duration must be >= 0, got {duration}"))
            return
        if self._on_going:
            if self._local_time > duration:
                self._local_time = duration
        elif self._local_time >= self._duration:
            # Stopped or complete: stay the same distance past the end
            self._local_time = duration + (self._local_time - self._duration)
        self._duration = float(duration)
        self._notify_parent()

    @property
    def local_time(self) -> float:
        return self._local_time

    @property
    def reverse(self) -> bool:
        return self._reverse

    @property
    def current_keyframe_index(self) -> int:
        """Index of the first keyframe not yet passed, in the active playback direction."""
        return self._cursor

    @property
    def keyframes(self) -> KeyframeTrack[T]:
        return self._track

    @keyframes.setter
    def keyframes(self, keyframes: KeyframeTrack[T] | Iterable[Keyframe[T] | tuple[float, T]]) -> None:
        self._track = KeyframeTrack.of(keyframes)
        self._cursor = 0

    @property
    def ease_fn(self) -> EaseFn:
        return self._ease_fn

    @ease_fn.setter
    def ease_fn(self, ease_fn: EaseFn) -> None:
        self._ease_fn = ease_fn

    @property
    def interpolator(self) -> AttributeInterpolator[T]:
        return self._interpolator

    def __repr__(self) -> str:
        return (
            f"Animation(duration={self._duration}, keyframes={len(self._track)}, "
            f"loop={self._loop}, playing={self._on_going})"
        )
