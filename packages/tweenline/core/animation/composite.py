"""Composite animation timelines.

A ``CompositeAnimation`` schedules named child animators (leaves or other
composites) at start offsets on its own local clock. Its core duration is
the latest child end time; ``delay`` and ``drag`` pad the core span before
and after.

Structural edits (adding, removing, re-timing children, padding, rescaling)
are only accepted while the timeline is idle: not playing and not paused
mid-way. Rejected edits leave the timeline unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

from tweenline.core.animation.base import STOP_OFFSET, TIME_EPSILON, AnimatorBase, Hook
from tweenline.core.animation.errors import (
    CyclicContainmentError,
    InvalidDurationError,
    InvalidTimelineMutationError,
)
from tweenline.core.animation.protocols import Animator, AnimatorContainer

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[], None]


@dataclass
class TimelineEntry:
    """A child animator and its start offset within the parent's core span."""

    animator: Animator
    start_time: float = 0.0

    @property
    def end_time(self) -> float:
        return self.start_time + self.animator.duration


class CompositeAnimation(AnimatorBase):
    """Named collection of animators sharing one local clock.

    Children are ticked in insertion order. A child only receives time while
    its window ``[start_time, start_time + duration]`` (shifted by the delay)
    overlaps the current tick, and it receives exactly the overlapping slice.
    When a window closes the child's completion callbacks fire and a looping
    child is restarted.

    Args:
        animations: Initial children, by name. Values are ``TimelineEntry``
            or bare animators (start offset 0).
        loop: Restart at 0 after the padded duration elapses.
        parent: Container notified when the duration changes.
        set_up: Hook fired before the children's set-up.
        tear_down: Hook fired before the children's tear-down.
        strict: Raise ``TimelineError`` subclasses instead of silently
            rejecting invalid operations.
        max_loop_count: Cap on loop restarts per run (None = unbounded).

    Example:
        >>> timeline = CompositeAnimation()
        >>> timeline.add_animation("fade", fade, start_time=0.0)
        True
        >>> timeline.add_animation_after("slide", slide, "fade")
        True
        >>> timeline.start_animation()
        >>> timeline.animate(1 / 60)
    """

    def __init__(
        self,
        animations: Mapping[str, TimelineEntry | Animator] | None = None,
        loop: bool = False,
        parent: AnimatorContainer | None = None,
        set_up: Hook | None = None,
        tear_down: Hook | None = None,
        *,
        strict: bool = False,
        max_loop_count: int | None = None,
    ) -> None:
        super().__init__(
            loop=loop,
            parent=parent,
            set_up=set_up,
            tear_down=tear_down,
            strict=strict,
            max_loop_count=max_loop_count,
        )
        self._animations: dict[str, TimelineEntry] = {}
        self._callbacks: dict[str, list[CompletionCallback]] = {}
        self._finished: set[str] = set()
        self._core_duration = 0.0
        self._delay_time = 0.0
        self._drag_time = 0.0
        self._reverse = False
        self._updates_suspended = False
        self._local_time = STOP_OFFSET

        for name, child in (animations or {}).items():
            if isinstance(child, TimelineEntry):
                self.add_animation(name, child.animator, child.start_time)
            else:
                self.add_animation(name, child)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_animation(self) -> None:
        self._local_time = 0.0
        self._loop_count = 0
        self._finished.clear()
        self._on_going = True
        logger.debug("Composite started (%d children, duration=%.3fs)", len(self), self.duration)
        self._set_up_fn()
        for entry in self._animations.values():
            entry.animator.start_animation()

    def stop_animation(self) -> None:
        self._on_going = False
        self._local_time = self.duration + STOP_OFFSET
        logger.debug("Composite stopped")
        self._tear_down_fn()
        for entry in self._animations.values():
            entry.animator.stop_animation()

    def pause_animation(self) -> None:
        self._on_going = False
        for entry in self._animations.values():
            entry.animator.pause_animation()

    def resume_animation(self) -> None:
        if not 0.0 <= self._local_time < self.duration:
            return
        self._on_going = True
        for entry in self._animations.values():
            entry.animator.resume_animation()

    def set_up(self) -> None:
        self._set_up_fn()
        for entry in self._animations.values():
            entry.animator.set_up()

    def tear_down(self) -> None:
        self._tear_down_fn()
        for entry in self._animations.values():
            entry.animator.tear_down()

    def toggle_reverse(self, reverse: bool) -> None:
        """Play the whole subtree backwards.

        Children are reversed and their windows are mirrored inside the
        core span, so the last child to finish forwards starts first.

        ``reverse`` is an absolute direction pushed to every descendant, not
        a flip: a nested composite that is already reversed stays reversed
        under a reversed parent.
        """
        if self._reverse == reverse:
            return
        self._reverse = reverse
        for entry in self._animations.values():
            entry.animator.toggle_reverse(reverse)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def animate(self, delta_time: float) -> None:
        total = self.duration
        if not self._on_going or self._local_time < 0 or self._local_time > total:
            return
        if not self._animations:
            return

        previous = self._local_time
        self._local_time += delta_time
        if abs(total - self._local_time) <= TIME_EPSILON:
            self._local_time = total

        self._animate_children(previous)
        self._check_terminal_and_loop()

    def _animate_children(self, prev: float) -> None:
        now = self._local_time
        if now < self._delay_time:
            return

        for name, entry in list(self._animations.items()):
            if name in self._finished:
                continue
            start, end = self._window(entry)
            if now < start - TIME_EPSILON:
                continue
            entry.animator.animate(max(min(now, end) - max(prev, start), 0.0))
            if now >= end - TIME_EPSILON:
                self._wrap_up(name, entry)

    def _window(self, entry: TimelineEntry) -> tuple[float, float]:
        start = entry.start_time
        end = entry.end_time
        if self._reverse:
            start, end = self._core_duration - end, self._core_duration - start
        return start + self._delay_time, end + self._delay_time

    def _wrap_up(self, name: str, entry: TimelineEntry) -> None:
        self._finished.add(name)
        for callback in self._callbacks.get(name, []):
            callback()
        if entry.animator.loops:
            logger.debug("Restarting looping child %r", name)
            entry.animator.start_animation()

    def _check_terminal_and_loop(self) -> None:
        if self._local_time < self.duration - TIME_EPSILON:
            return
        self._on_going = False
        if self._consume_loop():
            self._local_time = 0.0
            self._finished.clear()
            self._on_going = True
            logger.debug("Composite looped (%d)", self._loop_count)
            for entry in self._animations.values():
                entry.animator.start_animation()
            return

        # Looping children restarted by _wrap_up get no more time from here
        for name, entry in self._animations.items():
            if name in self._finished and entry.animator.playing:
                entry.animator.pause_animation()

    # ------------------------------------------------------------------
    # Duration
    # ------------------------------------------------------------------

    @property
    def duration(self) -> float:
        """Padded duration: core span plus delay and drag."""
        return self._core_duration + self._delay_time + self._drag_time

    @duration.setter
    def duration(self, duration: float) -> None:
        """Stretch the whole subtree proportionally to the new duration.

        Delay, drag, every child's start offset and every child's duration
        are scaled by ``duration / old_duration``. The whole subtree must be
        idle; otherwise nothing is changed.
        """
        if self._subtree_locked():
            self._reject(InvalidTimelineMutationError("cannot rescale a running timeline"))
            return
        old_total = self.duration
        if duration <= 0 or old_total <= 0:
            self._reject(
                InvalidDurationError(
                    f"cannot rescale duration {old_total} to {duration}; both must be > 0"
                )
            )
            return

        scale = duration / old_total
        self._updates_suspended = True
        try:
            self._delay_time *= scale
            self._drag_time *= scale
            for entry in self._animations.values():
                entry.start_time *= scale
                if entry.animator.duration > 0:
                    entry.animator.duration = entry.animator.duration * scale
        finally:
            self._updates_suspended = False
        self._calculate_duration()
        self._sync_idle_time(old_total)
        self._notify_parent()

    @property
    def core_duration(self) -> float:
        """Latest child end time, without delay and drag."""
        return self._core_duration

    @property
    def delay_time(self) -> float:
        return self._delay_time

    @property
    def drag_time(self) -> float:
        return self._drag_time

    def delay(self, delay_time: float) -> bool:
        """Pad the timeline with ``delay_time`` seconds before the first child."""
        return self._set_padding(delay_time=delay_time)

    def drag(self, drag_time: float) -> bool:
        """Pad the timeline with ``drag_time`` seconds after the last child."""
        return self._set_padding(drag_time=drag_time)

    def remove_delay(self) -> bool:
        return self._set_padding(delay_time=0.0)

    def remove_drag(self) -> bool:
        return self._set_padding(drag_time=0.0)

    def _set_padding(self, delay_time: float | None = None, drag_time: float | None = None) -> bool:
        if self._is_locked():
            return self._reject(InvalidTimelineMutationError("cannot change padding while running"))
        for value in (delay_time, drag_time):
            if value is not None and value < 0:
                return self._reject(InvalidDurationError(f"padding must be >= 0, got {value}"))
        old_total = self.duration
        if delay_time is not None:
            self._delay_time = float(delay_time)
        if drag_time is not None:
            self._drag_time = float(drag_time)
        self._sync_idle_time(old_total)
        self._notify_parent()
        return True

    def update_duration(self) -> None:
        if self._updates_suspended:
            return
        # The insert guards keep the tree acyclic; this only trips on trees
        # assembled by hand.
        if self.check_cyclic_children():
            logger.warning("Cycle detected below composite; duration update skipped")
            return
        old_total = self.duration
        self._calculate_duration()
        self._sync_idle_time(old_total)
        self._notify_parent()

    def _calculate_duration(self) -> None:
        self._core_duration = max(
            (entry.end_time for entry in self._animations.values()),
            default=0.0,
        )

    def _sync_idle_time(self, old_total: float) -> None:
        # A stopped or completed timeline stays the same distance past its end
        if not self._on_going and self._local_time >= old_total:
            self._local_time = self.duration + (self._local_time - old_total)

    # ------------------------------------------------------------------
    # Containment
    # ------------------------------------------------------------------

    def check_cyclic_children(self) -> bool:
        pending: list[Animator] = [self]
        visited: set[int] = set()
        while pending:
            current = pending.pop()
            if id(current) in visited:
                return True
            visited.add(id(current))
            if isinstance(current, CompositeAnimation):
                pending.extend(entry.animator for entry in current._animations.values())
        return False

    def contains_animation(self, animator: Animator) -> bool:
        parent = self.parent
        if parent is not None:
            return parent.contains_animation(animator)

        pending: list[Animator] = [self]
        visited: set[int] = set()
        while pending:
            current = pending.pop()
            if current is animator:
                return True
            if id(current) in visited:
                continue
            visited.add(id(current))
            if isinstance(current, CompositeAnimation):
                pending.extend(entry.animator for entry in current._animations.values())
        return False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _is_locked(self) -> bool:
        """True while playing or paused mid-timeline."""
        return self._on_going or 0.0 < self._local_time < self.duration

    def _subtree_locked(self) -> bool:
        """True if this composite or any composite below it is locked."""
        pending: list[CompositeAnimation] = [self]
        visited: set[int] = set()
        while pending:
            current = pending.pop()
            if id(current) in visited:
                continue
            visited.add(id(current))
            if current._is_locked():
                return True
            pending.extend(
                entry.animator
                for entry in current._animations.values()
                if isinstance(entry.animator, CompositeAnimation)
            )
        return False

    def _check_insert(self, name: str, animator: Animator) -> bool:
        if self._is_locked():
            return self._reject(
                InvalidTimelineMutationError(f"cannot add {name!r} while the timeline is running")
            )
        if name in self._animations:
            return self._reject(InvalidTimelineMutationError(f"child {name!r} already exists"))
        if animator is self:
            return self._reject(CyclicContainmentError(f"{name!r} is this composite itself"))
        if getattr(animator, "parent", None) is not None:
            return self._reject(
                CyclicContainmentError(f"{name!r} is already attached to a container")
            )
        if self.contains_animation(animator):
            return self._reject(
                CyclicContainmentError(f"{name!r} is already part of this timeline tree")
            )
        return True

    def _insert(
        self,
        name: str,
        animator: Animator,
        start_time: float,
        on_complete: CompletionCallback | None,
    ) -> None:
        self._animations[name] = TimelineEntry(animator=animator, start_time=float(start_time))
        self._callbacks[name] = [on_complete] if on_complete is not None else []
        animator.set_parent(self)
        if self._reverse:
            animator.toggle_reverse(True)
        logger.debug("Added child %r at %.3fs", name, start_time)
        self.update_duration()

    def add_animation(
        self,
        name: str,
        animator: Animator,
        start_time: float = 0.0,
        on_complete: CompletionCallback | None = None,
    ) -> bool:
        """Schedule ``animator`` at ``start_time`` under ``name``.

        Returns:
            True if the child was added.

        Raises:
            InvalidTimelineMutationError: In strict mode, when running, on a
                duplicate name or a negative start time.
            CyclicContainmentError: In strict mode, when the child is this
                composite, an ancestor, already in the tree, or owned by
                another container.
        """
        if not self._check_insert(name, animator):
            return False
        if start_time < 0:
            return self._reject(
                InvalidTimelineMutationError(f"start_time must be >= 0, got {start_time}")
            )
        self._insert(name, animator, start_time, on_complete)
        return True

    def add_animation_after(
        self,
        name: str,
        animator: Animator,
        after_name: str,
        delay: float = 0.0,
        on_complete: CompletionCallback | None = None,
    ) -> bool:
        """Schedule ``animator`` to start ``delay`` seconds after ``after_name`` ends."""
        reference = self._animations.get(after_name)
        if reference is None:
            return self._reject(InvalidTimelineMutationError(f"unknown child {after_name!r}"))
        return self.add_animation(name, animator, reference.end_time + delay, on_complete)

    def add_animation_amidst(
        self,
        name: str,
        animator: Animator,
        amidst_name: str,
        delay: float = 0.0,
        on_complete: CompletionCallback | None = None,
    ) -> bool:
        """Schedule ``animator`` to start ``delay`` seconds after ``amidst_name`` starts."""
        reference = self._animations.get(amidst_name)
        if reference is None:
            return self._reject(InvalidTimelineMutationError(f"unknown child {amidst_name!r}"))
        return self.add_animation(name, animator, reference.start_time + delay, on_complete)

    def add_animation_before(
        self,
        name: str,
        animator: Animator,
        before_name: str,
        ahead_time: float = 0.0,
        on_complete: CompletionCallback | None = None,
    ) -> bool:
        """Schedule ``animator`` to start ``ahead_time`` seconds before ``before_name`` starts.

        If that lands before 0, every existing child is pushed later by the
        deficit and the new child starts at 0.
        """
        reference = self._animations.get(before_name)
        if reference is None:
            return self._reject(InvalidTimelineMutationError(f"unknown child {before_name!r}"))
        if not self._check_insert(name, animator):
            return False
        start_time = reference.start_time - ahead_time
        if start_time < 0:
            shift = -start_time
            for entry in self._animations.values():
                entry.start_time += shift
            start_time = 0.0
        self._insert(name, animator, start_time, on_complete)
        return True

    def remove_animation(self, name: str) -> bool:
        """Remove child ``name`` and detach it from this composite."""
        if self._is_locked():
            return self._reject(
                InvalidTimelineMutationError(f"cannot remove {name!r} while the timeline is running")
            )
        entry = self._animations.pop(name, None)
        if entry is None:
            return self._reject(InvalidTimelineMutationError(f"unknown child {name!r}"))
        self._callbacks.pop(name, None)
        self._finished.discard(name)
        entry.animator.detach_parent()
        logger.debug("Removed child %r", name)
        self.update_duration()
        return True

    def set_start_time(self, name: str, start_time: float) -> bool:
        """Move child ``name`` to a new start offset."""
        if self._is_locked():
            return self._reject(
                InvalidTimelineMutationError(f"cannot move {name!r} while the timeline is running")
            )
        entry = self._animations.get(name)
        if entry is None:
            return self._reject(InvalidTimelineMutationError(f"unknown child {name!r}"))
        if start_time < 0:
            return self._reject(
                InvalidTimelineMutationError(f"start_time must be >= 0, got {start_time}")
            )
        entry.start_time = float(start_time)
        self.update_duration()
        return True

    def add_completion_callback(self, name: str, callback: CompletionCallback) -> bool:
        """Register another callback fired when child ``name`` finishes its window."""
        if name not in self._animations:
            return self._reject(InvalidTimelineMutationError(f"unknown child {name!r}"))
        self._callbacks[name].append(callback)
        return True

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def local_time(self) -> float:
        return self._local_time

    @property
    def reverse(self) -> bool:
        return self._reverse

    @property
    def names(self) -> list[str]:
        return list(self._animations)

    def get_animation(self, name: str) -> Animator | None:
        entry = self._animations.get(name)
        return entry.animator if entry is not None else None

    def get_start_time(self, name: str) -> float | None:
        entry = self._animations.get(name)
        return entry.start_time if entry is not None else None

    def entries(self) -> Iterator[tuple[str, TimelineEntry]]:
        return iter(list(self._animations.items()))

    def __len__(self) -> int:
        return len(self._animations)

    def __contains__(self, name: object) -> bool:
        return name in self._animations

    def __repr__(self) -> str:
        return (
            f"CompositeAnimation(children={self.names}, duration={self.duration}, "
            f"loop={self._loop}, playing={self._on_going})"
        )
