"""Protocol definitions for timeline nodes.

``Animator`` is implemented by both the ``Animation`` leaf and the
``CompositeAnimation`` container, so containers can nest either one.
``AnimatorContainer`` is the narrow interface a child uses to reach its
parent.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AnimatorContainer(Protocol):
    """Parent-side interface seen by child animators."""

    def update_duration(self) -> None:
        """Recompute the aggregate duration after a child changed, then propagate upward."""
        ...

    def check_cyclic_children(self) -> bool:
        """True if the subtree below this container reaches any node twice."""
        ...

    def contains_animation(self, animator: Animator) -> bool:
        """True if animator is anywhere in the tree this container belongs to."""
        ...


@runtime_checkable
class Animator(Protocol):
    """A node of an animation timeline driven by host ticks.

    Attributes:
        duration: Length of the node's timeline in seconds.
        loops: Whether playback restarts at 0 on completion.
        playing: Whether the node currently advances on ``animate``.
    """

    @property
    def duration(self) -> float: ...

    @duration.setter
    def duration(self, duration: float) -> None: ...

    @property
    def loops(self) -> bool: ...

    @loops.setter
    def loops(self, loop: bool) -> None: ...

    @property
    def playing(self) -> bool: ...

    def start_animation(self) -> None:
        """Reset local time to 0, start playing, fire the set-up hook."""
        ...

    def stop_animation(self) -> None:
        """Stop playing, move past the end, fire the tear-down hook."""
        ...

    def pause_animation(self) -> None: ...

    def resume_animation(self) -> None: ...

    def animate(self, delta_time: float) -> None:
        """Advance local time by delta_time seconds and apply values."""
        ...

    def set_up(self) -> None: ...

    def tear_down(self) -> None: ...

    def set_parent(self, parent: AnimatorContainer) -> None: ...

    def detach_parent(self) -> None: ...

    def toggle_reverse(self, reverse: bool) -> None: ...
