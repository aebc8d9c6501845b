"""State shared by leaf and container animators."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable

from tweenline.core.animation.errors import TimelineError
from tweenline.core.animation.protocols import AnimatorContainer

logger = logging.getLogger(__name__)

Hook = Callable[[], None]

# Offset past the end of the timeline marking a stopped (never started) node
STOP_OFFSET = 0.1

# Tolerance for accumulated floating point tick error
TIME_EPSILON = 1e-9


def _noop() -> None:
    pass


class AnimatorBase:
    """Parent link, lifecycle hooks, loop bookkeeping and rejection policy.

    The parent is held through a weak reference: a child never keeps its
    container alive, and detaching only drops the reference.
    """

    def __init__(
        self,
        loop: bool = False,
        parent: AnimatorContainer | None = None,
        set_up: Hook | None = None,
        tear_down: Hook | None = None,
        *,
        strict: bool = False,
        max_loop_count: int | None = None,
    ) -> None:
        self._loop = loop
        self._on_going = False
        self._parent_ref: weakref.ReferenceType[AnimatorContainer] | None = None
        if parent is not None:
            self.set_parent(parent)
        self._set_up_fn: Hook = set_up or _noop
        self._tear_down_fn: Hook = tear_down or _noop
        self._strict = strict
        self._max_loop_count = max_loop_count
        self._loop_count = 0

    @property
    def parent(self) -> AnimatorContainer | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def set_parent(self, parent: AnimatorContainer) -> None:
        self._parent_ref = weakref.ref(parent)

    def detach_parent(self) -> None:
        self._parent_ref = None

    @property
    def loops(self) -> bool:
        return self._loop

    @loops.setter
    def loops(self, loop: bool) -> None:
        self._loop = loop

    @property
    def playing(self) -> bool:
        return self._on_going

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def loop_count(self) -> int:
        """Number of loop restarts since the last ``start_animation``."""
        return self._loop_count

    @property
    def max_loop_count(self) -> int | None:
        """Maximum number of loop restarts per run; None means unbounded."""
        return self._max_loop_count

    @max_loop_count.setter
    def max_loop_count(self, count: int | None) -> None:
        self._max_loop_count = count

    def _consume_loop(self) -> bool:
        """Book one loop restart if looping is enabled and the budget allows it."""
        if not self._loop:
            return False
        if self._max_loop_count is not None and self._loop_count >= self._max_loop_count:
            return False
        self._loop_count += 1
        return True

    def _notify_parent(self) -> None:
        parent = self.parent
        if parent is not None:
            parent.update_duration()

    def _reject(self, error: TimelineError) -> bool:
        """Refuse an operation: raise in strict mode, otherwise log and return False."""
        if self._strict:
            raise error
        logger.warning("%s rejected: %s", type(self).__name__, error)
        return False
