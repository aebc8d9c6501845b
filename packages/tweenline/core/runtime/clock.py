"""Real-time delta source for host tick loops."""

from __future__ import annotations

import time


class FrameClock:
    """Measures seconds elapsed between successive ticks.

    The first tick after construction or ``reset`` returns 0.0.

    Example:
        >>> clock = FrameClock()
        >>> clock.tick(now=10.0)
        0.0
        >>> clock.tick(now=10.25)
        0.25
    """

    def __init__(self) -> None:
        self._last: float | None = None
        self._elapsed = 0.0

    def tick(self, now: float | None = None) -> float:
        """Return seconds since the previous tick.

        Args:
            now: Current time in seconds; defaults to ``time.perf_counter()``.
        """
        if now is None:
            now = time.perf_counter()
        delta = 0.0 if self._last is None else max(now - self._last, 0.0)
        self._last = now
        self._elapsed += delta
        return delta

    def reset(self) -> None:
        self._last = None
        self._elapsed = 0.0

    @property
    def elapsed(self) -> float:
        """Total seconds measured since construction or the last reset."""
        return self._elapsed
