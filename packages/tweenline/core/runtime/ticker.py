"""Fixed-step driver for a root animator."""

from __future__ import annotations

import logging
from collections.abc import Callable

from tweenline.core.animation.protocols import Animator
from tweenline.core.utils.logging import get_frame_logger, log_performance

logger = logging.getLogger(__name__)

FrameCallback = Callable[[int, float], None]


class Ticker:
    """Drives ``root.animate`` with a fixed time step.

    Args:
        root: Animator at the top of the tree.

    Example:
        >>> ticker = Ticker(timeline)
        >>> ticker.run(seconds=2.0, fps=60)
        120
    """

    def __init__(self, root: Animator) -> None:
        self._root = root
        self._frame = 0
        self._time = 0.0
        self._frame_logger = get_frame_logger()

    @property
    def root(self) -> Animator:
        return self._root

    @property
    def frame(self) -> int:
        """Number of steps taken since the last ``start``."""
        return self._frame

    @property
    def time(self) -> float:
        """Seconds fed to the root since the last ``start``."""
        return self._time

    def start(self) -> None:
        self._frame = 0
        self._time = 0.0
        self._root.start_animation()

    def step(self, delta_time: float) -> None:
        """Advance the root by one frame."""
        self._root.animate(delta_time)
        self._frame += 1
        self._time += delta_time
        self._frame_logger.debug(
            "frame=%d t=%.4f playing=%s",
            self._frame,
            self._time,
            self._root.playing,
            extra={"frame": self._frame, "local_time": self._time},
        )

    @log_performance
    def run(
        self,
        seconds: float,
        fps: float,
        on_frame: FrameCallback | None = None,
        *,
        start: bool = True,
        until_complete: bool = True,
    ) -> int:
        """Step the root at ``fps`` for ``seconds``.

        Args:
            seconds: Total time to simulate.
            fps: Steps per second.
            on_frame: Called after each step with the frame number and time.
            start: Start the root before the first step.
            until_complete: Stop early once the root is no longer playing.

        Returns:
            Number of frames stepped.

        Raises:
            ValueError: If fps is not positive or seconds is negative.
        """
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        if seconds < 0:
            raise ValueError(f"seconds must be >= 0, got {seconds}")

        if start:
            self.start()
        delta_time = 1.0 / fps
        frames = round(seconds * fps)
        logger.debug("Running %d frames at %.1f fps", frames, fps)

        stepped = 0
        for _ in range(frames):
            if until_complete and not self._root.playing:
                break
            self.step(delta_time)
            stepped += 1
            if on_frame is not None:
                on_frame(self._frame, self._time)
        return stepped
