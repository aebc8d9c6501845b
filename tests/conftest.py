"""Shared pytest fixtures for tweenline tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from tweenline.core.animation import Animation, CompositeAnimation
from tweenline.core.interpolation import NumberInterpolator, Point, PointInterpolator
from tweenline.core.keyframes import KeyframeTrack
from tweenline.core.utils.logging import FRAME_LOGGER_NAME

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Get test fixtures directory."""
    return Path(__file__).parent / "fixtures"


# ============================================================================
# Value Recording
# ============================================================================


class Recorder:
    """Callback target that keeps every value it receives."""

    def __init__(self) -> None:
        self.values: list[Any] = []

    def __call__(self, value: Any) -> None:
        self.values.append(value)

    @property
    def last(self) -> Any:
        return self.values[-1] if self.values else None


@pytest.fixture
def recorder() -> Recorder:
    """Fresh value recorder."""
    return Recorder()


@pytest.fixture
def make_recorder():
    """Factory for additional recorders."""
    return Recorder


# ============================================================================
# Keyframe Fixtures
# ============================================================================


@pytest.fixture
def number_track() -> KeyframeTrack[float]:
    """Number track 0 -> 3 -> 10."""
    return KeyframeTrack([(0.0, 0.0), (0.5, 3.0), (1.0, 10.0)])


@pytest.fixture
def point_track() -> KeyframeTrack[Point]:
    """Point track (0,0) -> (3,3) -> (10,10)."""
    return KeyframeTrack(
        [
            (0.0, Point(x=0, y=0)),
            (0.5, Point(x=3, y=3)),
            (1.0, Point(x=10, y=10)),
        ]
    )


# ============================================================================
# Animator Factories
# ============================================================================


@pytest.fixture
def make_animation():
    """Factory for linear number animations 0 -> 10."""

    def _make(
        duration: float = 1.0,
        apply_value=None,
        keyframes=None,
        **kwargs: Any,
    ) -> Animation[float]:
        return Animation(
            keyframes or [(0.0, 0.0), (1.0, 10.0)],
            apply_value or (lambda value: None),
            NumberInterpolator(),
            duration=duration,
            **kwargs,
        )

    return _make


@pytest.fixture
def point_number_timeline(number_track, point_track, make_recorder):
    """Composite running a point track and a number track side by side."""
    points = make_recorder()
    numbers = make_recorder()
    timeline = CompositeAnimation()
    timeline.add_animation("position", Animation(point_track, points, PointInterpolator()))
    timeline.add_animation("scale", Animation(number_track, numbers, NumberInterpolator()))
    return timeline, points, numbers


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def reset_logging():
    """Restore root and frame logger state after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    frame_level = logging.getLogger(FRAME_LOGGER_NAME).level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger(FRAME_LOGGER_NAME).setLevel(frame_level)
