"""Keyframe animations and composite timelines."""

from tweenline.core.animation.animation import Animation
from tweenline.core.animation.base import STOP_OFFSET, TIME_EPSILON, AnimatorBase
from tweenline.core.animation.composite import CompositeAnimation, TimelineEntry
from tweenline.core.animation.errors import (
    CyclicContainmentError,
    InvalidDurationError,
    InvalidTimelineMutationError,
    TimelineError,
)
from tweenline.core.animation.protocols import Animator, AnimatorContainer

__all__ = [
    "Animation",
    "Animator",
    "AnimatorBase",
    "AnimatorContainer",
    "CompositeAnimation",
    "CyclicContainmentError",
    "InvalidDurationError",
    "InvalidTimelineMutationError",
    "STOP_OFFSET",
    "TIME_EPSILON",
    "TimelineError",
    "TimelineEntry",
]
