"""Timeline documents and the builder that turns them into animator trees."""

from tweenline.core.timeline.builder import (
    BindingNotFoundError,
    ChildPlacementError,
    build_timeline,
    collect_targets,
)
from tweenline.core.timeline.models import (
    ChildSpec,
    CompositeSpec,
    KeyframeSpec,
    TimelineDocument,
    TrackSpec,
)

__all__ = [
    "BindingNotFoundError",
    "ChildPlacementError",
    "ChildSpec",
    "CompositeSpec",
    "KeyframeSpec",
    "TimelineDocument",
    "TrackSpec",
    "build_timeline",
    "collect_targets",
]
