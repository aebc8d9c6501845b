"""Build animator trees from timeline documents."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from tweenline.core.animation.animation import Animation
from tweenline.core.animation.composite import CompositeAnimation
from tweenline.core.animation.protocols import Animator
from tweenline.core.easing.functions import get_ease_fn
from tweenline.core.interpolation.registry import get_interpolator_entry
from tweenline.core.keyframes.models import Keyframe
from tweenline.core.timeline.models import ChildSpec, CompositeSpec, TimelineDocument, TrackSpec

logger = logging.getLogger(__name__)

Binding = Callable[[Any], None]


class BindingNotFoundError(KeyError):
    """Raised when a track targets a name with no bound callback."""

    pass


class ChildPlacementError(ValueError):
    """Raised when a composite refuses to place a child, e.g. at a negative start time."""

    pass


def collect_targets(spec: TimelineDocument | TrackSpec | CompositeSpec) -> list[str]:
    """List every track target in the document, in declaration order, without duplicates."""
    targets: list[str] = []
    for track in _iter_tracks(spec.root if isinstance(spec, TimelineDocument) else spec):
        if track.target not in targets:
            targets.append(track.target)
    return targets


def _iter_tracks(node: TrackSpec | CompositeSpec) -> Iterator[TrackSpec]:
    if isinstance(node, TrackSpec):
        yield node
        return
    for child in node.children:
        yield from _iter_tracks(child.node)


def build_timeline(
    spec: TimelineDocument | TrackSpec | CompositeSpec,
    bindings: Mapping[str, Binding],
    *,
    strict: bool = False,
) -> Animator:
    """Turn a timeline document into an animator tree.

    Args:
        spec: Document, or a single node of one.
        bindings: Callback per track target name.
        strict: Build composites that raise on rejected operations.

    Returns:
        The root animator (not started).

    Raises:
        BindingNotFoundError: If a track targets an unbound name.
        ChildPlacementError: If a composite rejects a child placement
            (only without ``strict``; strict composites raise their own error).
        EaseNotFoundError: If a track names an unknown easing.
    """
    node = spec.root if isinstance(spec, TimelineDocument) else spec
    missing = [target for target in collect_targets(node) if target not in bindings]
    if missing:
        raise BindingNotFoundError(f"No binding for targets: {', '.join(missing)}")

    root = _build_node(node, bindings, strict)
    logger.debug("Built timeline (duration=%.3fs)", root.duration)
    return root


def _build_node(
    node: TrackSpec | CompositeSpec, bindings: Mapping[str, Binding], strict: bool
) -> Animator:
    if isinstance(node, TrackSpec):
        return _build_track(node, bindings[node.target])
    return _build_composite(node, bindings, strict)


def _build_track(spec: TrackSpec, apply_value: Binding) -> Animation[Any]:
    entry = get_interpolator_entry(spec.interpolator)
    keyframes = [
        Keyframe(percentage=frame.percentage, value=entry.parse(frame.value))
        for frame in spec.keyframes
    ]
    return Animation(
        keyframes,
        apply_value,
        entry.interpolator,
        duration=spec.duration,
        loop=spec.loop,
        ease_fn=get_ease_fn(spec.ease),
        reverse=spec.reverse,
        max_loop_count=spec.max_loop_count,
    )


def _build_composite(
    spec: CompositeSpec, bindings: Mapping[str, Binding], strict: bool
) -> CompositeAnimation:
    composite = CompositeAnimation(
        loop=spec.loop, strict=strict, max_loop_count=spec.max_loop_count
    )
    for child in spec.children:
        _place_child(composite, child, _build_node(child.node, bindings, strict))

    if spec.delay:
        composite.delay(spec.delay)
    if spec.drag:
        composite.drag(spec.drag)
    if spec.reverse:
        composite.toggle_reverse(True)
    return composite


def _place_child(composite: CompositeAnimation, child: ChildSpec, animator: Animator) -> None:
    if child.after is not None:
        placed = composite.add_animation_after(child.name, animator, child.after, child.offset)
    elif child.before is not None:
        placed = composite.add_animation_before(child.name, animator, child.before, child.offset)
    elif child.amidst is not None:
        placed = composite.add_animation_amidst(child.name, animator, child.amidst, child.offset)
    else:
        placed = composite.add_animation(child.name, animator, child.start_time)
    if not placed:
        where = (
            f"start_time={child.start_time}"
            if child.reference is None
            else f"reference={child.reference!r}, offset={child.offset}"
        )
        raise ChildPlacementError(f"Could not place child {child.name!r} ({where})")
