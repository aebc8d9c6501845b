"""Tests for building animator trees from timeline documents."""

from __future__ import annotations

import pytest

from tweenline.core.animation import Animation, CompositeAnimation, InvalidTimelineMutationError
from tweenline.core.config import load_timeline_document
from tweenline.core.easing import EaseNotFoundError
from tweenline.core.interpolation import RGB, Point
from tweenline.core.timeline import (
    BindingNotFoundError,
    ChildPlacementError,
    CompositeSpec,
    TimelineDocument,
    TrackSpec,
    build_timeline,
    collect_targets,
)


def _node(end=1):
    return {"kind": "track", "target": "x", "keyframes": [[0, 0], [1, end]]}


@pytest.fixture
def intro(fixtures_dir) -> TimelineDocument:
    return load_timeline_document(fixtures_dir / "intro.yaml")


@pytest.fixture
def bindings(make_recorder):
    return {name: make_recorder() for name in ("opacity", "position", "color")}


class TestCollectTargets:
    """Test suite for collect_targets."""

    def test_declaration_order(self, intro):
        """Targets are listed once each, in declaration order."""
        assert collect_targets(intro) == ["opacity", "position", "color"]


class TestBuildTimeline:
    """Test suite for build_timeline."""

    def test_structure(self, intro, bindings):
        """Children are placed after/amidst their references."""
        root = build_timeline(intro, bindings)
        assert isinstance(root, CompositeAnimation)
        assert root.names == ["fade", "slide", "tint"]
        assert root.get_start_time("slide") == pytest.approx(1.0)
        assert root.get_start_time("tint") == pytest.approx(1.5)
        assert isinstance(root.get_animation("tint"), CompositeAnimation)
        assert root.duration == pytest.approx(3.0)

    def test_values_are_parsed(self, intro, bindings):
        """Keyframe values are converted for their interpolator."""
        root = build_timeline(intro, bindings)
        slide = root.get_animation("slide")
        assert isinstance(slide, Animation)
        assert slide.keyframes.last.value == Point(x=100, y=50)
        color = root.get_animation("tint").get_animation("color")
        assert color.keyframes.first.value == RGB(r=255, g=0, b=0)

    def test_plays(self, intro, bindings):
        """The built tree drives the bound callbacks."""
        root = build_timeline(intro, bindings)
        root.start_animation()
        root.animate(0.5)
        assert bindings["opacity"].last == pytest.approx(0.5)
        root.animate(1.5)
        assert bindings["opacity"].last == 1.0
        assert bindings["color"].last.r == pytest.approx(127.5)
        root.animate(1.0)
        assert bindings["position"].last == Point(x=100, y=50)
        assert not root.playing

    def test_missing_binding(self, intro, bindings):
        """Every target needs a callback."""
        del bindings["color"]
        with pytest.raises(BindingNotFoundError, match="color"):
            build_timeline(intro, bindings)

    def test_unknown_ease(self, recorder):
        """Unknown easing names fail the build."""
        spec = TrackSpec(target="x", ease="wobble", keyframes=[[0.0, 0.0], [1.0, 1.0]])
        with pytest.raises(EaseNotFoundError):
            build_timeline(spec, {"x": recorder})

    def test_padding_loop_and_reverse(self, recorder):
        """Composite options carry over to the built node."""
        spec = CompositeSpec.model_validate(
            {
                "loop": True,
                "reverse": True,
                "delay": 0.5,
                "drag": 0.25,
                "max_loop_count": 3,
                "children": [
                    {"name": "a", "node": _node(10)},
                ],
            }
        )
        root = build_timeline(spec, {"x": recorder})
        assert root.loops
        assert root.reverse
        assert root.get_animation("a").reverse
        assert root.max_loop_count == 3
        assert root.duration == pytest.approx(1.75)

    def test_before_placement(self, recorder):
        """before placement shifts earlier siblings when needed."""
        spec = CompositeSpec.model_validate(
            {
                "children": [
                    {"name": "a", "node": _node()},
                    {
                        "name": "b",
                        "before": "a",
                        "offset": 0.5,
                        "node": _node(),
                    },
                ]
            }
        )
        root = build_timeline(spec, {"x": recorder})
        assert root.get_start_time("a") == pytest.approx(0.5)
        assert root.get_start_time("b") == 0.0

    def test_rejected_placement_fails_the_build(self, recorder):
        """A child the composite refuses is an error, not a silent drop."""
        spec = CompositeSpec.model_validate(
            {
                "children": [
                    {"name": "a", "node": _node()},
                    {"name": "b", "after": "a", "offset": -5.0, "node": _node()},
                ]
            }
        )
        with pytest.raises(ChildPlacementError, match="'b'"):
            build_timeline(spec, {"x": recorder})

    def test_rejected_placement_strict(self, recorder):
        """Strict builds surface the composite's own error."""
        spec = CompositeSpec.model_validate(
            {
                "children": [
                    {"name": "a", "node": _node()},
                    {"name": "b", "after": "a", "offset": -5.0, "node": _node()},
                ]
            }
        )
        with pytest.raises(InvalidTimelineMutationError, match="start_time"):
            build_timeline(spec, {"x": recorder}, strict=True)

    def test_strict(self, intro, bindings):
        """strict builds composites that raise on rejected edits."""
        root = build_timeline(intro, bindings, strict=True)
        assert root.strict
        root.start_animation()
        root.animate(0.1)
        with pytest.raises(InvalidTimelineMutationError):
            root.remove_animation("fade")
