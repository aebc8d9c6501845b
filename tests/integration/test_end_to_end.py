"""End-to-end playback of composed keyframe tracks."""

from __future__ import annotations

import pytest

from tweenline.core.animation import CompositeAnimation
from tweenline.core.config import load_timeline_document
from tweenline.core.runtime import Ticker
from tweenline.core.timeline import build_timeline


class TestPointAndNumber:
    """A point track and a number track composed at offset 0."""

    def test_midpoint_and_final_values(self, point_number_timeline):
        """At 0.5s both read their midpoint keyframes, at 1.0s their final ones."""
        timeline, points, numbers = point_number_timeline
        timeline.start_animation()

        for _ in range(5):
            timeline.animate(0.1)
        assert numbers.last == pytest.approx(3.0)
        assert points.last.x == pytest.approx(3.0)
        assert points.last.y == pytest.approx(3.0)

        for _ in range(5):
            timeline.animate(0.1)
        assert numbers.last == 10.0
        assert (points.last.x, points.last.y) == (10.0, 10.0)
        assert not timeline.playing

    def test_values_hold_after_completion(self, point_number_timeline):
        """Extra ticks after completion change nothing."""
        timeline, points, numbers = point_number_timeline
        timeline.start_animation()
        for _ in range(12):
            timeline.animate(0.1)
        assert len(numbers.values) == 10
        assert numbers.last == 10.0

    def test_restart(self, point_number_timeline):
        """Starting again replays from the first keyframe."""
        timeline, points, numbers = point_number_timeline
        timeline.start_animation()
        timeline.animate(1.0)
        timeline.start_animation()
        timeline.animate(0.25)
        assert numbers.last == pytest.approx(1.5)


class TestNestedTimelines:
    """Composites nested inside composites."""

    def test_nested_sequence_with_padding(self, make_animation, make_recorder):
        """Offsets, delay and drag add up through the tree."""
        first_values = make_recorder()
        second_values = make_recorder()
        inner = CompositeAnimation()
        inner.add_animation("first", make_animation(apply_value=first_values))
        inner.add_animation_after("second", make_animation(apply_value=second_values), "first")
        inner.delay(0.5)

        outer = CompositeAnimation()
        outer.add_animation("inner", inner, start_time=1.0)
        outer.drag(0.5)
        assert outer.duration == pytest.approx(4.0)

        ticker = Ticker(outer)
        ticker.run(seconds=1.75, fps=4, until_complete=False)
        assert first_values.last == pytest.approx(2.5)
        assert second_values.values == []

        ticker.run(seconds=1.75, fps=4, start=False)
        assert second_values.last == 10.0
        assert outer.playing

        ticker.run(seconds=1.0, fps=4, start=False)
        assert not outer.playing


class TestDocumentPlayback:
    """Timeline documents played through the ticker."""

    def test_intro_document(self, fixtures_dir, make_recorder):
        """Every bound target ends on its final keyframe."""
        document = load_timeline_document(fixtures_dir / "intro.yaml")
        bindings = {name: make_recorder() for name in ("opacity", "position", "color")}
        root = build_timeline(document, bindings)
        frames = Ticker(root).run(seconds=10.0, fps=30)
        assert frames == 90
        assert bindings["opacity"].last == 1.0
        assert bindings["position"].last.x == 100.0
        assert bindings["color"].last.b == 255.0
