"""Command-line interface for tweenline.

Plays timelines in the terminal by stepping them at a fixed frame rate and
printing sampled target values.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tweenline.core.animation import Animation, CompositeAnimation, TimelineError
from tweenline.core.animation.protocols import Animator
from tweenline.core.config.loader import (
    configure_logging_from_config,
    load_engine_config,
    load_timeline_document,
)
from tweenline.core.config.models import EngineConfig
from tweenline.core.interpolation import NumberInterpolator, Point, PointInterpolator
from tweenline.core.interpolation.models import RGB
from tweenline.core.runtime import Ticker
from tweenline.core.timeline import build_timeline, collect_targets

console = Console()
logger = logging.getLogger(__name__)


def format_value(value: Any) -> str:
    """Render a target value for a table cell."""
    if isinstance(value, Point):
        return f"({value.x:.3f}, {value.y:.3f})"
    if isinstance(value, RGB):
        return f"rgb({value.r:.1f}, {value.g:.1f}, {value.b:.1f})"
    if isinstance(value, np.ndarray):
        return np.array2string(value, precision=3)
    if isinstance(value, float):
        return f"{value:.3f}"
    if value is None:
        return "-"
    return str(value)


def build_demo_timeline() -> tuple[CompositeAnimation, dict[str, Any]]:
    """Build the point + number demo: both tracks pass through 3 at the midpoint and end at 10."""
    state: dict[str, Any] = {"position": None, "scale": None}

    def set_position(value: Point) -> None:
        state["position"] = value

    def set_scale(value: float) -> None:
        state["scale"] = value

    position = Animation(
        [
            (0.0, Point(x=0, y=0)),
            (0.5, Point(x=3, y=3)),
            (1.0, Point(x=10, y=10)),
        ],
        set_position,
        PointInterpolator(),
        duration=1.0,
    )
    scale = Animation([(0.0, 0.0), (0.5, 3.0), (1.0, 10.0)], set_scale, NumberInterpolator())

    timeline = CompositeAnimation()
    timeline.add_animation("position", position)
    timeline.add_animation("scale", scale)
    return timeline, state


def play(
    root: Animator,
    state: dict[str, Any],
    seconds: float,
    fps: float,
    every: int = 1,
    title: str = "timeline",
) -> Table:
    """Step ``root`` and collect every ``every``-th frame into a table."""
    table = Table(title=title)
    table.add_column("frame", justify="right")
    table.add_column("time", justify="right")
    for target in state:
        table.add_column(target)

    def sample(frame: int, time: float) -> None:
        if frame % every == 0 or not root.playing:
            table.add_row(
                str(frame), f"{time:.3f}", *(format_value(state[target]) for target in state)
            )

    frames = Ticker(root).run(seconds, fps, on_frame=sample)
    logger.debug("Played %d frames", frames)
    return table


def _load_config(path: str | None) -> EngineConfig:
    config = load_engine_config(Path(path) if path else None)
    configure_logging_from_config(config)
    return config


def run_demo(args: argparse.Namespace) -> int:
    """Play the built-in demo timeline."""
    config = _load_config(args.config)
    fps = args.fps or config.default_fps

    timeline, state = build_demo_timeline()
    console.print(f"[bold]Demo timeline[/bold] ({timeline.duration:.2f}s at {fps:g} fps)")
    console.print(play(timeline, state, args.seconds, fps, args.every, title="demo"))
    return 0


def run_play(args: argparse.Namespace) -> int:
    """Play a timeline document."""
    path = Path(args.file)
    if not path.exists():
        console.print(f"[red]ERROR: Timeline file not found: {path}[/red]")
        return 1

    try:
        config = _load_config(args.config)
        document = load_timeline_document(path)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load {path}: {e}[/red]")
        return 1

    state: dict[str, Any] = dict.fromkeys(collect_targets(document))

    def bind(target: str):
        def apply(value: Any) -> None:
            state[target] = value

        return apply

    try:
        root = build_timeline(
            document, {target: bind(target) for target in state}, strict=config.strict
        )
    except (KeyError, ValueError, TimelineError) as e:
        console.print(f"[red]ERROR: Could not build {path}: {e}[/red]")
        return 1
    fps = args.fps or config.default_fps
    seconds = args.seconds if args.seconds is not None else root.duration

    console.print(
        f"[bold]{document.name}[/bold] ({root.duration:.2f}s at {fps:g} fps, "
        f"{len(state)} targets)"
    )
    console.print(play(root, state, seconds, fps, args.every, title=document.name))
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="tweenline",
        description="tweenline - keyframe animation timelines",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--fps", type=float, default=None, help="Frames per second")
        parser.add_argument(
            "--config", default=None, help="Path to engine config (.json, .yaml or .yml)"
        )
        parser.add_argument(
            "--every", type=int, default=1, help="Print every K-th frame (default: 1)"
        )

    demo = sub.add_parser("demo", help="Play the built-in point + number demo")
    add_common(demo)
    demo.add_argument("--seconds", type=float, default=1.0, help="Seconds to play")

    play_cmd = sub.add_parser("play", help="Play a timeline document")
    play_cmd.add_argument("file", help="Timeline document (.json, .yaml or .yml)")
    add_common(play_cmd)
    play_cmd.add_argument(
        "--seconds", type=float, default=None, help="Seconds to play (default: timeline duration)"
    )

    return p


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.every < 1:
        p.error("--every must be >= 1")

    if args.cmd == "demo":
        sys.exit(run_demo(args))
    elif args.cmd == "play":
        sys.exit(run_play(args))
