"""Declarative timeline documents.

A timeline document describes an animator tree as data (JSON or YAML):
composites hold named children, each child is either a keyframe track or
another composite, placed at an absolute ``start_time`` or relative to an
earlier sibling.

Example (YAML):
    root:
      kind: composite
      children:
        - name: fade
          node:
            kind: track
            interpolator: number
            duration: 1.0
            target: opacity
            keyframes: [[0.0, 0.0], [1.0, 1.0]]
        - name: slide
          after: fade
          node:
            kind: track
            interpolator: point
            ease: ease_in_out_quad
            target: position
            keyframes:
              - {percentage: 0.0, value: [0, 0]}
              - {percentage: 1.0, value: [100, 50]}
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tweenline.core.interpolation.registry import InterpolatorKind


class KeyframeSpec(BaseModel):
    """One keyframe; also accepts a ``[percentage, value]`` pair."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    percentage: float = Field(ge=0.0, le=1.0)
    value: Any

    @model_validator(mode="before")
    @classmethod
    def _accept_pairs(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"Keyframe pair must have 2 items, got {len(data)}")
            return {"percentage": data[0], "value": data[1]}
        return data


class TrackSpec(BaseModel):
    """Keyframe track bound to a named target attribute."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["track"] = "track"
    target: str = Field(min_length=1, description="Binding name receiving the values")
    interpolator: InterpolatorKind = InterpolatorKind.NUMBER
    duration: float = Field(default=1.0, ge=0.0, description="Length in seconds")
    ease: str = Field(default="linear", description="Registered easing name")
    loop: bool = False
    reverse: bool = False
    max_loop_count: int | None = Field(default=None, ge=0)
    keyframes: list[KeyframeSpec] = Field(min_length=2)


class CompositeSpec(BaseModel):
    """Container of named children on a shared clock."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["composite"] = "composite"
    loop: bool = False
    reverse: bool = False
    delay: float = Field(default=0.0, ge=0.0, description="Padding before the first child")
    drag: float = Field(default=0.0, ge=0.0, description="Padding after the last child")
    max_loop_count: int | None = Field(default=None, ge=0)
    children: list[ChildSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_children(self) -> CompositeSpec:
        seen: set[str] = set()
        for child in self.children:
            if child.name in seen:
                raise ValueError(f"Duplicate child name: {child.name}")
            reference = child.reference
            if reference is not None and reference not in seen:
                raise ValueError(
                    f"Child {child.name!r} refers to {reference!r}, "
                    "which must be declared earlier"
                )
            seen.add(child.name)
        return self


NodeSpec = Annotated[TrackSpec | CompositeSpec, Field(discriminator="kind")]


class ChildSpec(BaseModel):
    """Placement of a node inside a composite.

    At most one of ``after``, ``before`` and ``amidst`` may be set. Without
    one, the node starts at ``start_time``. With one, ``offset`` is the gap
    after the referenced sibling's end (``after``), before its start
    (``before``) or after its start (``amidst``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    node: NodeSpec
    start_time: float = Field(default=0.0, ge=0.0)
    after: str | None = None
    before: str | None = None
    amidst: str | None = None
    offset: float = 0.0

    @model_validator(mode="after")
    def _validate_reference(self) -> ChildSpec:
        references = [r for r in (self.after, self.before, self.amidst) if r is not None]
        if len(references) > 1:
            raise ValueError(f"Child {self.name!r} sets more than one of after/before/amidst")
        return self

    @property
    def reference(self) -> str | None:
        return self.after or self.before or self.amidst


class TimelineDocument(BaseModel):
    """Top-level timeline file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = "timeline"
    description: str | None = None
    root: NodeSpec


CompositeSpec.model_rebuild()
ChildSpec.model_rebuild()
TimelineDocument.model_rebuild()
