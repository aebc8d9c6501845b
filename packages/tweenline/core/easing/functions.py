"""Easing functions backed by easing-functions.

An easing function remaps normalized time to an eased percentage. Curves
such as the back and elastic families overshoot [0, 1]; animations then
extrapolate from the boundary keyframes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeGuard, cast

from easing_functions import (
    BackEaseIn,
    BackEaseInOut,
    BackEaseOut,
    BounceEaseIn,
    BounceEaseOut,
    CubicEaseIn,
    CubicEaseInOut,
    CubicEaseOut,
    ElasticEaseIn,
    ElasticEaseInOut,
    ElasticEaseOut,
    QuadEaseIn,
    QuadEaseInOut,
    QuadEaseOut,
    SineEaseIn,
    SineEaseInOut,
    SineEaseOut,
)

EaseFn = Callable[[float], float]


class EaseNotFoundError(KeyError):
    """Raised when an easing name is not registered."""

    pass


class _EaseMethodEasing(Protocol):
    def ease(self, t: float) -> float: ...


def _has_ease(e: Any) -> TypeGuard[_EaseMethodEasing]:
    return hasattr(e, "ease")


_EASING_DEFAULTS: dict[str, float] = {
    "start": 0.0,
    "end": 1.0,
    "duration": 1.0,
}


def _make_easing(easing_cls: type[Any], **kwargs: Any) -> EaseFn:
    obj = easing_cls(**{**_EASING_DEFAULTS, **kwargs})

    if _has_ease(obj):
        return lambda t: float(obj.ease(t))

    if not callable(obj):
        raise TypeError(f"{type(obj).__name__} is not callable and has no .ease(t)")
    return cast(EaseFn, obj)


def linear(percentage: float) -> float:
    """Identity easing."""
    return percentage


_EASING_CLASSES: dict[str, type[Any]] = {
    "ease_in_sine": SineEaseIn,
    "ease_out_sine": SineEaseOut,
    "ease_in_out_sine": SineEaseInOut,
    "ease_in_quad": QuadEaseIn,
    "ease_out_quad": QuadEaseOut,
    "ease_in_out_quad": QuadEaseInOut,
    "ease_in_cubic": CubicEaseIn,
    "ease_out_cubic": CubicEaseOut,
    "ease_in_out_cubic": CubicEaseInOut,
    "ease_in_back": BackEaseIn,
    "ease_out_back": BackEaseOut,
    "ease_in_out_back": BackEaseInOut,
    "ease_in_elastic": ElasticEaseIn,
    "ease_out_elastic": ElasticEaseOut,
    "ease_in_out_elastic": ElasticEaseInOut,
    "ease_in_bounce": BounceEaseIn,
    "ease_out_bounce": BounceEaseOut,
}

_EASE_CACHE: dict[str, EaseFn] = {"linear": linear}


def list_ease_names() -> list[str]:
    """All registered easing names, sorted."""
    return sorted({"linear", *_EASING_CLASSES})


def get_ease_fn(name: str) -> EaseFn:
    """Look up an easing function by name.

    Args:
        name: Registered name, e.g. ``"ease_in_out_back"``. Dashes and
            case are normalized.

    Returns:
        Easing function mapping [0, 1] to eased percentages.

    Raises:
        EaseNotFoundError: If the name is unknown.

    Example:
        >>> get_ease_fn("linear")(0.25)
        0.25
    """
    key = name.strip().lower().replace("-", "_")
    if key in _EASE_CACHE:
        return _EASE_CACHE[key]
    easing_cls = _EASING_CLASSES.get(key)
    if easing_cls is None:
        raise EaseNotFoundError(f"Unknown easing function: {name}")
    fn = _make_easing(easing_cls)
    _EASE_CACHE[key] = fn
    return fn
