"""Easing functions."""

from tweenline.core.easing.functions import (
    EaseFn,
    EaseNotFoundError,
    get_ease_fn,
    linear,
    list_ease_names,
)

__all__ = [
    "EaseFn",
    "EaseNotFoundError",
    "get_ease_fn",
    "linear",
    "list_ease_names",
]
