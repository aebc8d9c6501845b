"""Host tick helpers."""

from tweenline.core.runtime.clock import FrameClock
from tweenline.core.runtime.ticker import Ticker

__all__ = ["FrameClock", "Ticker"]
