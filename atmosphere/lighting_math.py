"""
Mathematical helpers for day/night transitions.
"""

import math


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation."""
    return a + (b - a) * t


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to [low, high]. NaN passes through unchanged."""
    if math.isnan(value):
        return value
    return max(low, min(high, value))


def progress(now: float, start: float, duration_minutes: float) -> float:
    """
    Fraction of a transition window elapsed at day number `now`.

    The window starts at day number `start` and lasts `duration_minutes`.
    A zero-length window counts as already complete. The result is not
    clamped, so callers see values outside [0, 1] when `now` lies
    outside the window.
    """
    if duration_minutes <= 0:
        return 1.0
    return (now - start) / (duration_minutes / 1440)
