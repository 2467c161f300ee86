"""Easing functions applied to motion-progress ratios in [0, 1]."""
from __future__ import annotations

import math
from typing import Callable


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_out(t: float) -> float:
    return t * (2 - t)


def quadratic_ease_in_out(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return 1 - 2 * (1 - t) * (1 - t)


def inverse_quadratic_ease_in_out(p: float) -> float:
    """Ratio ``t`` with ``quadratic_ease_in_out(t) == p``."""
    if p < 0.5:
        return math.sqrt(p / 2)
    return 1 - math.sqrt((1 - p) / 2)


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": quadratic_ease_in_out,
}
