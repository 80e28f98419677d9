#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

Vectors are plain (x, y) float tuples, so they behave as immutable values
and can be copied into snapshots without aliasing body state.
"""
import math
from typing import Tuple

Vector2 = Tuple[float, float]

ZERO: Vector2 = (0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vector2, b: Vector2) -> Vector2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vector2, b: Vector2) -> Vector2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vector2, s: float) -> Vector2:
    return (a[0] * s, a[1] * s)


def vec_len(a: Vector2) -> float:
    return math.hypot(a[0], a[1])


def vec_distance(a: Vector2, b: Vector2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def vec_norm(a: Vector2) -> Vector2:
    l = vec_len(a)
    if l == 0:
        return ZERO
    return (a[0] / l, a[1] / l)


def vec_is_finite(a: Vector2) -> bool:
    return math.isfinite(a[0]) and math.isfinite(a[1])


def polar_to_rect(radius: float, theta: float) -> Vector2:
    """Point at distance radius from the origin, rotated theta radians counter-clockwise from +x."""
    return (radius * math.cos(theta), radius * math.sin(theta))
