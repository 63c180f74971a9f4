#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the app.
"""
import math
from typing import Tuple


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return (a[0] - b[0], a[1] - b[1])


def vec_len_sq(a: Tuple[float, float]) -> float:
    return a[0] * a[0] + a[1] * a[1]


def polar(radius: float, angle: float) -> Tuple[float, float]:
    """Point on a circle of the given radius, in the orbital (x, z) plane."""
    return (math.cos(angle) * radius, math.sin(angle) * radius)
