#!/usr/bin/env python3
"""
General utilities for Orrery Simulator.
"""
from typing import Optional, Sequence, Tuple


def try_float(val) -> Optional[float]:
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def try_int(val) -> Optional[int]:
    try:
        return int(val)
    except (TypeError, ValueError):
        return None


def coerce_color(c: Sequence) -> Tuple[int, int, int]:
    """Clamp the first three components into 0..255 integers."""
    r, g, b = int(c[0]), int(c[1]), int(c[2])
    return (max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b)))
