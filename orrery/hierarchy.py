#!/usr/bin/env python3
"""
Body hierarchy helpers: moon parent resolution and default body factories.

Moons hold a weak back-reference to their parent planet. It starts out as a
name and is turned into a Resolved(index) into the current planet list, or
UNRESOLVED when no planet carries that name. Indices shift whenever planets
are added or removed, so resolve_parents must run again after every reload.

Duplicate planet names are accepted; the first planet in list order wins.
"""
import logging
import math
import random
from typing import Dict, List, Optional, Sequence

from .constants import (
    ASTEROID_MAX_SPEED,
    ASTEROID_MIN_SPEED,
    BELT_INNER,
    BELT_OUTER,
    NUM_ASTEROIDS,
    SUN_COLOR,
    SUN_RADIUS,
)
from .data_models import UNRESOLVED, Asteroid, Moon, Planet, Resolved, Star

logger = logging.getLogger(__name__)


def build_name_index(planets: Sequence[Planet]) -> Dict[str, int]:
    """Map each planet name to the index of its first occurrence."""
    index: Dict[str, int] = {}
    for i, p in enumerate(planets):
        if p.name in index:
            logger.debug("Duplicate planet name %r at index %d; keeping index %d", p.name, i, index[p.name])
            continue
        index[p.name] = i
    return index


def resolve_parents(moons: Sequence[Moon], planets: Sequence[Planet]) -> int:
    """
    Point every moon at its parent planet by name.

    Returns the number of moons left UNRESOLVED. Unresolved moons are a warning,
    not an error: the simulator skips them.
    """
    by_name = build_name_index(planets)
    unresolved = 0
    for m in moons:
        idx = by_name.get(m.parent_name)
        if idx is None:
            m.parent = UNRESOLVED
            unresolved += 1
            logger.warning("Moon with parent name '%s' has no matching planet.", m.parent_name)
        else:
            m.parent = Resolved(idx)
    return unresolved


def make_star() -> Star:
    return Star(radius=SUN_RADIUS, color=SUN_COLOR)


def default_moons() -> List[Moon]:
    """The stock moon set: (parent, radius, color, orbit radius, start angle, speed)."""
    table = [
        ("Earth", 3, (210, 210, 210), 18.0, 0.0, 0.08),
        ("Mars", 2, (200, 200, 200), 10.0, 1.0, 0.10),
        ("Mars", 2, (160, 160, 160), 15.0, 2.0, 0.07),
        ("Jupiter", 4, (255, 200, 180), 30.0, 0.0, 0.09),
        ("Jupiter", 3, (180, 220, 255), 40.0, 1.0, 0.07),
        ("Jupiter", 5, (220, 220, 220), 52.0, 2.0, 0.05),
        ("Jupiter", 4, (200, 200, 200), 65.0, 3.0, 0.04),
        ("Saturn", 4, (230, 210, 160), 28.0, 0.5, 0.06),
        ("Uranus", 3, (200, 220, 255), 24.0, 1.2, 0.06),
        ("Neptune", 3, (180, 200, 255), 22.0, 2.0, 0.06),
    ]
    return [
        Moon(parent_name=parent, orbit_radius=orbit, angular_speed=speed,
             radius=float(radius), color=color, angle=angle)
        for parent, radius, color, orbit, angle, speed in table
    ]


def make_asteroid_belt(count: int = NUM_ASTEROIDS, inner: float = BELT_INNER, outer: float = BELT_OUTER,
                       rng: Optional[random.Random] = None) -> List[Asteroid]:
    """Sample a belt once: radius in [inner, outer], angle in [0, 2*pi), speed in the configured band."""
    rng = rng or random.Random()
    if outer < inner:
        inner, outer = outer, inner
    belt: List[Asteroid] = []
    for _ in range(max(0, int(count))):
        belt.append(Asteroid(
            orbit_radius=rng.uniform(inner, outer),
            angular_speed=rng.uniform(ASTEROID_MIN_SPEED, ASTEROID_MAX_SPEED),
            angle=rng.random() * 2.0 * math.pi,
        ))
    return belt
