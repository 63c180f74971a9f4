#!/usr/bin/env python3
"""
Data models for Orrery Simulator.

This module defines the body dataclasses shared between the simulator, the
data sources, rendering, and UI.

Units and usage
- Orbit radii and body radii are in world units; the star sits at the origin of
  the X/Z orbital plane and never moves.
- Angles are in radians and accumulate without wraparound.
- Angular speeds are radians per reference tick (see constants.TICK_SECONDS).
- world_x/world_z are derived each frame by the Simulator; screen-space data
  only ever lives in a FrameSnapshot and is rebuilt every frame.
- A Moon refers to its parent planet by name until parent resolution turns the
  name into a Resolved index, or marks it UNRESOLVED.
"""
import enum
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from .constants import SUN_COLOR, SUN_RADIUS
from .vector_utils import polar

Color = Tuple[int, int, int]
Point = Tuple[float, float]


@dataclass
class PlanetRecord:
    """
    One planet as stored by a body data source.

    Fields:
    - name: Unique key used for moon parent resolution (no whitespace)
    - orbit_radius: Distance from the star in the orbital plane (>= 0)
    - angular_speed: Radians per tick; negative for retrograde orbits
    - radius: Base render radius before perspective scaling (> 0)
    - color: RGB tuple, each component 0..255
    - texture_url: Optional image URL; None means flat color
    """
    name: str
    orbit_radius: float
    angular_speed: float
    radius: float
    color: Color
    texture_url: Optional[str] = None

    def validate(self) -> None:
        """Raise ValueError if the record cannot be stored or simulated."""
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"Planet name must be non-empty without spaces: {self.name!r}")
        if not all(math.isfinite(v) for v in (self.orbit_radius, self.angular_speed, self.radius)):
            raise ValueError(f"Orbit radius, speed and radius must be finite numbers for {self.name}")
        if self.orbit_radius < 0:
            raise ValueError(f"Orbit radius must be non-negative for {self.name}")
        if self.radius <= 0:
            raise ValueError(f"Radius must be positive for {self.name}")
        if len(self.color) != 3 or any(not 0 <= int(c) <= 255 for c in self.color):
            raise ValueError(f"Color components must be within 0..255 for {self.name}")


@dataclass
class Star:
    radius: float = SUN_RADIUS
    color: Color = SUN_COLOR


@dataclass
class Planet:
    name: str
    orbit_radius: float
    angular_speed: float
    radius: float
    color: Color
    angle: float = 0.0
    world_x: float = 0.0
    world_z: float = 0.0
    texture_url: Optional[str] = None
    image: Any = None  # drawable handle supplied by the texture collaborator

    @classmethod
    def from_record(cls, record: PlanetRecord) -> "Planet":
        """Start state matches a freshly loaded body: angle 0, parked on +Z."""
        return cls(
            name=record.name,
            orbit_radius=record.orbit_radius,
            angular_speed=record.angular_speed,
            radius=record.radius,
            color=record.color,
            world_x=0.0,
            world_z=record.orbit_radius,
            texture_url=record.texture_url,
        )

    @property
    def world_position(self) -> Point:
        return (self.world_x, self.world_z)


class Unresolved(enum.Enum):
    """Marker for a moon whose parent name matched no loaded planet."""
    UNRESOLVED = "unresolved"

    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED = Unresolved.UNRESOLVED


@dataclass(frozen=True)
class Resolved:
    index: int


ParentRef = Union[Resolved, Unresolved]


@dataclass
class Moon:
    parent_name: str
    orbit_radius: float
    angular_speed: float
    radius: float
    color: Color
    angle: float = 0.0
    parent: ParentRef = UNRESOLVED
    world_x: float = 0.0
    world_z: float = 0.0

    @property
    def is_resolved(self) -> bool:
        return isinstance(self.parent, Resolved)


@dataclass
class Asteroid:
    """Belt member; only the angle is carried between frames."""
    orbit_radius: float
    angular_speed: float
    angle: float = 0.0

    def world_position(self) -> Point:
        return polar(self.orbit_radius, self.angle)


@dataclass
class SceneState:
    """All mutable simulation state owned by the frame loop."""
    star: Star
    planets: List[Planet] = field(default_factory=list)
    moons: List[Moon] = field(default_factory=list)
    asteroids: List[Asteroid] = field(default_factory=list)
    selected: Optional[int] = None


@dataclass
class ScreenBody:
    """A projected body: screen center, derived screen radius and depth."""
    x: float
    y: float
    radius: float
    depth: float
    color: Color
    image: Any = None
    name: Optional[str] = None


@dataclass
class FrameSnapshot:
    """
    Screen-space output of one frame, consumed by the renderer and hit-tester.

    planets is index-aligned with SceneState.planets. moons holds only moons
    with a resolved parent. highlight is (x, y, ring_radius) for the selected
    planet, or None.
    """
    star: ScreenBody
    planets: List[ScreenBody] = field(default_factory=list)
    moons: List[ScreenBody] = field(default_factory=list)
    orbits: List[List[Point]] = field(default_factory=list)
    asteroids: List[Point] = field(default_factory=list)
    highlight: Optional[Tuple[float, float, float]] = None
