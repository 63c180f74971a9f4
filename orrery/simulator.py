#!/usr/bin/env python3
"""
Hierarchical orbit simulator for Orrery Simulator

Responsibilities
- Advance the angle of every planet, moon and asteroid and recompute world positions.
- Project the scene through the camera into a FrameSnapshot (screen positions, derived
  screen radii, orbit rings, belt points and the selection highlight).

Update order
Within one advance, every planet is fully updated before any moon runs, because a moon's
world position is its parent's current-frame world position plus its own orbital offset.
Reading the parent before it has moved would lag the moon one frame behind.

    1) star      - fixed at the origin, nothing to advance
    2) planets   - angle += speed * ticks; world = polar(orbit_radius, angle)
    3) moons     - resolved only: angle += speed * ticks; world = parent.world + polar(...)
    4) asteroids - angle only; positions are derived on demand during projection

Timing
Angular speeds are radians per reference tick. Callers pass the elapsed time as a tick
count (fractional allowed) so that motion follows wall-clock time rather than the display
refresh rate; ticks=1 reproduces one classic fixed frame.

Projection never writes to angles or world coordinates, so a frame can be projected any
number of times without disturbing the simulation.
"""
from typing import Optional, Sequence

from .data_models import FrameSnapshot, Moon, Planet, Resolved, SceneState, ScreenBody
from .hit_test import highlight_ring
from .projection import ViewParams, orbit_ring, project_xz, screen_radius
from .vector_utils import polar, vec_add


def parent_of(moon: Moon, planets: Sequence[Planet]) -> Optional[Planet]:
    """The moon's parent planet, or None when unresolved or stale."""
    if isinstance(moon.parent, Resolved) and 0 <= moon.parent.index < len(planets):
        return planets[moon.parent.index]
    return None


class Simulator:
    """Stateless stepper over a SceneState; the state is mutated in place."""

    def advance(self, state: SceneState, ticks: float = 1.0) -> None:
        """
        Move every body forward by the given number of ticks.

        Args:
            state: Scene to update in place.
            ticks: Elapsed reference ticks (>= 0).
        """
        for p in state.planets:
            p.angle += p.angular_speed * ticks
            p.world_x, p.world_z = polar(p.orbit_radius, p.angle)

        for m in state.moons:
            parent = parent_of(m, state.planets)
            if parent is None:
                continue
            m.angle += m.angular_speed * ticks
            m.world_x, m.world_z = vec_add(parent.world_position, polar(m.orbit_radius, m.angle))

        for a in state.asteroids:
            a.angle += a.angular_speed * ticks

    def project(self, state: SceneState, view: ViewParams) -> FrameSnapshot:
        """Build the screen-space snapshot for the current world state."""
        fov = view.fov

        sx, sy, depth = project_xz(0.0, 0.0, view)
        star = ScreenBody(sx, sy, screen_radius(state.star.radius, fov, depth), depth, state.star.color)

        planets = []
        for p in state.planets:
            sx, sy, depth = project_xz(p.world_x, p.world_z, view)
            planets.append(ScreenBody(sx, sy, screen_radius(p.radius, fov, depth), depth,
                                      p.color, image=p.image, name=p.name))

        # Unresolved moons get no screen entry; their depth is never used as a divisor.
        moons = []
        for m in state.moons:
            if parent_of(m, state.planets) is None:
                continue
            sx, sy, depth = project_xz(m.world_x, m.world_z, view)
            moons.append(ScreenBody(sx, sy, screen_radius(m.radius, fov, depth), depth, m.color))

        orbits = [orbit_ring(p.orbit_radius, view) for p in state.planets]

        asteroids = []
        for a in state.asteroids:
            wx, wz = a.world_position()
            sx, sy, _ = project_xz(wx, wz, view)
            asteroids.append((sx, sy))

        highlight = None
        if state.selected is not None and 0 <= state.selected < len(planets):
            highlight = highlight_ring(planets[state.selected])

        return FrameSnapshot(star=star, planets=planets, moons=moons, orbits=orbits,
                             asteroids=asteroids, highlight=highlight)

    def step(self, state: SceneState, view: ViewParams, ticks: float = 1.0) -> FrameSnapshot:
        self.advance(state, ticks)
        return self.project(state, view)
