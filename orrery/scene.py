#!/usr/bin/env python3
"""
Scene orchestration: one SceneState, one camera, one frame at a time.

What this module does
- Owns the SceneState (star, planets, moons, asteroid belt, selection) and the camera.
- Turns pointer input into camera motion and click selection.
- Runs Simulator.step once per frame and keeps the resulting FrameSnapshot, which is
  what click selection is tested against.
- Applies add/remove edits through the planet data source, then reloads the planet
  list and re-resolves every moon parent.

Threading model
- None. The frame loop owns the Scene exclusively; nothing here locks or blocks.

Nothing in this module touches pygame or any window, so a Scene can be driven
headlessly from tests.
"""
import logging
import random
from typing import Callable, List, Optional, Set, Tuple

from .camera import Camera3D
from .constants import (
    DEFAULT_SEED,
    MAX_TICKS_PER_FRAME,
    NUM_ASTEROIDS,
    PRIMARY_BUTTON,
    SECONDARY_BUTTON,
    TICK_SECONDS,
)
from .data_models import FrameSnapshot, Moon, Planet, PlanetRecord, SceneState
from .hierarchy import default_moons, make_asteroid_belt, make_star, resolve_parents
from .hit_test import pick_planet
from .presets_loader import PlanetSource
from .simulator import Simulator
from .vector_utils import clamp

logger = logging.getLogger(__name__)

ImageLoader = Callable[[Optional[str]], object]


class EmptySceneError(RuntimeError):
    """The data source produced no planets; there is nothing to simulate."""


def _stored_values(planet: Planet) -> tuple:
    return (planet.name, planet.orbit_radius, planet.angular_speed, planet.radius,
            tuple(planet.color), planet.texture_url)


def _find_planet(planets: List[Planet], planet: Planet, near: int) -> Optional[int]:
    """Index of the planet storing the same values, nearest to `near`; None if it is gone."""
    key = _stored_values(planet)
    matches = [i for i, p in enumerate(planets) if _stored_values(p) == key]
    if not matches:
        return None
    return min(matches, key=lambda i: abs(i - near))


def elapsed_to_ticks(elapsed: Optional[float]) -> float:
    """Wall-clock seconds to reference ticks; None means exactly one tick."""
    if elapsed is None:
        return 1.0
    return clamp(elapsed / TICK_SECONDS, 0.0, MAX_TICKS_PER_FRAME)


class Scene:
    def __init__(self, source: PlanetSource, image_loader: Optional[ImageLoader] = None,
                 asteroid_count: int = NUM_ASTEROIDS, seed: Optional[int] = DEFAULT_SEED,
                 moons: Optional[List[Moon]] = None, camera: Optional[Camera3D] = None):
        self.source = source
        self.image_loader = image_loader
        self.camera = camera or Camera3D()
        self.simulator = Simulator()
        self.state = SceneState(
            star=make_star(),
            moons=default_moons() if moons is None else moons,
            asteroids=make_asteroid_belt(asteroid_count, rng=random.Random(seed)),
        )
        self.last_snapshot: Optional[FrameSnapshot] = None
        self._held: Set[int] = set()
        self._last_mouse: Tuple[float, float] = (0.0, 0.0)

    @classmethod
    def load(cls, source: PlanetSource, **kwargs) -> "Scene":
        """Build a scene and load its planets; raises EmptySceneError when there are none."""
        scene = cls(source, **kwargs)
        scene.reload()
        return scene

    # -----------------------
    # Data
    # -----------------------

    def reload(self) -> None:
        """
        Replace the planet list from the data source and re-resolve moon parents.

        Planets already on screen keep their angle (matched by name); new ones start
        at 0. The selection follows the selected planet to its new index, since a
        source may return planets in a different order. On EmptySceneError the
        current state is kept.
        """
        records = self.source.load()
        if not records:
            raise EmptySceneError(f"No planets loaded from {self.source!r}")

        planets = [Planet.from_record(r) for r in records]
        angles = {}
        for p in self.state.planets:
            angles.setdefault(p.name, p.angle)
        for p in planets:
            p.angle = angles.get(p.name, 0.0)
        if self.image_loader is not None:
            for p in planets:
                if p.texture_url:
                    p.image = self.image_loader(p.texture_url)
                    if p.image is None:
                        logger.warning("Using color fallback for %s.", p.name)

        selected = self.selected_planet()
        if selected is not None:
            self.state.selected = _find_planet(planets, selected, self.state.selected)
        else:
            self.state.selected = None
        self.state.planets = planets
        unresolved = resolve_parents(self.state.moons, planets)
        self.last_snapshot = None
        logger.info("Scene has %d planets, %d moons (%d unresolved), %d asteroids.",
                    len(planets), len(self.state.moons), unresolved, len(self.state.asteroids))

    def add_planet(self, record: PlanetRecord) -> None:
        record.validate()
        self.source.append(record)
        self.reload()

    def remove_planet(self, index: int) -> None:
        """Remove by current list index; the last remaining planet cannot be removed."""
        count = len(self.state.planets)
        if not 0 <= index < count:
            raise IndexError(f"No planet at index {index}")
        if count == 1:
            raise ValueError("Cannot remove the last planet")
        name = self.state.planets[index].name
        self.source.remove(index)

        if self.state.selected == index:
            self.state.selected = None
        self.reload()
        logger.info("Removed planet %s.", name)

    # -----------------------
    # Selection
    # -----------------------

    def click(self, x: float, y: float) -> Optional[int]:
        """Select the planet under (x, y) in the last frame; empty space clears the selection."""
        planets = self.last_snapshot.planets if self.last_snapshot is not None else []
        self.state.selected = pick_planet(planets, x, y)
        return self.state.selected

    def selected_planet(self) -> Optional[Planet]:
        sel = self.state.selected
        if sel is not None and 0 <= sel < len(self.state.planets):
            return self.state.planets[sel]
        return None

    # -----------------------
    # Pointer input
    # -----------------------

    def on_wheel(self, dy: float) -> None:
        self.camera.zoom_by(dy)

    def on_button_down(self, button: int, x: float, y: float) -> None:
        self._held.add(button)
        self._last_mouse = (x, y)
        self.click(x, y)

    def on_button_up(self, button: int) -> None:
        self._held.discard(button)

    def on_motion(self, x: float, y: float) -> None:
        dx = x - self._last_mouse[0]
        dy = y - self._last_mouse[1]
        self._last_mouse = (x, y)
        if PRIMARY_BUTTON in self._held:
            self.camera.rotate(dx, dy)
        if SECONDARY_BUTTON in self._held:
            self.camera.pan(dx, dy)

    # -----------------------
    # Frame
    # -----------------------

    def frame(self, width: int, height: int, elapsed: Optional[float] = None) -> FrameSnapshot:
        view = self.camera.view(width, height)
        self.last_snapshot = self.simulator.step(self.state, view, elapsed_to_ticks(elapsed))
        return self.last_snapshot
