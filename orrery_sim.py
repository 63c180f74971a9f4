#!/usr/bin/env python3
"""
Orrery Simulator application entry point.

What this module does
- Loads planets from a flat text file or an SQLite database, attaches the stock moons
  and a seeded asteroid belt, and resolves moon parents.
- Runs a single-threaded frame loop: drain pygame events, update the camera and the
  selection, advance and project the scene once, draw, pump the Dear PyGui control
  panel, then pace to the target frame rate.

Controls
- Left-drag: rotate (yaw/pitch) | Right-drag: pan | Wheel: zoom | Click: select planet
- R: reset camera | Esc or closing either window: quit

Running
1) Install dependencies: `pip install pygame dearpygui requests`
2) Run this module: `python orrery_sim.py --data data/planets.txt`
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

import pygame

from orrery.constants import (
    DEFAULT_DATA_FILE,
    DEFAULT_SEED,
    NUM_ASTEROIDS,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orrery.controls import ControlPanel
from orrery.presets_loader import DataSourceError, open_source
from orrery.renderer import PygameRenderer
from orrery.scene import EmptySceneError, Scene
from orrery.textures import TextureCache

logger = logging.getLogger("orrery")


def setup_logging(level):
    """Setup logging with specified level"""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        force=True,
        stream=sys.stdout,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Circular-orbit solar system viewer.")
    parser.add_argument("--data", default=DEFAULT_DATA_FILE,
                        help="Planet data: text file, or .db/.sqlite/.sqlite3 database")
    parser.add_argument("--asteroids", type=int, default=NUM_ASTEROIDS, help="Asteroid belt size")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Asteroid belt RNG seed")
    parser.add_argument("--no-controls", action="store_true", help="Do not open the control panel")
    parser.add_argument("--no-textures", action="store_true", help="Skip downloading planet textures")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    return parser.parse_args(argv)


def hud_lines(scene: Scene) -> List[str]:
    lines = ["Left-drag: rotate | Right-drag: pan | Wheel: zoom | Click: select | R: reset"]
    p = scene.selected_planet()
    if p is not None:
        lines.append(f"Selected: {p.name}  orbit {p.orbit_radius:.1f}  speed {p.angular_speed:.4f} rad/tick")
    return lines


def handle_events(scene: Scene) -> bool:
    """Drain pending events into the scene; False when the user asked to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_r:
                scene.camera.reset()
        elif event.type == pygame.MOUSEWHEEL:
            scene.on_wheel(event.y)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            # Wheel clicks arrive as buttons 4/5 on some platforms; MOUSEWHEEL covers them.
            if event.button in (4, 5):
                continue
            scene.on_button_down(event.button, event.pos[0], event.pos[1])
        elif event.type == pygame.MOUSEBUTTONUP:
            scene.on_button_up(event.button)
        elif event.type == pygame.MOUSEMOTION:
            scene.on_motion(event.pos[0], event.pos[1])
    return True


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    pygame.init()
    pygame.display.set_caption("Orrery Simulator - Viewport")
    surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)

    textures = None
    if not args.no_textures:
        textures = TextureCache()

    try:
        scene = Scene.load(open_source(args.data), image_loader=textures,
                           asteroid_count=args.asteroids, seed=args.seed)
    except (EmptySceneError, DataSourceError) as exc:
        logger.error("%s, exiting.", exc)
        if textures is not None:
            textures.close()
        pygame.quit()
        return 1

    panel = None
    if not args.no_controls:
        panel = ControlPanel(scene)

    renderer = PygameRenderer()
    clock = pygame.time.Clock()
    last_time = time.perf_counter()
    running = True
    try:
        while running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            running = handle_events(scene)

            width, height = surface.get_size()
            snapshot = scene.frame(width, height, real_dt)
            renderer.draw(surface, snapshot, hud_lines(scene))
            pygame.display.flip()

            if panel is not None and not panel.render_frame():
                running = False

            clock.tick(TARGET_FPS)
    finally:
        if panel is not None:
            panel.close()
        if textures is not None:
            textures.close()
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
