#!/usr/bin/env python3
"""
Pygame drawing of a FrameSnapshot.

Draw order: orbit rings, asteroid belt, selection ring, star, planets, moons, HUD.
Planets with a texture are drawn as the texture scaled to their screen diameter;
everything else is a flat filled circle.
"""
from typing import Iterable, Optional, Tuple

import pygame
from pygame import gfxdraw

from .constants import (
    ASTEROID_COLOR,
    BACKGROUND_COLOR,
    HUD_COLOR,
    ORBIT_COLOR,
    SAFE_COORD_LIMIT,
    SELECTION_COLOR,
)
from .data_models import FrameSnapshot, ScreenBody

MAX_TEXTURE_DIAMETER = 2048


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameRenderer:
    def __init__(self, font_size: int = 16):
        self.font_size = font_size
        self._font = None
        self._scaled = {}  # (id(image), diameter) -> scaled surface

    def _get_font(self):
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            try:
                self._font = pygame.font.SysFont("consolas", self.font_size)
            except (pygame.error, OSError):
                self._font = pygame.font.Font(None, self.font_size)
        return self._font

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int, color=HUD_COLOR) -> None:
        img = self._get_font().render(text, True, color)
        surface.blit(img, (x, y))

    def _fill_circle(self, surface, body: ScreenBody) -> None:
        center = _safe_point((body.x, body.y))
        if center is None:
            return
        if body.radius <= 0.5:
            surface.set_at(center, body.color)
            return
        r = min(int(body.radius + 0.5), SAFE_COORD_LIMIT)
        gfxdraw.filled_circle(surface, center[0], center[1], r, body.color)
        gfxdraw.aacircle(surface, center[0], center[1], r, body.color)

    def _blit_texture(self, surface, body: ScreenBody) -> bool:
        diameter = int(body.radius * 2.0)
        if diameter < 1 or diameter > MAX_TEXTURE_DIAMETER:
            return False
        corner = _safe_point((body.x - body.radius, body.y - body.radius))
        if corner is None:
            return False
        key = (id(body.image), diameter)
        scaled = self._scaled.get(key)
        if scaled is None:
            if len(self._scaled) > 256:
                self._scaled.clear()
            scaled = pygame.transform.smoothscale(body.image, (diameter, diameter))
            self._scaled[key] = scaled
        surface.blit(scaled, corner)
        return True

    def draw(self, surface: pygame.Surface, snapshot: FrameSnapshot, hud_lines: Iterable[str] = ()) -> None:
        surface.fill(BACKGROUND_COLOR)

        for ring in snapshot.orbits:
            pts = [p for p in (_safe_point(pt) for pt in ring) if p is not None]
            if len(pts) > 1:
                pygame.draw.lines(surface, ORBIT_COLOR, False, pts)

        # Every other asteroid, which keeps the belt sparse.
        for i, pt in enumerate(snapshot.asteroids):
            if i & 1:
                continue
            p = _safe_point(pt)
            if p is not None:
                surface.set_at(p, ASTEROID_COLOR)

        if snapshot.highlight is not None:
            hx, hy, hr = snapshot.highlight
            center = _safe_point((hx, hy))
            if center is not None and 0 < hr < SAFE_COORD_LIMIT:
                gfxdraw.aacircle(surface, center[0], center[1], int(hr), SELECTION_COLOR)

        self._fill_circle(surface, snapshot.star)

        for body in snapshot.planets:
            if body.radius <= 0.0:
                continue
            if body.image is not None and self._blit_texture(surface, body):
                continue
            self._fill_circle(surface, body)

        for body in snapshot.moons:
            self._fill_circle(surface, body)

        for n, line in enumerate(hud_lines):
            self.draw_text(surface, line, 10, 10 + 20 * n)
