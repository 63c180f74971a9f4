#!/usr/bin/env python3
"""
Planet texture fetching.

A texture is downloaded with requests and decoded by pygame. Every failure
(network, HTTP status, empty body, undecodable bytes) degrades to None and the
renderer falls back to the planet's flat color.
"""
import logging
import os
from io import BytesIO
from typing import Dict, Optional
from urllib.parse import urlsplit

import pygame
import requests

from .constants import TEXTURE_TIMEOUT, TEXTURE_USER_AGENT

logger = logging.getLogger(__name__)


def fetch_texture(url: Optional[str], timeout: float = TEXTURE_TIMEOUT,
                  session: Optional[requests.Session] = None) -> Optional[pygame.Surface]:
    if not url:
        return None
    getter = session or requests
    try:
        response = getter.get(url, timeout=timeout, allow_redirects=True,
                              headers={"User-Agent": TEXTURE_USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Texture download failed for %s: %s", url, exc)
        return None

    data = response.content
    if not data:
        logger.warning("Downloaded zero bytes from %s", url)
        return None

    namehint = os.path.basename(urlsplit(url).path)
    try:
        surface = pygame.image.load(BytesIO(data), namehint)
    except pygame.error as exc:
        logger.warning("Texture decode failed for %s: %s", url, exc)
        return None

    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        surface = surface.convert_alpha()
    logger.info("Loaded texture from %s", url)
    return surface


class TextureCache:
    """URL -> surface memo (failures included) so reloads never refetch."""

    def __init__(self, timeout: float = TEXTURE_TIMEOUT):
        self.timeout = timeout
        self.session = requests.Session()
        self._cache: Dict[str, Optional[pygame.Surface]] = {}

    def __call__(self, url: Optional[str]) -> Optional[pygame.Surface]:
        if not url:
            return None
        if url not in self._cache:
            self._cache[url] = fetch_texture(url, self.timeout, self.session)
        return self._cache[url]

    def close(self) -> None:
        self.session.close()
