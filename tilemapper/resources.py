"""A cache of loaded textures, fonts and sounds, keyed by file path."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import pygame

logger = logging.getLogger(__name__)


class ResourceCache:
    """Loads each resource once and hands out the same object afterwards."""

    def __init__(self) -> None:
        self._textures: dict[str, pygame.Surface] = {}
        self._fonts: dict[tuple[str, int], pygame.font.Font] = {}
        self._sounds: dict[str, pygame.mixer.Sound] = {}

    def load_texture(self, path: str) -> pygame.Surface | None:
        """Load an image; a failure is logged, not cached, and gives None."""
        path = str(path)
        cached = self._textures.get(path)
        if cached is not None:
            return cached
        try:
            texture = pygame.image.load(path)
        except (pygame.error, OSError) as exc:
            logger.warning("failed to load texture %s: %s", path, exc)
            return None
        self._textures[path] = texture
        return texture

    def load_font(self, path: str, size: int) -> pygame.font.Font:
        """Load a font at a size, falling back to the default font if the file fails."""
        key = (str(path), int(size))
        cached = self._fonts.get(key)
        if cached is not None:
            return cached
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            font = pygame.font.Font(key[0], key[1])
        except (pygame.error, OSError) as exc:
            logger.error("failed to load font %s: %s", key[0], exc)
            font = pygame.font.Font(None, key[1])
        self._fonts[key] = font
        return font

    def load_sound(self, path: str) -> pygame.mixer.Sound | None:
        """Load a sound; gives None if the mixer or the file cannot be used."""
        path = str(path)
        cached = self._sounds.get(path)
        if cached is not None:
            return cached
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            sound = pygame.mixer.Sound(path)
        except (pygame.error, OSError) as exc:
            logger.error("failed to load sound %s: %s", path, exc)
            return None
        self._sounds[path] = sound
        return sound

    def first_texture(self, paths: Iterable[str]) -> pygame.Surface | None:
        """The first texture among the paths that loads, or None."""
        for path in paths:
            texture = self.load_texture(path)
            if texture is not None:
                return texture
        return None