"""The application window."""

from __future__ import annotations

import pygame

DEFAULT_TITLE = "Map Builder"
DEFAULT_SIZE = (1600, 900)
BLACK = (0, 0, 0)


class Window:
    """A single display surface with its events, cursor and frame pacing."""

    def __init__(self, title: str = DEFAULT_TITLE, size=DEFAULT_SIZE, fullscreen: bool = False) -> None:
        self.title = str(title)
        width, height = size
        self.mode = (int(width), int(height))
        self.fullscreen = bool(fullscreen)
        self.framerate = 60
        self.cursor_visible = True
        self.surface: pygame.Surface | None = None
        self._clock = pygame.time.Clock()
        self.create()

    @property
    def size(self) -> tuple[int, int]:
        """Current size of the drawing surface, or the requested mode when closed."""
        if self.surface is not None:
            return self.surface.get_size()
        return self.mode

    @property
    def is_open(self) -> bool:
        return self.surface is not None and pygame.display.get_init()

    def _require_surface(self) -> pygame.Surface:
        if not self.is_open:
            raise RuntimeError("window is not open")
        return self.surface

    def create(self) -> None:
        """Open the display with the current mode, title and fullscreen setting."""
        pygame.display.init()
        flags = pygame.FULLSCREEN if self.fullscreen else pygame.RESIZABLE
        self.surface = pygame.display.set_mode(self.mode, flags)
        pygame.display.set_caption(self.title)
        pygame.mouse.set_visible(self.cursor_visible)

    def destroy(self) -> None:
        """Close the display."""
        if self.surface is not None:
            pygame.display.quit()
            self.surface = None

    def poll_events(self) -> list[pygame.event.Event]:
        """All events waiting in the queue; none once the window is closed."""
        if not self.is_open:
            return []
        return pygame.event.get()

    def clear(self, color=BLACK) -> None:
        self._require_surface().fill(color)

    def present(self) -> None:
        """Show the frame that was drawn and keep to the frame-rate limit."""
        self._require_surface()
        pygame.display.flip()
        if self.framerate:
            self._clock.tick(self.framerate)

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self.destroy()
        self.create()

    def change_resolution(self, width: int, height: int) -> None:
        self.mode = (int(width), int(height))
        self.destroy()
        self.create()

    def show_cursor(self) -> None:
        self.cursor_visible = True
        if self.is_open:
            pygame.mouse.set_visible(True)

    def hide_cursor(self) -> None:
        self.cursor_visible = False
        if self.is_open:
            pygame.mouse.set_visible(False)