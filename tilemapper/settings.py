"""The general settings screen and the editor's settings screen."""

from __future__ import annotations

from functools import partial

import pygame

from .element import ExportFormat
from .resources import ResourceCache
from .states import Data, State, StateAction
from .widgets import FONT_PATH, Button, Label, Widget, create_button

BACKGROUND = (100, 100, 100)


class _GuiScreen(State):
    def __init__(self, window, resources: ResourceCache | None = None) -> None:
        super().__init__(window)
        self.resources = resources or ResourceCache()
        self.widgets: list[Widget] = []
        self.back_button: Button | None = None

    def _prepare(self, data: Data) -> None:
        State.init(self, data)
        self.window.show_cursor()
        self.back_button = create_button("Back", (100, 40), (1, 94), partial(self.finish, StateAction.POP))
        self.back_button.position_percent = (True, True)
        self.widgets = [self.back_button]

    def _dispatch_events(self) -> None:
        for event in self.window.poll_events():
            size = self.window.size
            for widget in reversed(self.widgets):
                if widget.handle_event(event, size):
                    break
            if event.type == pygame.QUIT or (
                event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
            ):
                self.active = False

    def _font(self, size: int):
        return self.resources.load_font(FONT_PATH, size)

    def _draw(self) -> None:
        self.window.clear(BACKGROUND)
        for widget in self.widgets:
            widget.draw(self.window.surface, self._font)
        self.window.present()


class SettingsState(_GuiScreen):
    """Application settings; for now only a way back."""

    def init(self, data: Data) -> None:
        self._prepare(data)

    def handle_events(self) -> None:
        self._dispatch_events()

    def update(self) -> None:
        pass

    def render(self) -> None:
        self._draw()


class EditorSettingsState(_GuiScreen):
    """Settings of the map being edited: its export format."""

    def __init__(self, window, resources: ResourceCache | None = None) -> None:
        super().__init__(window, resources)
        self.format_button: Button | None = None

    def init(self, data: Data) -> None:
        self._prepare(data)
        panel = Widget(
            position=(1, 1),
            size=(80, 80),
            position_percent=(True, True),
            size_percent=(True, True),
            content_offset=(5, 5),
        )
        panel.add(Label(text="Toggle format:", size=(150, 20), text_size=18))
        self.format_button = panel.add(
            create_button(data.map.format.name, (100, 40), (0, 0), self.toggle_format)
        )
        self.widgets = [panel, self.back_button]

    def toggle_format(self) -> ExportFormat:
        """Switch the map between the basic and the advanced format."""
        current = self.data.map.format
        new = ExportFormat.ADVANCED if current is ExportFormat.BASIC else ExportFormat.BASIC
        self.data.map.format = new
        if self.format_button is not None:
            self.format_button.text = new.name
        return new

    def handle_events(self) -> None:
        self._dispatch_events()

    def update(self) -> None:
        pass

    def render(self) -> None:
        self._draw()