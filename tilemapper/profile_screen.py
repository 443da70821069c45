"""The profile screen: rename the profile, open or create its maps, or delete it."""

from __future__ import annotations

from functools import partial

import pygame

from .mapfile import MAP_PATH, Map, create_new_map
from .resources import ResourceCache
from .states import Data, State, StateAction
from .widgets import BLACK, FONT_PATH, Button, Label, TextInput, Widget, create_button

BACKGROUND = (100, 100, 100)
CONFIRM_COLOR = (130, 130, 130)
MAX_NAME_LENGTH = 20


class ProfileState(State):
    """Shows the current profile and the maps that belong to it."""

    def __init__(self, window, maps_dir: str = MAP_PATH, resources: ResourceCache | None = None) -> None:
        super().__init__(window)
        self.maps_dir = str(maps_dir)
        self.resources = resources or ResourceCache()
        self.widgets: list[Widget] = []
        self.name_input: TextInput | None = None
        self.map_buttons: list[Button] = []
        self.back_button: Button | None = None
        self.save_button: Button | None = None
        self.create_button: Button | None = None
        self.delete_button: Button | None = None
        self.confirm_box: Widget | None = None
        self.confirm_delete_button: Button | None = None
        self.cancel_button: Button | None = None

    def init(self, data: Data) -> None:
        super().init(data)
        self.window.show_cursor()
        self._build()

    @staticmethod
    def _percent_placed(button: Button) -> Button:
        button.position_percent = (True, True)
        return button

    def _build(self) -> None:
        profile = self.data.profile
        self.name_input = TextInput(
            text=profile.name,
            max_length=MAX_NAME_LENGTH,
            position=(10, 70),
            size=(400, 40),
        )
        self.back_button = self._percent_placed(
            create_button("Back", (100, 40), (1, 94), partial(self.finish, StateAction.POP))
        )

        map_list = Widget(position=(10, 120), size=(400, 600), outline_thickness=1.0, content_offset=(5, 0))
        self.map_buttons = []
        for path in profile.maps:
            loaded = Map(path)
            button = create_button(loaded.name, (90, 5), (0, 0), partial(self.open_map, loaded))
            button.size_percent = (True, True)
            map_list.add(button)
            self.map_buttons.append(button)

        self.save_button = self._percent_placed(create_button("Save", (100, 40), (10, 94), self.save_profile))
        self.create_button = self._percent_placed(
            create_button("Create new map", (200, 40), (1, 85), self.create_map)
        )

        self.confirm_box = Widget(
            position=(30, 30),
            size=(30, 20),
            position_percent=(True, True),
            size_percent=(True, True),
            background=CONFIRM_COLOR,
            outline_thickness=1.0,
            disabled=True,
        )
        self.confirm_box.add(Label(text="Are you sure?", size=(200, 30), text_size=18, text_color=BLACK))
        self.cancel_button = self.confirm_box.add(create_button("Cancel", (100, 40), (0, 0), self.cancel_delete))
        self.confirm_delete_button = self.confirm_box.add(
            create_button("Delete", (100, 40), (0, 0), self.confirm_delete)
        )
        self.delete_button = self._percent_placed(
            create_button("Delete", (100, 40), (90, 94), self.request_delete)
        )

        self.widgets = [
            self.name_input,
            self.back_button,
            map_list,
            self.save_button,
            self.create_button,
            self.delete_button,
            self.confirm_box,
        ]

    def open_map(self, map_: Map) -> None:
        """Make a map current and go to the editor."""
        self.data.map = map_
        self.finish(StateAction.EDITOR)

    def save_profile(self) -> None:
        """Take the edited name and write the profile."""
        if self.name_input is not None:
            self.data.profile.name = self.name_input.text
        self.data.profile.save()

    def create_map(self) -> Map:
        """Create a new map, add it to the profile and open it in the editor."""
        new_map = create_new_map(self.maps_dir)
        self.data.profile.add_map(new_map.path)
        self.data.profile.save()
        self.data.map = new_map
        self.finish(StateAction.EDITOR)
        return new_map

    def request_delete(self) -> None:
        """Show the confirmation box."""
        if self.confirm_box is not None:
            self.confirm_box.disabled = False

    def cancel_delete(self) -> None:
        if self.confirm_box is not None:
            self.confirm_box.disabled = True

    def confirm_delete(self) -> None:
        """Delete the profile with its assets and maps, then go back."""
        self.cancel_delete()
        self.data.profile.delete()
        self.finish(StateAction.POP)

    def handle_events(self) -> None:
        for event in self.window.poll_events():
            size = self.window.size
            for widget in reversed(self.widgets):
                if widget.handle_event(event, size):
                    break
            if event.type == pygame.QUIT or (
                event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
            ):
                self.active = False

    def update(self) -> None:
        pass

    def _font(self, size: int):
        return self.resources.load_font(FONT_PATH, size)

    def render(self) -> None:
        self.window.clear(BACKGROUND)
        for widget in self.widgets:
            widget.draw(self.window.surface, self._font)
        self.window.present()