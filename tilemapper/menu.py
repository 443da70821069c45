"""The start screen: pick a profile, create one, or open the settings."""

from __future__ import annotations

from functools import partial

import pygame

from .profile import PROFILE_PATH, PROFILE_RESOURCE_PATH, Profile, create_profile, list_profiles
from .resources import ResourceCache
from .states import Data, State, StateAction
from .widgets import FONT_PATH, Button, Label, Widget, create_button

BACKGROUND = (100, 100, 100)
PANEL_COLOR = (120, 120, 120)
WELCOME = (
    "Welcome to the map builder, create or select a profile to start editing some maps..."
)


class MenuState(State):
    """Lists the saved profiles and offers the main actions."""

    def __init__(
        self,
        window,
        profiles_dir: str = PROFILE_PATH,
        assets_dir: str = PROFILE_RESOURCE_PATH,
        resources: ResourceCache | None = None,
    ) -> None:
        super().__init__(window)
        self.profiles_dir = str(profiles_dir)
        self.assets_dir = str(assets_dir)
        self.resources = resources or ResourceCache()
        self.widgets: list[Widget] = []
        self.profile_buttons: list[Button] = []
        self.settings_button: Button | None = None
        self.new_profile_button: Button | None = None

    def init(self, data: Data) -> None:
        super().init(data)
        self.window.show_cursor()
        self._build()

    def _panel(self, x: float, width: float, content_offset) -> Widget:
        return Widget(
            position=(x, 5),
            size=(width, 90),
            position_percent=(True, True),
            size_percent=(True, True),
            background=PANEL_COLOR,
            outline_thickness=1.0,
            content_offset=content_offset,
        )

    def _build(self) -> None:
        profile_list = self._panel(1, 70, (10, 5))
        self.profile_buttons = []
        for profile in list_profiles(self.profiles_dir):
            button = create_button(profile.name, (90, 5), (0, 0), partial(self.choose_profile, profile))
            button.size_percent = (True, True)
            profile_list.add(button)
            self.profile_buttons.append(button)

        menu_list = self._panel(72, 25, (20, 5))
        menu_list.add(Label(text=WELCOME, size=(90, 10), size_percent=(True, True), text_size=18))
        self.settings_button = create_button("Settings", (90, 7), (0, 0), self.open_settings)
        self.new_profile_button = create_button("Create new profile", (90, 7), (0, 0), self.create_profile)
        for button in (self.settings_button, self.new_profile_button):
            button.size_percent = (True, True)
            button.text_size = 20
            menu_list.add(button)

        self.widgets = [profile_list, menu_list]

    def choose_profile(self, profile: Profile) -> None:
        """Make a profile current and go to its screen."""
        self.data.profile = profile
        self.finish(StateAction.PROFILE)

    def create_profile(self) -> Profile:
        """Create a fresh profile, make it current and go to its screen."""
        profile = create_profile(self.profiles_dir, self.assets_dir)
        self.data.profile = profile
        self.finish(StateAction.PROFILE)
        return profile

    def open_settings(self) -> None:
        self.finish(StateAction.OPTIONS)

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