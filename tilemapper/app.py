"""Entry point: open the window and run the screens."""

from __future__ import annotations

import argparse

import pygame

from .editor_screen import EditorState
from .menu import MenuState
from .profile_screen import ProfileState
from .settings import EditorSettingsState, SettingsState
from .states import StateAction, StateManager
from .window import Window

FRAMERATE = 60


def build_state_manager(window) -> StateManager:
    """A state manager that starts at the menu and knows every screen."""
    factories = {
        StateAction.MENU: MenuState,
        StateAction.PROFILE: ProfileState,
        StateAction.EDITOR: EditorState,
        StateAction.OPTIONS: SettingsState,
        StateAction.EDITOR_SETTINGS: EditorSettingsState,
    }
    return StateManager(window, factories, StateAction.MENU)


def main(argv=None) -> int:
    """Run the map builder until its last screen closes."""
    parser = argparse.ArgumentParser(
        prog="tilemapper",
        description="Build tile maps, grouped into profiles.",
    )
    parser.parse_args(argv)
    pygame.init()
    try:
        window = Window()
        window.framerate = FRAMERATE
        build_state_manager(window).run()
    finally:
        pygame.quit()
    return 0