import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from tilemapper.element import ExportFormat
from tilemapper.settings import EditorSettingsState, SettingsState
from tilemapper.states import Data, StateAction


@pytest.fixture
def window():
    from tilemapper.window import Window

    win = Window(size=(800, 600))
    win.framerate = 0
    yield win
    win.destroy()


def test_settings_back_button(window):
    state = SettingsState(window)
    state.init(Data())
    assert state.back_button.text == "Back"
    state.back_button.on_click()
    assert state.return_action is StateAction.POP
    assert state.active is False


def test_settings_escape_stops(window):
    state = SettingsState(window)
    state.init(Data())
    pygame.event.clear()
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    state.handle_events()
    assert state.active is False


def test_settings_render_background(window):
    state = SettingsState(window)
    state.init(Data())
    state.render()
    assert tuple(window.surface.get_at((400, 10)))[:3] == (100, 100, 100)


def test_editor_settings_toggle_format(window):
    data = Data()
    state = EditorSettingsState(window)
    state.init(data)
    assert state.format_button.text == "BASIC"
    assert state.toggle_format() is ExportFormat.ADVANCED
    assert data.map.format is ExportFormat.ADVANCED
    assert state.format_button.text == "ADVANCED"
    state.toggle_format()
    assert data.map.format is ExportFormat.BASIC
    assert state.format_button.text == "BASIC"


def test_editor_settings_shows_current_format(window):
    data = Data()
    data.map.format = ExportFormat.ADVANCED
    state = EditorSettingsState(window)
    state.init(data)
    assert state.format_button.text == "ADVANCED"


def test_editor_settings_click_toggles(window):
    data = Data()
    state = EditorSettingsState(window)
    state.init(data)
    pygame.event.clear()
    center = state.format_button.rect(window.size).center
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=center))
    state.handle_events()
    assert data.map.format is ExportFormat.ADVANCED


def test_editor_settings_back(window):
    state = EditorSettingsState(window)
    state.init(Data())
    state.back_button.on_click()
    assert state.return_action is StateAction.POP
    assert not state.active