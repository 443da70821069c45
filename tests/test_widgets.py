import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from tilemapper.widgets import (
    BLACK,
    WHITE,
    Button,
    EditorView,
    Label,
    TextInput,
    Widget,
    create_button,
)


@pytest.fixture(autouse=True)
def fonts():
    pygame.font.init()
    yield


def font_source(size):
    return pygame.font.Font(None, size)


def click(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos)


def test_pixel_rect():
    widget = Widget(position=(10, 20), size=(30, 40))
    assert widget.rect((800, 600)) == pygame.Rect(10, 20, 30, 40)


def test_percent_rect():
    widget = Widget(position=(50, 50), size=(25, 25), position_percent=(True, True), size_percent=(True, True))
    assert widget.rect((800, 600)) == pygame.Rect(400, 300, 200, 150)


def test_contains():
    widget = Widget(position=(10, 10), size=(20, 20))
    assert widget.contains((15, 15), (100, 100))
    assert not widget.contains((50, 50), (100, 100))


def test_children_stack_below_each_other():
    panel = Widget(position=(10, 10), size=(200, 300), content_offset=(5, 5))
    first = panel.add(Widget(size=(50, 30)))
    second = panel.add(Widget(size=(50, 30)))
    r1 = first.rect((800, 600))
    r2 = second.rect((800, 600))
    assert r1.top >= panel.rect((800, 600)).top
    assert r2.top >= r1.bottom
    assert r1.left == r2.left


def test_create_button_style():
    button = create_button("Back", (100, 40), (1, 94), None)
    assert button.text == "Back"
    assert button.background == WHITE
    assert button.outline_color == BLACK
    assert button.outline_thickness == 1.0
    assert button.hover_outline == 3.0
    assert button.text_size == 15
    assert button.text_offset == (10.0, 5.0)


def test_button_click_inside_and_outside():
    clicks = []
    button = create_button("Go", (100, 40), (0, 0), lambda: clicks.append(1))
    assert button.handle_event(click((50, 20)), (800, 600)) is True
    assert button.handle_event(click((500, 500)), (800, 600)) is False
    assert clicks == [1]


def test_disabled_button_ignores_click():
    clicks = []
    button = create_button("Go", (100, 40), (0, 0), lambda: clicks.append(1))
    button.disabled = True
    assert button.handle_event(click((50, 20)), (800, 600)) is False
    assert clicks == []


def test_button_hover():
    button = create_button("Go", (100, 40), (0, 0), None)
    button.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(10, 10)), (800, 600))
    assert button.hovered is True
    button.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(300, 300)), (800, 600))
    assert button.hovered is False


def test_button_draw_outline_and_background():
    surface = pygame.Surface((200, 100))
    surface.fill((7, 7, 7))
    button = create_button("OK", (100, 40), (0, 0), None)
    button.draw(surface, font_source)
    assert tuple(surface.get_at((0, 0)))[:3] == BLACK
    assert tuple(surface.get_at((95, 35)))[:3] == WHITE
    assert tuple(surface.get_at((150, 80)))[:3] == (7, 7, 7)


def test_label_draw_background():
    surface = pygame.Surface((100, 100))
    label = Label(text="hello world", size=(50, 50), background=(1, 2, 3))
    label.draw(surface, font_source)
    assert tuple(surface.get_at((49, 49)))[:3] == (1, 2, 3)


def test_text_input_typing():
    field = TextInput(size=(100, 30), text="ab", max_length=4)
    assert field.handle_event(click((10, 10)), (800, 600)) is True
    assert field.focused
    field.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="cdef"), (800, 600))
    assert field.text == "abcd"
    field.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_BACKSPACE), (800, 600))
    assert field.text == "abc"


def test_text_input_unfocused_ignores_text():
    field = TextInput(size=(100, 30), text="ab")
    field.handle_event(click((500, 500)), (800, 600))
    assert field.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="x"), (800, 600)) is False
    assert field.text == "ab"


def test_editor_view_viewport():
    view = EditorView()
    assert view.viewport((1000, 1000)) == pytest.approx((0.02, 0.05, 0.70, 0.85))


def test_editor_view_to_world():
    view = EditorView()
    inside = view.rect((800, 600)).center
    assert view.to_world(inside, (800, 600), (30.0, -10.0)) == (inside[0] + 30.0, inside[1] - 10.0)
    assert view.to_world((799, 599), (800, 600), (0.0, 0.0)) is None


def test_editor_view_click_listeners():
    left, right = [], []
    view = EditorView(on_left_click=left.append, on_right_click=right.append)
    point = view.rect((800, 600)).center
    assert view.handle_event(click(point, 1), (800, 600))
    assert view.handle_event(click(point, 3), (800, 600))
    assert left == [point]
    assert right == [point]


def test_button_is_widget_child():
    panel = Widget(size=(300, 300))
    clicks = []
    panel.add(Button(size=(50, 50), on_click=lambda: clicks.append("hit")))
    assert panel.handle_event(click((10, 10)), (800, 600)) is True
    assert clicks == ["hit"]