"""Minimal widgets: panels, buttons, labels, text inputs and the editor viewport."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field

import pygame

FONT_PATH = "assets/fonts/Roboto-Regular.ttf"
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
ITEM_GAP = 5

FontSource = Callable[[int], "pygame.font.Font"]


def _scale(value: float, percent: bool, base: float) -> float:
    return value * base / 100.0 if percent else value


def _wrap(font: pygame.font.Font, text: str, width: float) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _blit_lines(surface, font, lines, color, rect, offset) -> None:
    previous = surface.get_clip()
    surface.set_clip(rect.clip(previous))
    x = rect.x + offset[0]
    y = rect.y + offset[1]
    for line in lines:
        if line:
            surface.blit(font.render(line, True, color), (x, y))
        y += font.get_linesize()
    surface.set_clip(previous)


@dataclass(eq=False)
class Widget:
    """A rectangle placed in pixels or in percent of its parent; children stack vertically."""

    position: tuple[float, float] = (0.0, 0.0)
    size: tuple[float, float] = (0.0, 0.0)
    position_percent: tuple[bool, bool] = (False, False)
    size_percent: tuple[bool, bool] = (False, False)
    background: tuple[int, ...] | None = None
    outline_color: tuple[int, ...] = BLACK
    outline_thickness: float = 0.0
    content_offset: tuple[float, float] = (0.0, 0.0)
    disabled: bool = False
    children: list[Widget] = field(default_factory=list, repr=False)
    parent: Widget | None = field(default=None, repr=False)

    def add(self, child: Widget) -> Widget:
        """Append a child below the ones already added."""
        child.parent = self
        self.children.append(child)
        return child

    def _extent(self, base_width: float, base_height: float) -> tuple[float, float]:
        return (
            _scale(self.size[0], self.size_percent[0], base_width),
            _scale(self.size[1], self.size_percent[1], base_height),
        )

    def rect(self, window_size) -> pygame.Rect:
        """Pixel rectangle of the widget in a window of the given size."""
        if self.parent is None:
            left, top = 0.0, 0.0
            width, height = window_size
            dx = dy = 0.0
        else:
            base = self.parent.rect(window_size)
            left, top, width, height = base.x, base.y, base.w, base.h
            dx, dy = self.parent.content_offset
            for sibling in self.parent.children:
                if sibling is self:
                    break
                if not sibling.disabled:
                    dy += sibling._extent(width, height)[1] + ITEM_GAP
        w, h = self._extent(width, height)
        x = left + dx + _scale(self.position[0], self.position_percent[0], width)
        y = top + dy + _scale(self.position[1], self.position_percent[1], height)
        return pygame.Rect(round(x), round(y), round(w), round(h))

    def contains(self, point, window_size) -> bool:
        return bool(self.rect(window_size).collidepoint(point))

    def handle_event(self, event, window_size) -> bool:
        """Offer an event to the children, topmost first; True if one used it."""
        if self.disabled:
            return False
        for child in reversed(self.children):
            if child.handle_event(event, window_size):
                return True
        return False

    def _draw_frame(self, surface, rect, thickness: float) -> None:
        if self.background is not None:
            surface.fill(self.background[:3], rect)
        if thickness > 0:
            pygame.draw.rect(surface, self.outline_color, rect, max(1, math.ceil(thickness)))

    def draw(self, surface, font: FontSource) -> None:
        """Draw the widget and its children; font gives a font for a point size."""
        if self.disabled:
            return
        self._draw_frame(surface, self.rect(surface.get_size()), self.outline_thickness)
        for child in self.children:
            child.draw(surface, font)


@dataclass(eq=False)
class Button(Widget):
    """A clickable box with a line of text."""

    text: str = ""
    on_click: Callable[[], object] | None = None
    text_color: tuple[int, ...] = BLACK
    text_size: int = 15
    text_offset: tuple[float, float] = (10.0, 5.0)
    hover_outline: float | None = None
    hovered: bool = False

    def handle_event(self, event, window_size) -> bool:
        """Track hovering and run on_click on a left click inside the button."""
        if self.disabled:
            return False
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.contains(event.pos, window_size)
            return False
        if (
            event.type == pygame.MOUSEBUTTONDOWN
            and event.button == 1
            and self.contains(event.pos, window_size)
        ):
            if self.on_click is not None:
                self.on_click()
            return True
        return False

    def draw(self, surface, font: FontSource) -> None:
        if self.disabled:
            return
        rect = self.rect(surface.get_size())
        thickness = self.outline_thickness
        if self.hovered and self.hover_outline is not None:
            thickness = self.hover_outline
        self._draw_frame(surface, rect, thickness)
        _blit_lines(surface, font(self.text_size), [self.text], self.text_color, rect, self.text_offset)


@dataclass(eq=False)
class Label(Widget):
    """Static text, wrapped to the widget's width."""

    text: str = ""
    text_color: tuple[int, ...] = WHITE
    text_size: int = 18
    text_offset: tuple[float, float] = (0.0, 0.0)

    def draw(self, surface, font: FontSource) -> None:
        if self.disabled:
            return
        rect = self.rect(surface.get_size())
        self._draw_frame(surface, rect, self.outline_thickness)
        face = font(self.text_size)
        lines = _wrap(face, self.text, rect.width - self.text_offset[0])
        _blit_lines(surface, face, lines, self.text_color, rect, self.text_offset)


@dataclass(eq=False)
class TextInput(Widget):
    """An editable single line of text with a length limit."""

    text: str = ""
    max_length: int = 20
    focused: bool = False
    background: tuple[int, ...] | None = WHITE
    outline_thickness: float = 1.0
    text_color: tuple[int, ...] = BLACK
    text_size: int = 18
    text_offset: tuple[float, float] = (5.0, 5.0)

    def handle_event(self, event, window_size) -> bool:
        """Focus on click; while focused, take typed text and backspace."""
        if self.disabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.focused = self.contains(event.pos, window_size)
            return self.focused
        if not self.focused:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
            return True
        if event.type == pygame.TEXTINPUT:
            room = max(0, self.max_length - len(self.text))
            self.text += event.text[:room]
            return True
        return False

    def draw(self, surface, font: FontSource) -> None:
        if self.disabled:
            return
        rect = self.rect(surface.get_size())
        self._draw_frame(surface, rect, self.outline_thickness)
        _blit_lines(surface, font(self.text_size), [self.text], self.text_color, rect, self.text_offset)


@dataclass(eq=False)
class EditorView(Widget):
    """The area of the window in which the map is shown and edited."""

    position: tuple[float, float] = (2.0, 5.0)
    size: tuple[float, float] = (70.0, 85.0)
    position_percent: tuple[bool, bool] = (True, True)
    size_percent: tuple[bool, bool] = (True, True)
    background: tuple[int, ...] | None = BLACK
    on_left_click: Callable[[tuple[int, int]], object] | None = None
    on_right_click: Callable[[tuple[int, int]], object] | None = None

    def viewport(self, window_size) -> tuple[float, float, float, float]:
        """The view's rectangle as fractions of the window: left, top, width, height."""
        rect = self.rect(window_size)
        width, height = window_size
        return rect.x / width, rect.y / height, rect.w / width, rect.h / height

    def to_world(self, point, window_size, camera) -> tuple[float, float] | None:
        """World coordinates under a window point, or None outside the view."""
        if not self.contains(point, window_size):
            return None
        return point[0] + camera[0], point[1] + camera[1]

    def handle_event(self, event, window_size) -> bool:
        if self.disabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and self.contains(event.pos, window_size):
            if event.button == 1 and self.on_left_click is not None:
                self.on_left_click(event.pos)
            elif event.button == 3 and self.on_right_click is not None:
                self.on_right_click(event.pos)
            return True
        return False


def create_button(text: str, size, position, on_click: Callable[[], object] | None) -> Button:
    """A white button with a thin black outline that thickens while hovered."""
    return Button(
        text=text,
        size=tuple(size),
        position=tuple(position),
        background=WHITE,
        outline_color=BLACK,
        outline_thickness=1.0,
        hover_outline=3.0,
        text_color=BLACK,
        text_size=15,
        text_offset=(10.0, 5.0),
        on_click=on_click,
    )