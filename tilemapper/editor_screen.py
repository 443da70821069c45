"""The map editor screen: the map view, the texture palette and the editor's buttons."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial

import pygame

from .editor import EditorModel, grid_lines, texture_candidates
from .input import InputManager
from .mapfile import BLOCK_SIZE, DEFAULT_RESOURCES
from .resources import ResourceCache
from .states import Data, State, StateAction
from .widgets import BLACK, FONT_PATH, ITEM_GAP, WHITE, Button, EditorView, Widget, create_button

BACKGROUND = (100, 100, 100)
PANEL_COLOR = (130, 130, 130)
PREVIEW_OUTLINE = (125, 125, 125)
GRID_COLOR = WHITE
PHANTOM_ALPHA = 100
TILE_SIZE = (50, 50)
PREVIEW_SIZE = (60, 60)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _FlowButton(Button):
    """A button laid out left to right in its parent, wrapping at the parent's width."""

    def rect(self, window_size) -> pygame.Rect:
        if self.parent is None:
            return super().rect(window_size)
        base = self.parent.rect(window_size)
        ox, oy = self.parent.content_offset
        available = base.w - ox
        x = y = row_height = 0.0
        for sibling in self.parent.children:
            width, height = sibling.size
            if x > 0 and x + width > available:
                x = 0.0
                y += row_height + ITEM_GAP
                row_height = 0.0
            if sibling is self:
                return pygame.Rect(round(base.x + ox + x), round(base.y + oy + y), round(width), round(height))
            x += width + ITEM_GAP
            row_height = max(row_height, height)
        return super().rect(window_size)


@dataclass(eq=False)
class _TextureTile(_FlowButton):
    """A palette entry showing its texture."""

    texture: pygame.Surface | None = field(default=None, repr=False)

    def draw(self, surface, font) -> None:
        if self.disabled:
            return
        rect = self.rect(surface.get_size())
        if self.texture is not None:
            surface.blit(pygame.transform.scale(self.texture, rect.size), rect.topleft)
        thickness = self.hover_outline if self.hovered and self.hover_outline is not None else self.outline_thickness
        self._draw_frame(surface, rect, thickness)


@dataclass(eq=False)
class _Preview(Widget):
    """Shows the texture of the selected element."""

    texture: pygame.Surface | None = field(default=None, repr=False)

    def draw(self, surface, font) -> None:
        if self.disabled:
            return
        rect = self.rect(surface.get_size())
        self._draw_frame(surface, rect, self.outline_thickness)
        if self.texture is not None:
            image = pygame.transform.scale(self.texture, PREVIEW_SIZE)
            surface.blit(image, (rect.x + self.content_offset[0], rect.y + self.content_offset[1]))


def _flow_button(text: str, size, on_click, cls=_FlowButton, **extra) -> _FlowButton:
    return cls(
        text=text,
        size=tuple(size),
        background=WHITE,
        outline_color=BLACK,
        outline_thickness=1.0,
        hover_outline=3.0,
        text_color=BLACK,
        text_size=15,
        text_offset=(10.0, 5.0),
        on_click=on_click,
        **extra,
    )


class EditorState(State):
    """Edits the current map of the current profile."""

    def __init__(
        self,
        window,
        resources: ResourceCache | None = None,
        default_dir: str = DEFAULT_RESOURCES,
    ) -> None:
        super().__init__(window)
        self.resources = resources or ResourceCache()
        self.default_dir = str(default_dir)
        self.input_manager = InputManager()
        self.model: EditorModel | None = None
        self.widgets: list[Widget] = []
        self.view: EditorView | None = None
        self.options: Widget | None = None
        self.textures_panel: Widget | None = None
        self.palette_tiles: list[_TextureTile] = []
        self.preview: _Preview | None = None
        self.grid_button: Button | None = None
        self.load_button: Button | None = None
        self.open_folder_button: Button | None = None
        self.back_button: Button | None = None
        self.save_button: Button | None = None
        self.settings_button: Button | None = None
        self._previous = None

    def init(self, data: Data) -> None:
        super().init(data)
        self.window.show_cursor()
        self.model = EditorModel(data)
        self._previous = None
        self._build()
        self.input_manager.load_default_key_bindings()

    # Building the interface

    def _build(self) -> None:
        self.view = EditorView(on_left_click=self._place, on_right_click=self._remove)

        self.options = Widget(
            position=(75, 5),
            size=(23, 90),
            position_percent=(True, True),
            size_percent=(True, True),
            content_offset=(10, 5),
            background=PANEL_COLOR,
            outline_thickness=1.0,
        )
        self.textures_panel = self.options.add(
            Widget(
                size=(95, 40),
                size_percent=(True, True),
                content_offset=(10, 5),
                background=PANEL_COLOR,
                outline_thickness=1.0,
            )
        )
        self._reload_textures()

        loader = self.options.add(Widget(size=(95, 50), size_percent=(True, False)))
        self.load_button = loader.add(_flow_button("Load", (50, 30), self._reload_textures))
        self.open_folder_button = loader.add(_flow_button("Open folder", (70, 30), self._open_folder))
        for button in (self.load_button, self.open_folder_button):
            button.text_size = 10

        self.preview = self.options.add(
            _Preview(
                size=(95, 30),
                size_percent=(True, True),
                outline_color=PREVIEW_OUTLINE,
                outline_thickness=1.0,
                content_offset=(5, 0),
            )
        )

        self.grid_button = self.options.add(
            create_button(self.model.grid_label, (70, 30), (0, 94), self._toggle_grid)
        )

        self.back_button = create_button("Back", (100, 40), (1, 94), self.go_back)
        self.save_button = create_button("Save", (100, 40), (10, 94), self._save)
        self.settings_button = create_button("Settings", (100, 40), (20, 94), self.open_settings)
        for button in (self.back_button, self.save_button, self.settings_button):
            button.position_percent = (True, True)

        self.widgets = [self.view, self.options, self.back_button, self.save_button, self.settings_button]

    def _texture_for(self, path: str) -> pygame.Surface | None:
        return self.resources.first_texture(texture_candidates(path, self.data.profile.assets_path))

    def _reload_textures(self) -> None:
        palette = self.model.load_textures(self.default_dir)
        self.textures_panel.children = []
        self.palette_tiles = []
        for index, element in enumerate(palette):
            tile = _flow_button(
                "",
                TILE_SIZE,
                partial(self._select, index),
                cls=_TextureTile,
                texture=self._texture_for(element.path),
            )
            tile.outline_thickness = 0.0
            tile.hover_outline = 1.0
            self.textures_panel.add(tile)
            self.palette_tiles.append(tile)

    # Actions

    def _select(self, index: int) -> None:
        self.model.select(index)

    def _place(self, pos) -> None:
        self.model.place_at(*pos)

    def _remove(self, pos) -> None:
        self.model.remove_at(*pos)

    def _toggle_grid(self) -> None:
        self.model.toggle_grid()
        self.grid_button.text = self.model.grid_label

    def _save(self) -> None:
        self.model.save()

    def _open_folder(self) -> None:
        self.model.open_assets_folder()

    def go_back(self) -> None:
        self.finish(StateAction.POP)

    def open_settings(self) -> None:
        self.finish(StateAction.EDITOR_SETTINGS)

    # Loop

    def handle_events(self) -> None:
        for event in self.window.poll_events():
            self.input_manager.handle_input(event)
            size = self.window.size
            for widget in reversed(self.widgets):
                if widget.handle_event(event, size):
                    break
            if event.type == pygame.QUIT or (
                event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
            ):
                self.active = False

    def update(self) -> None:
        selected = self.model.selected
        if selected is not None and selected is not self._previous:
            self.preview.texture = self._texture_for(selected.path)
            logger.info("selected %s", selected.path)
            self._previous = selected
        self.model.move(self.input_manager)

    def _font(self, size: int):
        return self.resources.load_font(FONT_PATH, size)

    @staticmethod
    def _mouse_position():
        if not pygame.display.get_init():
            return None
        return pygame.mouse.get_pos()

    @staticmethod
    def _block(texture: pygame.Surface) -> pygame.Surface:
        side = int(BLOCK_SIZE)
        return pygame.transform.scale(texture, (side, side))

    def _draw_map(self, surface) -> None:
        cx, cy = self.model.camera
        game_map = self.data.map
        assets = self.data.profile.assets_path
        for element in game_map.elements:
            texture = self.resources.first_texture(game_map.texture_candidates(element.path, assets))
            if texture is None:
                continue
            gx, gy = element.grid_position
            surface.blit(self._block(texture), (round(gx * BLOCK_SIZE - cx), round(gy * BLOCK_SIZE - cy)))

    def _draw_phantom(self, surface) -> None:
        pos = self._mouse_position()
        if pos is None or self.model.selected is None:
            return
        cell = self.model.phantom_cell(*pos)
        texture = self._texture_for(self.model.selected.path)
        if cell is None or texture is None:
            return
        image = self._block(texture).copy()
        image.set_alpha(PHANTOM_ALPHA)
        cx, cy = self.model.camera
        surface.blit(image, (round(cell[0] - cx), round(cell[1] - cy)))

    def render(self) -> None:
        surface = self.window.surface
        size = surface.get_size()
        self.window.clear(BACKGROUND)
        for widget in self.widgets:
            widget.draw(surface, self._font)
        previous_clip = surface.get_clip()
        surface.set_clip(self.view.rect(size).clip(previous_clip))
        self._draw_map(surface)
        self._draw_phantom(surface)
        if self.model.grid_active:
            for start, end in grid_lines(self.model.camera, *size):
                pygame.draw.line(surface, GRID_COLOR, start, end)
        surface.set_clip(previous_clip)
        self.window.present()