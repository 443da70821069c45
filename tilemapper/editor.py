"""Editing logic of the map editor: placing tiles, the palette, the camera and the grid."""

from __future__ import annotations

import logging
import math
import os
import subprocess
import sys
from pathlib import Path

from .element import Element
from .input import InputAction, InputManager
from .mapfile import BLOCK_SIZE, DEFAULT_RESOURCES
from .states import Data

logger = logging.getLogger(__name__)

CAMERA_STEP = BLOCK_SIZE / 64.0


def _adjust(value: float) -> float:
    return value - BLOCK_SIZE if value <= 0 else value


def _snap(value: float) -> float:
    return value - math.fmod(int(value), int(BLOCK_SIZE))


def cell_at(x: float, y: float) -> tuple[int, int]:
    """The grid cell holding a world point; zero and below fall to the cell before."""
    return int(_adjust(x) / BLOCK_SIZE), int(_adjust(y) / BLOCK_SIZE)


def texture_candidates(texture_path: str, profile_assets_path: str = "") -> list[str]:
    """Paths to try, in order, when the editor looks for a palette texture."""
    file_name = Path(texture_path).name
    candidates = [str(texture_path), f"{DEFAULT_RESOURCES}/{file_name}"]
    if profile_assets_path:
        candidates.append(f"{profile_assets_path}/{file_name}")
    return candidates


def _grid_start(offset: float) -> float:
    return -math.fmod(int(offset * 100.0), int(BLOCK_SIZE * 100.0)) / 100.0


def grid_lines(offset, width: float, height: float) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    """Line segments of the grid over a view of the given size, horizontal ones first."""
    ox, oy = offset
    lines = []
    y = _grid_start(oy)
    while y < height:
        lines.append(((0.0, y), (float(width), y)))
        y += BLOCK_SIZE
    x = _grid_start(ox)
    while x < width:
        lines.append(((x, 0.0), (x, float(height))))
        x += BLOCK_SIZE
    return lines


class EditorModel:
    """The editor's state apart from drawing: palette, selection, camera and grid."""

    def __init__(self, data: Data) -> None:
        self.data = data
        self.palette: list[Element] = []
        self.selected: Element | None = None
        self.camera: tuple[float, float] = (0.0, 0.0)
        self.zoom = 1.0
        self.grid_active = True

    @property
    def grid_label(self) -> str:
        return "Grid: ON" if self.grid_active else "Grid: OFF"

    def _world(self, x: float, y: float) -> tuple[float, float]:
        return x + self.camera[0], y + self.camera[1]

    def load_textures(self, default_dir: str = DEFAULT_RESOURCES) -> list[Element]:
        """Fill the palette from the default folder, then the profile's assets folder."""
        self.palette = []
        self.selected = None
        for folder in (default_dir, self.data.profile.assets_path):
            if not folder or not os.path.isdir(folder):
                continue
            self.palette.extend(Element(str(entry)) for entry in sorted(Path(folder).iterdir()))
        return self.palette

    def select(self, index: int | None) -> Element | None:
        """Select a palette entry, or clear the selection with None."""
        self.selected = None if index is None else self.palette[index]
        return self.selected

    def place_at(self, x: float, y: float) -> Element | None:
        """Place the selected tile under a view point; gives the placed element."""
        if self.selected is None:
            return None
        wx, wy = (_adjust(v) for v in self._world(x, y))
        element = self.selected.moved_to(
            (_snap(wx), _snap(wy)),
            (int(wx / BLOCK_SIZE), int(wy / BLOCK_SIZE)),
        )
        self.data.map.add_element(element)
        return element

    def remove_at(self, x: float, y: float) -> None:
        """Remove every tile in the cell under a view point."""
        self.data.map.remove_element(cell_at(*self._world(x, y)))

    def phantom_cell(self, x: float, y: float) -> tuple[float, float] | None:
        """World position of the preview tile under a view point, if a tile is selected."""
        if self.selected is None:
            return None
        gx, gy = cell_at(*self._world(x, y))
        return gx * BLOCK_SIZE, gy * BLOCK_SIZE

    def move(self, input_manager: InputManager) -> tuple[float, float]:
        """Move the camera by one step for each active movement action."""
        x, y = self.camera
        if input_manager.is_active(InputAction.MOVE_LEFT):
            x -= CAMERA_STEP
        if input_manager.is_active(InputAction.MOVE_RIGHT):
            x += CAMERA_STEP
        if input_manager.is_active(InputAction.MOVE_DOWN):
            y += CAMERA_STEP
        if input_manager.is_active(InputAction.MOVE_UP):
            y -= CAMERA_STEP
        self.camera = (x, y)
        return self.camera

    def toggle_grid(self) -> bool:
        self.grid_active = not self.grid_active
        return self.grid_active

    def save(self) -> str:
        """Save the map; if its path moved, record the new path in the profile."""
        old_path = self.data.map.path
        self.data.map.save()
        new_path = self.data.map.path
        if old_path != new_path:
            self.data.profile.update_map_path(old_path, new_path)
            self.data.profile.save()
        return new_path

    def open_assets_folder(self) -> int | None:
        """Open the profile's assets folder in the system file browser."""
        opener = "explorer" if sys.platform == "win32" else "xdg-open"
        try:
            return subprocess.run([opener, self.data.profile.assets_path], check=False).returncode
        except OSError as exc:
            logger.warning("could not open %s: %s", self.data.profile.assets_path, exc)
            return None