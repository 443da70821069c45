"""Map elements and the export formats a map can be written in."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum


class ExportFormat(IntEnum):
    """How the tile layout of a map file is written."""

    BASIC = 0
    ADVANCED = 1


@dataclass(frozen=True)
class Element:
    """A tile placed on the map: a texture path plus its world and grid position."""

    path: str
    position: tuple[float, float] = (0.0, 0.0)
    grid_position: tuple[int, int] = (0, 0)

    def moved_to(self, position, grid_position) -> Element:
        """Return a copy of this element at a new world and grid position."""
        x, y = position
        gx, gy = grid_position
        return replace(
            self,
            position=(float(x), float(y)),
            grid_position=(int(gx), int(gy)),
        )