"""Tile maps: reading, editing and writing map files."""

from __future__ import annotations

import logging
import os
import random
import re
import shutil
import time
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path

from .element import Element, ExportFormat

MAP_PATH = "assets/maps"
DEFAULT_RESOURCES = "assets/defaultResources"
BLOCK_SIZE = 100.0

_BLANK = ord(" ")
_FIRST_SIGNATURE_OFFSET = 1 + 33
_BASIC_SIGNATURE_LIMIT = 177

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

logger = logging.getLogger(__name__)


def _leading_int(text: str) -> int:
    match = _INT_RE.match(text)
    if match is None:
        raise ValueError(f"expected an integer, got {text!r}")
    return int(match.group(1))


def _leading_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ValueError(f"expected a number, got {text!r}")
    return float(match.group(1))


def _field(line: str) -> tuple[str, str]:
    """Split ``key=value`` into the key and the value up to the next '='."""
    key, _, rest = line.partition("=")
    return key, rest.split("=", 1)[0]


def _pair(value: str) -> tuple[str, str]:
    """Split a space separated pair; a lone word stands for both halves."""
    parts = value.split(" ")
    first = parts[0]
    second = parts[1] if len(parts) > 1 else first
    return first, second


class Map:
    """A tile map with its texture signatures and placed elements."""

    def __init__(self, path: str = "") -> None:
        self.path = str(path)
        self.name = "NewMap"
        self.format = ExportFormat.BASIC
        self.elements: list[Element] = []
        self.signatures: dict[int, str] = {}
        self.maps_dir = MAP_PATH
        self.resources_dir = DEFAULT_RESOURCES
        if self.path:
            self._load()

    # Reading

    def _load(self) -> None:
        try:
            handle = open(self.path, encoding="utf-8")
        except OSError:
            return
        with handle:
            lines = (raw.removesuffix("\n") for raw in handle)
            for line in lines:
                key, value = _field(line)
                if "name" in key:
                    self.name = value
                elif "format" in key:
                    self.format = ExportFormat(_leading_int(value))
                elif "signature" in key:
                    self._read_signature(value)
                elif "map" in key:
                    if self.format is ExportFormat.BASIC:
                        self._read_basic(lines)
                    else:
                        self._read_advanced(lines)
                    break

    def _read_signature(self, value: str) -> None:
        key, texture = _pair(value)
        if self.format is ExportFormat.BASIC:
            if not key:
                raise ValueError(f"missing signature character in {value!r}")
            signature = ord(key[0])
        else:
            signature = _leading_int(key)
        self.signatures[signature] = texture

    def _read_basic(self, lines: Iterator[str]) -> None:
        for y, line in enumerate(lines, start=1):
            for x, char in enumerate(line, start=1):
                if char == " ":
                    continue
                path = self.signatures.setdefault(ord(char), "")
                self.elements.append(
                    Element(path).moved_to((x * BLOCK_SIZE, y * BLOCK_SIZE), (x, y))
                )

    def _read_advanced(self, lines: Iterator[str]) -> None:
        for line in lines:
            key, value = _field(line)
            if "elem" in key:
                path = self.signatures.setdefault(_leading_int(value), "")
                self.elements.append(Element(path))
            elif "gpos" in key:
                first, second = _pair(value)
                self._change_last(grid_position=(_leading_int(first), _leading_int(second)))
            elif "pos" in key:
                first, second = _pair(value)
                self._change_last(position=(_leading_float(first), _leading_float(second)))

    def _change_last(self, **changes) -> None:
        if not self.elements:
            raise ValueError("position given before any element")
        self.elements[-1] = replace(self.elements[-1], **changes)

    # Editing

    def add_element(self, element: Element | None) -> None:
        """Place an element, registering a signature for a texture not seen yet."""
        if element is None:
            return
        if element.path not in self.signatures.values():
            signature = len(self.signatures) + _FIRST_SIGNATURE_OFFSET
            self.signatures[signature] = element.path
        self.elements.append(element)

    def remove_element(self, grid_position) -> None:
        """Remove every element occupying the given grid cell."""
        cell = tuple(grid_position)
        self.elements = [e for e in self.elements if e.grid_position != cell]

    # Exporting

    def _signature_of(self, path: str) -> int:
        return max((key for key, value in self.signatures.items() if value == path), default=_BLANK)

    def _sort_elements(self) -> None:
        self.elements.sort(key=lambda e: (e.grid_position[1], e.grid_position[0]))

    def _normalize_elements(self) -> None:
        dx = min(0, *(e.grid_position[0] for e in self.elements))
        dy = min(0, *(e.grid_position[1] for e in self.elements))
        self.elements = [
            e.moved_to(
                (e.position[0] - dx * BLOCK_SIZE, e.position[1] - dy * BLOCK_SIZE),
                (e.grid_position[0] - dx, e.grid_position[1] - dy),
            )
            for e in self.elements
        ]

    def basic_format(self) -> str:
        """Render the layout as a character grid, one signature per cell.

        Elements sharing a cell are reduced to the one placed last.
        """
        if not self.elements:
            return ""
        self._sort_elements()
        kept = [
            current
            for current, following in zip(self.elements, self.elements[1:])
            if current.grid_position != following.grid_position
        ]
        kept.append(self.elements[-1])
        self.elements = kept

        xs = [e.grid_position[0] for e in self.elements]
        ys = [e.grid_position[1] for e in self.elements]
        pending = iter(self.elements)
        current = next(pending, None)
        rows = []
        for row in range(min(ys), max(ys) + 1):
            cells = []
            for col in range(min(xs), max(xs) + 1):
                if current is None or current.grid_position[0] > col or current.grid_position[1] > row:
                    cells.append(" ")
                else:
                    cells.append(chr(self._signature_of(current.path) & 0xFF))
                    current = next(pending, None)
            rows.append("".join(cells) + "\n")
        return "".join(rows)

    def advanced_format(self) -> str:
        """Render every element as elem/gpos/pos lines, shifted to non-negative cells."""
        if not self.elements:
            return ""
        self._sort_elements()
        self._normalize_elements()
        return "".join(
            f"elem={self._signature_of(e.path)}\n"
            f"gpos={e.grid_position[0]} {e.grid_position[1]}\n"
            f"pos={e.position[0]:f} {e.position[1]:f}\n"
            for e in self.elements
        )

    def save(self) -> None:
        """Write the map and copies of its textures into its own folder under maps_dir."""
        base_name = Path(self.path).stem
        folder = f"{self.maps_dir}/{base_name}"
        textures = f"{folder}/textures"
        os.makedirs(textures, exist_ok=True)

        with os.scandir(textures) as entries:
            stale = [entry.path for entry in entries if entry.is_file()]
        for old in stale:
            try:
                os.remove(old)
            except OSError as exc:
                logger.warning("could not remove old texture file %s: %s", old, exc)

        mapping: dict[str, str] = {}
        for texture in sorted(set(self.signatures.values())):
            file_name = Path(texture).name
            candidates = (texture, f"{self.resources_dir}/{file_name}", f"{textures}/{file_name}")
            source = next((c for c in candidates if os.path.exists(c)), None)
            if source is None:
                logger.warning("texture file not found: %s", texture)
                mapping[texture] = texture
                continue
            try:
                shutil.copyfile(source, f"{textures}/{file_name}")
                mapping[texture] = f"textures/{file_name}"
            except OSError as exc:
                logger.error("could not copy texture file %s: %s", source, exc)
                mapping[texture] = texture

        parts = [f"name={self.name}\n", f"format={int(self.format)}\n"]
        for key in sorted(self.signatures):
            target = mapping[self.signatures[key]]
            if self.format is ExportFormat.BASIC and key < _BASIC_SIGNATURE_LIMIT:
                parts.append(f"signature={chr(key & 0xFF)} {target}\n")
            elif self.format is ExportFormat.ADVANCED:
                parts.append(f"signature={key} {target}\n")
        parts.append("\n")
        parts.append("map=\n")
        if self.format is ExportFormat.BASIC:
            parts.append(self.basic_format())
        else:
            parts.append(self.advanced_format())

        new_path = f"{folder}/{base_name}.map"
        with open(new_path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write("".join(parts))
        self.path = new_path
        logger.info("map saved to %s, textures copied to %s", new_path, textures)

    def texture_candidates(self, texture_path: str, profile_assets_path: str = "") -> list[str]:
        """Paths to try, in order, when looking for an element's texture."""
        file_name = Path(texture_path).name
        candidates = [f"{self.resources_dir}/{file_name}"]
        if profile_assets_path:
            candidates.append(f"{profile_assets_path}/{file_name}")
        if self.path:
            candidates.append(f"{self.maps_dir}/{Path(self.path).stem}/textures/{file_name}")
        return candidates


def create_new_map(directory: str = MAP_PATH) -> Map:
    """Create, save and return an empty map with a fresh time-based name."""
    stamp = f"{int(time.time())}{random.randrange(100)}"
    new_map = Map(os.path.join(str(directory), f"{stamp}.map"))
    new_map.maps_dir = str(directory)
    new_map.save()
    return new_map