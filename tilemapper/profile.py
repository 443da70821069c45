"""User profiles: a name, a folder of textures and the maps that belong to them."""

from __future__ import annotations

import os
import random
import shutil
import time
from contextlib import suppress
from pathlib import Path

PROFILE_PATH = "assets/profiles"
PROFILE_RESOURCE_PATH = "assets/profileAssets"


def _field(line: str) -> tuple[str, str]:
    key, _, rest = line.partition("=")
    return key, rest.split("=", 1)[0]


def _remove(path: str) -> None:
    with suppress(FileNotFoundError):
        os.remove(path)


def _remove_all(path: str) -> None:
    target = Path(path)
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    elif target.exists() or target.is_symlink():
        target.unlink()


class Profile:
    """A profile stored as a small key=value file."""

    def __init__(self, path: str | None = None) -> None:
        self.path = f"{PROFILE_PATH}/newProfile.profile"
        self.assets_path = f"{PROFILE_RESOURCE_PATH}/newProfile"
        self.name = "newProfile"
        self.maps: list[str] = []
        if path is not None:
            self.path = str(path)
            self._load()

    def _load(self) -> None:
        try:
            handle = open(self.path, encoding="utf-8")
        except OSError:
            return
        with handle:
            for raw in handle:
                key, value = _field(raw.removesuffix("\n"))
                if "name" in key:
                    self.name = value
                elif "map" in key:
                    self.maps.append(value)
                elif "assets" in key:
                    self.assets_path = value

    def save(self) -> None:
        """Write the profile to its path."""
        lines = [f"name={self.name}\n", f"assets={self.assets_path}\n"]
        lines.extend(f"map={map_path}\n" for map_path in self.maps)
        with open(self.path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write("".join(lines))

    def delete(self) -> None:
        """Remove the profile file, its asset folder and all of its map files."""
        _remove_all(self.assets_path)
        for map_path in self.maps:
            _remove(map_path)
        _remove(self.path)

    def add_map(self, path: str) -> None:
        self.maps.append(str(path))

    def update_map_path(self, old_path: str, new_path: str) -> None:
        """Replace the first occurrence of old_path in the map list."""
        try:
            index = self.maps.index(old_path)
        except ValueError:
            return
        self.maps[index] = new_path


def create_profile(profiles_dir: str = PROFILE_PATH, assets_dir: str = PROFILE_RESOURCE_PATH) -> Profile:
    """Create and save a new profile with its own, freshly made asset folder."""
    stamp = f"{int(time.time())}{random.randrange(100)}"
    assets = os.path.join(str(assets_dir), stamp)
    Path(assets).mkdir(exist_ok=True)
    profile = Profile(os.path.join(str(profiles_dir), f"{stamp}.profile"))
    profile.assets_path = assets
    profile.save()
    return profile


def list_profiles(profiles_dir: str = PROFILE_PATH) -> list[Profile]:
    """Load every profile found in a directory, ordered by path."""
    return [Profile(str(entry)) for entry in sorted(Path(profiles_dir).iterdir())]