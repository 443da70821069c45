# tilemapper

A small tile map editor built on pygame. You organise your work in
**profiles**. Each profile has its own folder of texture assets and its own
list of maps. In the editor you pick a texture from the palette and left-click
in the map view to place a tile. A right click removes every tile in the cell
under the cursor. Saving writes the map as a plain-text file and copies the
textures it uses next to it.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running

```
tilemapper
```

This opens a resizable 1600×900 window titled "Map Builder", limited to 60
frames per second. Paths are relative to the working directory. The program
reads and writes these locations:

- `assets/profiles/` holds the `*.profile` files. The start screen lists every
  file in this directory, so the directory has to exist.
- `assets/profileAssets/<id>/` holds the textures of a profile. A new profile
  gets a fresh folder here. `assets/profileAssets/` itself has to exist.
- `assets/defaultResources/` holds textures that every profile can use.
- `assets/maps/<name>/` is where a map is saved: the map file is
  `<name>.map` and its textures are copied into `textures/` beside it.
- `assets/fonts/Roboto-Regular.ttf` is the interface font. If it cannot be
  loaded, pygame's default font is used.

## Screens

- **Menu**: lists the existing profiles by name. Click one to open it, or
  create a new profile. A new profile gets a name made from the current time
  and a random number. There is also a button for the settings screen.
- **Profile**: edit the profile's name (up to 20 characters) and press *Save*
  to write it. You can open one of the profile's maps, create a new map, or
  delete the profile. Deleting asks for confirmation. It then removes the
  profile file, the profile's asset folder and the map files the profile
  lists.
- **Editor**: shows the map on a 100-pixel grid. Move the view with
  `W`/`A`/`S`/`D`. A faint preview of the selected texture follows the cursor.
  The side panel holds:
  - the palette, with the textures from `assets/defaultResources/` first and
    then those from the profile's asset folder;
  - *Load*, which reloads the palette and clears the selection;
  - *Open folder*, which opens the profile's asset folder with `xdg-open`
    (`explorer` on Windows);
  - a preview of the selected texture;
  - a *Grid: ON / OFF* toggle.

  Below the view are *Back*, *Save* and *Settings*. When saving moves the map
  to a new path, the profile's map list is updated and the profile is written
  again.
- **Editor settings**: switches the current map between the `BASIC` and
  `ADVANCED` export formats.
- **Settings**: has only a *Back* button.

Press `Escape` or close the window to leave the current screen. The program
ends when the last screen closes.

## Map file format

A map file starts with a header:

```
name=NewMap
format=0
signature=" textures/grass.png

map=
```

Each `signature` line ties a tile signature to a texture path. Signatures are
numbered from 34 in the order their textures are first placed. In the `BASIC`
format a signature is written as the character with that code, and signatures
of 177 and above are left out. After saving, the path is `textures/<file>`
when the texture was found and copied. Otherwise the original path is kept.

The text after `map=` depends on the format:

- **BASIC** (`format=0`): one character per cell and one line per row,
  covering the smallest box around the placed tiles. A space marks an empty
  cell. Where several tiles share a cell, only one is written and the others
  are dropped from the map.
- **ADVANCED** (`format=1`): three lines per tile. `elem=<signature>` names
  the tile, `gpos=<x> <y>` gives its grid cell and `pos=<x> <y>` gives its
  pixel position. Tiles are ordered by row, then column, and shifted so that
  no cell is negative.

## Profile file format

```
name=newProfile
assets=assets/profileAssets/newProfile
map=assets/maps/level1/level1.map
```

There is one `map=` line for each map that belongs to the profile.

## Using it as a library

The map and profile models can be used without opening a window:

```python
from tilemapper.element import Element, ExportFormat
from tilemapper.mapfile import Map

level = Map("assets/maps/level1.map")
level.add_element(Element("assets/defaultResources/grass.png").moved_to((0.0, 0.0), (0, 0)))
level.format = ExportFormat.ADVANCED
print(level.advanced_format())
level.save()  # writes assets/maps/level1/level1.map
```

- `tilemapper.mapfile`: `Map` (`add_element`, `remove_element`,
  `basic_format`, `advanced_format`, `save`, `texture_candidates`) and
  `create_new_map`.
- `tilemapper.profile`: `Profile` (`save`, `delete`, `add_map`,
  `update_map_path`), `create_profile` and `list_profiles`.
- `tilemapper.editor`: `EditorModel` holds the editing logic (palette,
  selection, placing and removing tiles, camera, grid toggle, saving). It also
  has the helpers `cell_at`, `grid_lines` and `texture_candidates`.
- `tilemapper.states`: `State` and `StateManager` run a stack of screens.
  `StateAction` tells the manager what to do next.

## What it does not do

- The **Settings** screen has no settings yet. The window's fullscreen and
  resolution methods are not reachable from the interface.
- There is no zoom, undo or tile editing beyond placing and removing.
- `ResourceCache.load_sound` can load sounds, but nothing in the program plays
  them.