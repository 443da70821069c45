import os
from pathlib import Path

import pytest

from tilemapper.element import Element, ExportFormat
from tilemapper.mapfile import BLOCK_SIZE, Map, create_new_map


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    resources = tmp_path / "assets" / "defaultResources"
    resources.mkdir(parents=True)
    (resources / "a.png").write_bytes(b"texture-a")
    (resources / "b.png").write_bytes(b"texture-b")
    return tmp_path


def placed(path, gx, gy):
    return Element(path).moved_to((gx * BLOCK_SIZE, gy * BLOCK_SIZE), (gx, gy))


def signature_for(game_map, path):
    return next(key for key, value in game_map.signatures.items() if value == path)


def test_new_map_defaults():
    game_map = Map()
    assert game_map.name == "NewMap"
    assert game_map.format is ExportFormat.BASIC
    assert game_map.elements == []
    assert game_map.path == ""


def test_missing_file_loads_as_empty_map(tmp_path):
    game_map = Map(str(tmp_path / "nowhere.map"))
    assert game_map.name == "NewMap"
    assert game_map.elements == []
    assert game_map.signatures == {}


def test_add_element_registers_each_texture_once():
    game_map = Map()
    game_map.add_element(placed("a.png", 0, 0))
    game_map.add_element(placed("a.png", 1, 0))
    game_map.add_element(placed("b.png", 2, 0))
    assert sorted(game_map.signatures.values()) == ["a.png", "b.png"]
    assert len(game_map.elements) == 3
    assert min(game_map.signatures) > ord(" ")


def test_add_none_is_ignored():
    game_map = Map()
    game_map.add_element(None)
    assert game_map.elements == []
    assert game_map.signatures == {}


def test_remove_element_clears_whole_cell():
    game_map = Map()
    game_map.add_element(placed("a.png", 1, 2))
    game_map.add_element(placed("b.png", 1, 2))
    game_map.add_element(placed("a.png", 0, 0))
    game_map.remove_element((1, 2))
    assert [e.grid_position for e in game_map.elements] == [(0, 0)]


def test_basic_format_of_empty_map_is_empty():
    assert Map().basic_format() == ""
    assert Map().advanced_format() == ""


def test_basic_format_lays_out_grid():
    game_map = Map()
    game_map.add_element(placed("b.png", 2, 1))
    game_map.add_element(placed("a.png", 0, 0))
    rows = game_map.basic_format().split("\n")
    assert rows[-1] == ""
    rows = rows[:-1]
    assert len(rows) == 2
    assert all(len(row) == 3 for row in rows)
    assert rows[0][0] == chr(signature_for(game_map, "a.png"))
    assert rows[0][1:] == "  "
    assert rows[1][:2] == "  "
    assert rows[1][2] == chr(signature_for(game_map, "b.png"))


def test_basic_format_keeps_latest_element_per_cell():
    game_map = Map()
    game_map.add_element(placed("a.png", 1, 1))
    latest = placed("b.png", 1, 1)
    game_map.add_element(latest)
    text = game_map.basic_format()
    assert game_map.elements == [latest]
    assert text == chr(signature_for(game_map, "b.png")) + "\n"


def test_advanced_format_normalizes_to_non_negative_cells():
    game_map = Map()
    game_map.add_element(placed("a.png", 1, 0))
    game_map.add_element(placed("b.png", -2, -1))
    text = game_map.advanced_format()
    keys = [line.split("=")[0] for line in text.splitlines()]
    assert keys == ["elem", "gpos", "pos"] * 2
    xs = [e.grid_position[0] for e in game_map.elements]
    ys = [e.grid_position[1] for e in game_map.elements]
    assert min(xs) == 0 and min(ys) == 0
    assert xs[1] - xs[0] == 1 - (-2)
    for element in game_map.elements:
        gx, gy = element.grid_position
        assert element.position == (gx * BLOCK_SIZE, gy * BLOCK_SIZE)


def test_advanced_format_writes_fixed_decimals():
    game_map = Map()
    game_map.add_element(Element("a.png"))
    assert "pos=0.000000 0.000000\n" in game_map.advanced_format()


def test_save_and_reload_advanced(workdir):
    game_map = Map("level.map")
    game_map.name = "Level"
    game_map.format = ExportFormat.ADVANCED
    game_map.add_element(placed("a.png", -1, 0))
    game_map.add_element(placed("a.png", 2, 1))
    game_map.save()

    saved = Path(game_map.path)
    assert saved.is_file()
    assert saved.parent.name == "level"
    assert (saved.parent / "textures" / "a.png").read_bytes() == b"texture-a"

    reloaded = Map(game_map.path)
    assert reloaded.name == "Level"
    assert reloaded.format is ExportFormat.ADVANCED
    assert [(e.grid_position, e.position) for e in reloaded.elements] == [
        (e.grid_position, e.position) for e in game_map.elements
    ]
    assert {e.path for e in reloaded.elements} == {"textures/a.png"}


def test_save_and_reload_basic_keeps_relative_layout(workdir):
    game_map = Map("basic.map")
    game_map.add_element(placed("a.png", 0, 0))
    game_map.add_element(placed("b.png", 3, 2))
    game_map.save()

    reloaded = Map(game_map.path)
    assert reloaded.format is ExportFormat.BASIC
    assert [e.path for e in reloaded.elements] == ["textures/a.png", "textures/b.png"]
    first, second = (e.grid_position for e in reloaded.elements)
    assert (second[0] - first[0], second[1] - first[1]) == (3, 2)
    for element in reloaded.elements:
        gx, gy = element.grid_position
        assert element.position == (gx * BLOCK_SIZE, gy * BLOCK_SIZE)


def test_save_keeps_path_of_missing_texture(workdir):
    game_map = Map("ghosts.map")
    game_map.add_element(placed("missing/ghost.png", 0, 0))
    game_map.save()
    reloaded = Map(game_map.path)
    assert list(reloaded.signatures.values()) == ["missing/ghost.png"]


def test_save_removes_stale_textures(workdir):
    stale = workdir / "assets" / "maps" / "level" / "textures" / "stale.png"
    stale.parent.mkdir(parents=True)
    stale.write_bytes(b"old")
    game_map = Map("level.map")
    game_map.add_element(placed("a.png", 0, 0))
    game_map.save()
    saved_dir = (workdir / game_map.path).parent
    assert saved_dir / "textures" == stale.parent
    assert not stale.exists()
    assert (stale.parent / "a.png").exists()
    reloaded = Map(game_map.path)
    assert list(reloaded.signatures.values()) == ["textures/a.png"]


def test_load_basic_file_written_by_hand(tmp_path):
    source = tmp_path / "hand.map"
    source.write_text("name=Hand\nformat=0\nsignature=# a.png\n\nmap=\n# #\n", encoding="utf-8")
    game_map = Map(str(source))
    assert game_map.name == "Hand"
    assert game_map.signatures == {ord("#"): "a.png"}
    assert [e.grid_position for e in game_map.elements] == [(1, 1), (3, 1)]
    assert all(e.path == "a.png" for e in game_map.elements)


def test_unknown_basic_character_gets_empty_texture(tmp_path):
    source = tmp_path / "odd.map"
    source.write_text("format=0\nmap=\nZ\n", encoding="utf-8")
    game_map = Map(str(source))
    assert [e.path for e in game_map.elements] == [""]
    assert game_map.signatures[ord("Z")] == ""


def test_bad_format_number_raises(tmp_path):
    source = tmp_path / "bad.map"
    source.write_text("format=oops\n", encoding="utf-8")
    with pytest.raises(ValueError):
        Map(str(source))


def test_position_before_element_raises(tmp_path):
    source = tmp_path / "bad.map"
    source.write_text("format=1\nmap=\ngpos=1 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        Map(str(source))


def test_texture_candidates_order():
    game_map = Map("assets/maps/level.map")
    assert game_map.texture_candidates("x/tile.png", "assets/profileAssets/p") == [
        "assets/defaultResources/tile.png",
        "assets/profileAssets/p/tile.png",
        "assets/maps/level/textures/tile.png",
    ]
    assert Map().texture_candidates("x/tile.png", "") == ["assets/defaultResources/tile.png"]


def test_create_new_map_saves_empty_map(workdir):
    game_map = create_new_map("assets/maps")
    assert game_map.path.startswith("assets/maps/")
    assert game_map.path.endswith(".map")
    assert os.path.isfile(game_map.path)
    assert os.path.isdir(os.path.join(os.path.dirname(game_map.path), "textures"))
    reloaded = Map(game_map.path)
    assert reloaded.name == "NewMap"
    assert reloaded.elements == []