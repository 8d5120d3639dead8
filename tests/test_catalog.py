"""Room asset loading, validation and minimap rendering."""

import copy
import json

import pytest

from engine.core.catalog import RoomCatalog
from engine.core.loader.catalog_loader import CatalogError, build_catalog_from_dict, validate_schema
from game.bootstrap import get_catalog, load_catalog


def mini_room():
    return {
        "id": "test_room",
        "name": "TEST ROOM",
        "description": "A bare test room.",
        "grid_size": 5,
        "objects": [
            {"id": "panel", "label": "Power Panel", "description": "Panel.", "x": 2, "y": 4, "marker": "P"},
            {"id": "locker", "label": "Locker", "description": "Locker.", "x": 1, "y": 1, "marker": "L"},
            {"id": "door", "label": "Door", "description": "Door.", "x": 4, "y": 2, "marker": "D"},
        ],
    }


@pytest.fixture()
def catalog():
    return RoomCatalog(build_catalog_from_dict(mini_room()))


def test_packaged_catalog_has_three_objects():
    cat = get_catalog()
    assert [o.id for o in cat.objects] == ["panel", "locker", "door"]
    assert cat.get("panel").position == (2, 4)
    assert cat.get("locker").position == (1, 1)
    assert cat.get("door").position == (4, 2)
    assert get_catalog() is cat


def test_lookup_is_case_insensitive(catalog):
    assert catalog.get("LOCKER").id == "locker"
    assert catalog.get(" Door ").marker == "D"
    assert catalog.get("crate") is None


def test_marker_at(catalog):
    assert catalog.marker_at(2, 4) == "P"
    assert catalog.marker_at(0, 0) == "."


def test_minimap_start_position(catalog):
    assert catalog.render_minimap((2, 2)) == "..P..\n.....\n..X.D\n.L...\n....."


def test_player_hides_object_marker(catalog):
    rows = catalog.render_minimap((2, 4)).split("\n")
    assert rows[0] == "..X.."
    assert len(rows) == 5


def test_schema_rejects_long_marker():
    data = mini_room()
    data["objects"][0]["marker"] = "PP"
    with pytest.raises(CatalogError):
        validate_schema(data)


def test_schema_rejects_unknown_field():
    data = mini_room()
    data["objects"][1]["weight"] = 3
    with pytest.raises(CatalogError):
        build_catalog_from_dict(data)


def test_semantic_issues_are_collected():
    data = mini_room()
    data["objects"][0]["x"] = 7
    data["objects"][2]["marker"] = "X"
    data["objects"].append(copy.deepcopy(data["objects"][1]))
    with pytest.raises(CatalogError) as exc:
        build_catalog_from_dict(data)
    issues = exc.value.issues
    assert any("outside" in i for i in issues)
    assert any("reserved marker" in i for i in issues)
    assert any("Duplicate object id" in i for i in issues)


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "room.json"
    path.write_text(json.dumps(mini_room()), encoding="utf-8")
    cat = load_catalog(path)
    assert cat.name == "TEST ROOM"


def test_load_catalog_bad_json(tmp_path):
    path = tmp_path / "room.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)


@pytest.mark.parametrize("size", [3, 6])
def test_grid_size_must_match_explorable_grid(tmp_path, size):
    data = mini_room()
    data["grid_size"] = size
    data["objects"] = [o for o in data["objects"] if o["x"] < 3 and o["y"] < 3]
    path = tmp_path / "room.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(CatalogError) as exc:
        load_catalog(path)
    assert any("grid_size" in i for i in exc.value.issues)
