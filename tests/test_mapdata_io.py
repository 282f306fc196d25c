import json

import pytest

from mapnav.mapdata import MapData, Obstacle
from mapnav.mapdata_io import MapDataError, load_map_data, save_map_data
from mapnav.vector import Vec3
from mapnav.waypoint import Waypoint


def _sample_map():
    data = MapData(571, "Northrend", "1.2")
    data.add_waypoint(Waypoint(1, "start", Vec3(1.5, 2.0, -3.25), {2}))
    data.add_waypoint(Waypoint(2, "end", Vec3(10.0, 0.0, 4.0), {1}))
    return data


def test_round_trip(tmp_path):
    path = tmp_path / "map.json"
    original = _sample_map()
    save_map_data(path, original)
    assert load_map_data(path) == original


def test_saved_file_layout(tmp_path):
    path = tmp_path / "map.json"
    save_map_data(path, _sample_map())
    root = json.loads(path.read_text(encoding="utf-8"))
    assert set(root) == {"map_id", "map_name", "version", "waypoints"}
    assert root["map_id"] == 571
    assert [wp["id"] for wp in root["waypoints"]] == [1, 2]


def test_obstacles_are_not_saved(tmp_path):
    path = tmp_path / "map.json"
    data = _sample_map()
    data.obstacles.append(Obstacle.from_bounds(Vec3(0, 0, 0), Vec3(1, 1, 1)))
    save_map_data(path, data)
    assert load_map_data(path).obstacles == []


def test_missing_file_raises(tmp_path):
    with pytest.raises(MapDataError):
        load_map_data(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MapDataError):
        load_map_data(path)


def test_non_object_root_raises(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(MapDataError):
        load_map_data(path)


def test_missing_waypoints_gives_empty_list(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps({"map_id": 9, "map_name": "x"}), encoding="utf-8")
    data = load_map_data(path)
    assert data.waypoints == []
    assert (data.map_id, data.map_name, data.version) == (9, "x", "")


def test_non_object_waypoint_entries_are_skipped(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(
        json.dumps({"waypoints": [{"id": 3}, 5, "text", {"id": 4}]}), encoding="utf-8"
    )
    assert [wp.id for wp in load_map_data(path).waypoints] == [3, 4]


def test_save_to_directory_raises(tmp_path):
    with pytest.raises(MapDataError):
        save_map_data(tmp_path, _sample_map())