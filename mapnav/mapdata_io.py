"""Loading and saving map data as JSON files."""

from __future__ import annotations

import json
import logging
import os
from typing import Union

from .mapdata import MapData
from .waypoint import Waypoint, _json_int

log = logging.getLogger("mapnav.mapdata_io")

PathLike = Union[str, "os.PathLike[str]"]


class MapDataError(Exception):
    """A map file could not be read, parsed or written."""


def load_map_data(path: PathLike) -> MapData:
    """Read a map file; obstacles are not part of the file format."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapDataError(f"failed to open file {path}: {exc}") from exc

    try:
        root = json.loads(text)
    except ValueError as exc:
        raise MapDataError(f"failed to parse JSON from file {path}: {exc}") from exc

    if not isinstance(root, dict):
        raise MapDataError(f"JSON document is not an object: {path}")

    map_name = root.get("map_name")
    version = root.get("version")
    map_data = MapData(
        map_id=_json_int(root.get("map_id")),
        map_name=map_name if isinstance(map_name, str) else "",
        version=version if isinstance(version, str) else "",
    )

    entries = root.get("waypoints")
    if isinstance(entries, list):
        for entry in entries:
            if isinstance(entry, dict):
                map_data.add_waypoint(Waypoint.from_json(entry))
            else:
                log.warning("Waypoint entry is not an object in file: %s", path)
    else:
        log.warning("'waypoints' array not found or not an array in file: %s", path)

    log.info(
        "Loaded map data from %s - map id %d, name %r, version %r, %d waypoints",
        path,
        map_data.map_id,
        map_data.map_name,
        map_data.version,
        len(map_data.waypoints),
    )
    return map_data


def save_map_data(path: PathLike, map_data: MapData) -> None:
    """Write a map file with its id, name, version and waypoints."""
    root = {
        "map_id": map_data.map_id,
        "map_name": map_data.map_name,
        "version": map_data.version,
        "waypoints": [wp.to_json() for wp in map_data.waypoints],
    }
    text = json.dumps(root, indent=4, sort_keys=True, ensure_ascii=False) + "\n"
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as exc:
        raise MapDataError(f"failed to write file {path}: {exc}") from exc
    log.info("Saved map data to %s, %d waypoints", path, len(map_data.waypoints))