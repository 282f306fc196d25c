# mapnav

Tools for navigating 3D game maps: waypoint graphs stored as JSON, ray and
line-of-sight tests against axis-aligned obstacle boxes, A* search over
waypoints, and a step-by-step Bug pathfinder that walks around obstacles.

The package has no dependencies outside the standard library and needs
Python 3.10 or later.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `mapnav.vector`: `Vec3`, a small immutable 3D vector with arithmetic
  operators and `length`, `length_squared`, `normalized`, `distance_to`,
  `dot` and `is_null`.
- `mapnav.waypoint`: `Waypoint` (`id`, `name`, `coordinates`,
  `connected_ids`), with `Waypoint.from_json` and `to_json` for the map
  file's waypoint objects. Missing or ill-typed fields take default values.
- `mapnav.mapdata`: `Obstacle`, built with `from_bounds`, `from_prism` or
  `from_shape`, with `contains` testing a point against its bounding box;
  and `MapData`, which holds the map id, name, version, waypoints and
  obstacles, with `add_waypoint`, `find_waypoint`, `remove_waypoint` and
  `clear`.
- `mapnav.mapdata_io`: `load_map_data` and `save_map_data` read and write
  map JSON files (id, name, version and waypoints) and raise `MapDataError`
  when a file cannot be opened, parsed or written. Obstacles are not stored
  in the file.
- `mapnav.los`: `intersect_ray_aabb` (slab test returning the entry and exit
  distances, or `None`), `has_line_of_sight_aabb`, and
  `find_closest_aabb_intersection`, which returns a `RayHit` with the
  obstacle, hit point and distance, or `None`.
- `mapnav.astar`: `heuristic` and `find_path_astar`, which returns the list
  of waypoint ids from start to goal, or an empty list when either id is
  unknown or the goal cannot be reached.
- `mapnav.boundary`: `generate_boundary_path` and `is_point_on_m_line`, the
  geometry behind the Bug pathfinder.
- `mapnav.bug`: `BugPathState` and `BugPathfinder`.

## Example

```python
from mapnav.vector import Vec3
from mapnav.waypoint import Waypoint
from mapnav.mapdata import MapData
from mapnav.astar import find_path_astar

data = MapData()
data.add_waypoint(Waypoint(id=1, name="a", coordinates=Vec3(0, 0, 0), connected_ids={2}))
data.add_waypoint(Waypoint(id=2, name="b", coordinates=Vec3(5, 0, 0), connected_ids={1, 3}))
data.add_waypoint(Waypoint(id=3, name="c", coordinates=Vec3(5, 0, 5), connected_ids={2}))

print(find_path_astar(data, 1, 3))  # [1, 2, 3]
```

Bug pathfinding runs one step per `update()` call until the pathfinder
reports that it has found a path or given up. The points visited so far are
in `path`; listeners can be appended to `on_path_found`,
`on_path_not_found` and `on_state_changed`.

```python
from mapnav.bug import BugPathfinder, BugPathState
from mapnav.mapdata import Obstacle
from mapnav.vector import Vec3

wall = Obstacle.from_bounds(Vec3(4, -1, -2), Vec3(6, 3, 2), 1, "wall")
finder = BugPathfinder()
finder.find_path(Vec3(0, 0, 0), Vec3(10, 0, 0), [wall])
while finder.update() not in (BugPathState.PATH_FOUND, BugPathState.PATH_NOT_FOUND):
    pass
print(finder.state, len(finder.path))
```

## What it does not do

- There is no voxel grid or other volumetric map; obstacles are described
  only by boxes, prism bases or vertex lists.
- Line-of-sight tests use obstacles' bounding boxes only; there is no exact
  test against prism or free-form geometry.
- There is no command-line tool or editor; the package is a library.