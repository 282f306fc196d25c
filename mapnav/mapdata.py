"""Map contents: waypoints and obstacles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .vector import Vec3
from .waypoint import Waypoint

DEFAULT_OBSTACLE_HEIGHT = 5.0


@dataclass
class Obstacle:
    """An obstacle with a bounding box and optional prism or free-form geometry."""

    min_corner: Vec3 = field(default_factory=Vec3)
    max_corner: Vec3 = field(default_factory=Vec3)
    base_vertices: list[Vec3] = field(default_factory=list)
    obstacle_height: float = DEFAULT_OBSTACLE_HEIGHT
    shape_vertices: list[Vec3] = field(default_factory=list)
    id: int = 0
    name: str = ""

    @classmethod
    def from_bounds(cls, min_corner: Vec3, max_corner: Vec3, id: int = 0, name: str = "") -> Obstacle:
        """Box obstacle; a rectangular base on Y=0 is derived unless both corners are null."""
        obstacle = cls(min_corner=min_corner, max_corner=max_corner, id=id, name=name)
        if not min_corner.is_null() or not max_corner.is_null():
            obstacle.base_vertices = [
                Vec3(min_corner.x, 0.0, min_corner.z),
                Vec3(max_corner.x, 0.0, min_corner.z),
                Vec3(max_corner.x, 0.0, max_corner.z),
                Vec3(min_corner.x, 0.0, max_corner.z),
            ]
            obstacle.obstacle_height = max_corner.y - min_corner.y
        return obstacle

    @classmethod
    def from_prism(cls, base_vertices: list[Vec3], height: float, id: int = 0, name: str = "") -> Obstacle:
        """Polygon base on Y=0 extruded to ``height``; the box encloses the prism."""
        base = list(base_vertices)
        obstacle = cls(base_vertices=base, obstacle_height=height, id=id, name=name)
        if base:
            xs = [v.x for v in base]
            zs = [v.z for v in base]
            obstacle.min_corner = Vec3(min(xs), 0.0, min(zs))
            obstacle.max_corner = Vec3(max(xs), height, max(zs))
        return obstacle

    @classmethod
    def from_shape(cls, shape_vertices: list[Vec3], id: int = 0, name: str = "") -> Obstacle:
        """Free-form obstacle; the box encloses every vertex."""
        shape = list(shape_vertices)
        obstacle = cls(shape_vertices=shape, id=id, name=name)
        if shape:
            obstacle.min_corner = Vec3(
                min(v.x for v in shape), min(v.y for v in shape), min(v.z for v in shape)
            )
            obstacle.max_corner = Vec3(
                max(v.x for v in shape), max(v.y for v in shape), max(v.z for v in shape)
            )
            obstacle.base_vertices = []
            obstacle.obstacle_height = 0.0
        return obstacle

    def contains(self, point: Vec3) -> bool:
        """True if the point lies inside the bounding box, borders included."""
        lo, hi = self.min_corner, self.max_corner
        return lo.x <= point.x <= hi.x and lo.y <= point.y <= hi.y and lo.z <= point.z <= hi.z


@dataclass
class MapData:
    """A map: identity, waypoints and obstacles."""

    map_id: int = 0
    map_name: str = ""
    version: str = ""
    waypoints: list[Waypoint] = field(default_factory=list)
    obstacles: list[Obstacle] = field(default_factory=list)

    def add_waypoint(self, waypoint: Waypoint) -> None:
        self.waypoints.append(waypoint)

    def find_waypoint(self, waypoint_id: int) -> Optional[Waypoint]:
        """First waypoint with the given id, or None."""
        return next((wp for wp in self.waypoints if wp.id == waypoint_id), None)

    def remove_waypoint(self, waypoint_id: int) -> bool:
        """Remove the first waypoint with the given id; return whether one was removed."""
        for position, wp in enumerate(self.waypoints):
            if wp.id == waypoint_id:
                del self.waypoints[position]
                return True
        return False

    def clear(self) -> None:
        self.map_id = 0
        self.map_name = ""
        self.version = ""
        self.waypoints.clear()
        self.obstacles.clear()