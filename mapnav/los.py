"""Line-of-sight tests against the bounding boxes of obstacles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .mapdata import Obstacle
from .vector import Vec3

_PARALLEL_EPSILON = 1e-6
_SAME_POINT_DISTANCE = 0.001
_ENTRY_TOLERANCE = 1e-6


@dataclass(frozen=True)
class RayHit:
    """The nearest obstacle a ray enters, where and how far along the ray."""

    obstacle: Obstacle
    point: Vec3
    distance: float


def intersect_ray_aabb(origin: Vec3, direction: Vec3, obstacle: Obstacle) -> Optional[tuple[float, float]]:
    """Slab test of a ray against the obstacle's bounding box.

    Returns ``(t_enter, t_exit)`` as distances along ``direction``, or None when the
    ray's line misses the box. An axis the ray runs parallel to bounds nothing, so a
    ray parallel to every axis inside the box yields infinite distances.
    """
    t_min = -math.inf
    t_max = math.inf
    for axis in range(3):
        d = direction[axis]
        o = origin[axis]
        lo = obstacle.min_corner[axis]
        hi = obstacle.max_corner[axis]
        if abs(d) < _PARALLEL_EPSILON:
            if o < lo or o > hi:
                return None
            continue
        inv_d = 1.0 / d
        t0 = (lo - o) * inv_d
        t1 = (hi - o) * inv_d
        if inv_d < 0.0:
            t0, t1 = t1, t0
        t_min = max(t_min, t0)
        t_max = min(t_max, t1)
        if t_max <= t_min:
            return None
    return t_min, t_max


def has_line_of_sight_aabb(point_a: Vec3, point_b: Vec3, obstacles: Iterable[Obstacle]) -> bool:
    """True unless some obstacle's box is entered between ``point_a`` and ``point_b``."""
    offset = point_b - point_a
    distance = offset.length()
    if distance < _SAME_POINT_DISTANCE:
        return True
    direction = offset.normalized()

    for obstacle in obstacles:
        span = intersect_ray_aabb(point_a, direction, obstacle)
        if span is None:
            continue
        t_enter, t_exit = span
        if 0.0 <= t_enter < distance and t_enter < t_exit:
            return False
    return True


def find_closest_aabb_intersection(
    origin: Vec3, direction: Vec3, obstacles: Iterable[Obstacle], max_distance: float
) -> Optional[RayHit]:
    """Nearest box the ray enters ahead of ``origin`` and before ``max_distance``.

    ``direction`` is expected to be normalized. A ray starting inside a box does not
    count as hitting it.
    """
    best: Optional[tuple[float, Obstacle]] = None
    for obstacle in obstacles:
        span = intersect_ray_aabb(origin, direction, obstacle)
        if span is None:
            continue
        t_enter, t_exit = span
        if t_enter >= -_ENTRY_TOLERANCE and t_enter < max_distance and t_enter < t_exit:
            if best is None or t_enter < best[0]:
                best = (t_enter, obstacle)

    if best is None:
        return None
    distance, obstacle = best
    return RayHit(obstacle=obstacle, point=origin + direction * distance, distance=distance)