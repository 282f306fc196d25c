"""Geometry helpers for walking around an obstacle's boundary."""

from __future__ import annotations

import logging
from typing import Sequence

from .mapdata import Obstacle
from .vector import Vec3

log = logging.getLogger("mapnav.boundary")

_ENTRY_EPSILON = 1e-4
_M_LINE_EPSILON = 1e-4


def _xz_distance_squared(a: Vec3, b: Vec3) -> float:
    dx = a.x - b.x
    dz = a.z - b.z
    return dx * dx + dz * dz


def _contour_from(vertices: Sequence[Vec3], entry_point: Vec3) -> list[Vec3]:
    """Vertices at the entry point's height, starting from the one nearest to it in XZ."""
    if not vertices:
        return []
    start = min(range(len(vertices)), key=lambda i: _xz_distance_squared(vertices[i], entry_point))
    rotated = [*vertices[start:], *vertices[:start]]
    return [Vec3(v.x, entry_point.y, v.z) for v in rotated]


def generate_boundary_path(obstacle: Obstacle, entry_point: Vec3) -> list[Vec3]:
    """Points to follow around an obstacle, beginning at ``entry_point``.

    The contour comes from the shape vertices if there are any, else from the
    prism base when the height is positive, else from the bounding box. Every
    point is placed at the entry point's height. The entry point is put in front
    of the contour unless it already coincides with its first point.
    """
    if obstacle.shape_vertices:
        contour = _contour_from(obstacle.shape_vertices, entry_point)
    elif obstacle.base_vertices and obstacle.obstacle_height > 0:
        contour = _contour_from(obstacle.base_vertices, entry_point)
    else:
        log.warning(
            "Obstacle %d has no shape or base vertices for a precise boundary; using its bounding box",
            obstacle.id,
        )
        lo, hi, y = obstacle.min_corner, obstacle.max_corner, entry_point.y
        contour = [Vec3(lo.x, y, lo.z), Vec3(hi.x, y, lo.z), Vec3(hi.x, y, hi.z), Vec3(lo.x, y, hi.z)]

    if not contour:
        log.warning("No contour points for obstacle %d", obstacle.id)
        return []

    if (entry_point - contour[0]).length_squared() < _ENTRY_EPSILON * _ENTRY_EPSILON:
        return contour
    return [entry_point, *contour]


def is_point_on_m_line(point: Vec3, start: Vec3, goal: Vec3) -> bool:
    """True if ``point`` lies on the segment from ``start`` to ``goal`` in the XZ plane."""
    eps = _M_LINE_EPSILON
    px, pz = point.x, point.z
    sx, sz = start.x, start.z
    gx, gz = goal.x, goal.z

    cross = (px - sx) * (gz - sz) - (pz - sz) * (gx - sx)
    if abs(cross) > eps:
        return False

    dot = (px - sx) * (px - gx) + (pz - sz) * (pz - gz)
    if dot > eps:
        return False

    if px < min(sx, gx) - eps or px > max(sx, gx) + eps:
        return False
    if pz < min(sz, gz) - eps or pz > max(sz, gz) + eps:
        return False
    return True