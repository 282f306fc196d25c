import math

import pytest

from mapnav.los import (
    RayHit,
    find_closest_aabb_intersection,
    has_line_of_sight_aabb,
    intersect_ray_aabb,
)
from mapnav.mapdata import Obstacle
from mapnav.vector import Vec3


def box(lo, hi, id=0):
    return Obstacle.from_bounds(Vec3(*lo), Vec3(*hi), id=id)


UNIT = box((0, 0, 0), (2, 2, 2), id=1)


def test_ray_hits_box_enter_and_exit():
    span = intersect_ray_aabb(Vec3(-1, 1, 1), Vec3(1, 0, 0), UNIT)
    assert span == pytest.approx((1.0, 3.0))


def test_ray_parallel_outside_slab_misses():
    assert intersect_ray_aabb(Vec3(-1, 5, 1), Vec3(1, 0, 0), UNIT) is None


def test_ray_on_other_axis_misses():
    assert intersect_ray_aabb(Vec3(-1, -1, 1), Vec3(0, 0, 1), UNIT) is None


def test_ray_pointing_away_reports_negative_span():
    span = intersect_ray_aabb(Vec3(5, 1, 1), Vec3(1, 0, 0), UNIT)
    assert span is not None
    t_enter, t_exit = span
    assert t_enter < t_exit < 0


def test_ray_touching_only_a_corner_edge_misses():
    direction = Vec3(1, 1, 0).normalized()
    assert intersect_ray_aabb(Vec3(0, -2, 1), direction, UNIT) is None


def test_zero_direction_inside_box_gives_unbounded_span():
    span = intersect_ray_aabb(Vec3(1, 1, 1), Vec3(0, 0, 0), UNIT)
    assert span == (-math.inf, math.inf)


def test_entry_point_lies_on_box():
    origin = Vec3(-3, 0.5, 1.5)
    direction = Vec3(1, 0.2, 0).normalized()
    span = intersect_ray_aabb(origin, direction, UNIT)
    assert span is not None
    entry = origin + direction * span[0]
    assert UNIT.contains(Vec3(round(entry.x, 9), round(entry.y, 9), round(entry.z, 9)))


def test_line_of_sight_blocked_by_box_between():
    assert has_line_of_sight_aabb(Vec3(-5, 1, 1), Vec3(5, 1, 1), [UNIT]) is False


def test_line_of_sight_clear_when_box_beyond_target():
    assert has_line_of_sight_aabb(Vec3(-5, 1, 1), Vec3(-2, 1, 1), [UNIT]) is True


def test_line_of_sight_clear_when_box_behind_start():
    assert has_line_of_sight_aabb(Vec3(4, 1, 1), Vec3(8, 1, 1), [UNIT]) is True


def test_line_of_sight_clear_when_path_misses():
    assert has_line_of_sight_aabb(Vec3(-5, 5, 1), Vec3(5, 5, 1), [UNIT]) is True


def test_line_of_sight_coincident_points():
    assert has_line_of_sight_aabb(Vec3(1, 1, 1), Vec3(1, 1, 1), [UNIT]) is True


def test_line_of_sight_no_obstacles():
    assert has_line_of_sight_aabb(Vec3(-5, 1, 1), Vec3(5, 1, 1), []) is True


def test_line_of_sight_from_inside_box_not_blocked():
    assert has_line_of_sight_aabb(Vec3(1, 1, 1), Vec3(10, 1, 1), [UNIT]) is True


def test_line_of_sight_is_symmetric_for_box_between():
    a, b = Vec3(-5, 1, 1), Vec3(5, 1, 1)
    assert has_line_of_sight_aabb(a, b, [UNIT]) == has_line_of_sight_aabb(b, a, [UNIT])


def test_closest_intersection_picks_nearer_box():
    near = box((3, 0, 0), (4, 2, 2), id=7)
    far = box((8, 0, 0), (9, 2, 2), id=9)
    origin = Vec3(0, 1, 1)
    direction = Vec3(1, 0, 0)
    hit = find_closest_aabb_intersection(origin, direction, [far, near], 100.0)
    assert isinstance(hit, RayHit)
    assert hit.obstacle is near
    assert hit.point == origin + direction * hit.distance
    assert hit.point.x == pytest.approx(near.min_corner.x)


def test_closest_intersection_beyond_max_distance():
    far = box((8, 0, 0), (9, 2, 2))
    hit = find_closest_aabb_intersection(Vec3(0, 1, 1), Vec3(1, 0, 0), [far], 5.0)
    assert hit is None


def test_closest_intersection_ignores_box_containing_origin():
    hit = find_closest_aabb_intersection(Vec3(1, 1, 1), Vec3(1, 0, 0), [UNIT], 100.0)
    assert hit is None


def test_closest_intersection_empty_list():
    assert find_closest_aabb_intersection(Vec3(), Vec3(1, 0, 0), [], 100.0) is None


def test_closest_intersection_distance_matches_span():
    origin = Vec3(-4, 1, 1)
    direction = Vec3(1, 0, 0)
    hit = find_closest_aabb_intersection(origin, direction, [UNIT], 100.0)
    span = intersect_ray_aabb(origin, direction, UNIT)
    assert hit is not None and span is not None
    assert hit.distance == span[0]
    assert hit.obstacle is UNIT