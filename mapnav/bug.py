"""Step-wise Bug-style obstacle avoidance between two points."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional, Sequence

from .boundary import generate_boundary_path, is_point_on_m_line
from .los import find_closest_aabb_intersection, has_line_of_sight_aabb
from .mapdata import Obstacle
from .vector import Vec3
from .waypoint import Waypoint

log = logging.getLogger("mapnav.bug")

MAX_PATH_POINTS = 10000
_SAME_POINT_DISTANCE = 1e-6
_LEAVE_DISTANCE_TOLERANCE = 1e-5


class BugPathState(enum.Enum):
    """Stages of the search."""

    MOVING_TO_GOAL = enum.auto()
    FOLLOWING_OBSTACLE = enum.auto()
    LEAVING_OBSTACLE = enum.auto()
    PATH_NOT_FOUND = enum.auto()
    PATH_FOUND = enum.auto()
    IDLE = enum.auto()


_TERMINAL_STATES = (BugPathState.IDLE, BugPathState.PATH_FOUND, BugPathState.PATH_NOT_FOUND)


class BugPathfinder:
    """Walks from a start towards a goal, following obstacle boundaries when blocked.

    The search advances one step per :meth:`update`. Listeners may be appended to
    ``on_path_found``, ``on_path_not_found`` and ``on_state_changed``.
    """

    def __init__(
        self,
        step_size: float = 1.0,
        goal_reached_threshold: float = 0.5,
        obstacle_detection_radius: float = 0.5,
    ) -> None:
        self.step_size = step_size
        self.goal_reached_threshold = goal_reached_threshold
        self.obstacle_detection_radius = obstacle_detection_radius

        self.on_path_found: list[Callable[[list[Vec3]], None]] = []
        self.on_path_not_found: list[Callable[[], None]] = []
        self.on_state_changed: list[Callable[[BugPathState], None]] = []

        self._state = BugPathState.IDLE
        self._start = Vec3()
        self._goal = Vec3()
        self._position = Vec3()
        self._path: list[Vec3] = []
        self._obstacles: Optional[list[Obstacle]] = None
        self._waypoints: Optional[list[Waypoint]] = None

        self._hit_point = Vec3()
        self._current_obstacle: Optional[Obstacle] = None
        self._distance_at_hit = 0.0
        self._leave_point = Vec3()
        self._min_distance_on_obstacle = 0.0
        self._boundary: list[Vec3] = []
        self._boundary_index = 0

    @property
    def state(self) -> BugPathState:
        return self._state

    @property
    def path(self) -> list[Vec3]:
        """Points visited so far, start first."""
        return list(self._path)

    @property
    def position(self) -> Vec3:
        return self._position

    @property
    def hit_point(self) -> Vec3:
        return self._hit_point

    @property
    def start(self) -> Vec3:
        return self._start

    @property
    def goal(self) -> Vec3:
        return self._goal

    def _emit_state(self) -> None:
        for listener in self.on_state_changed:
            listener(self._state)

    def _emit_found(self) -> None:
        for listener in self.on_path_found:
            listener(list(self._path))

    def _emit_not_found(self) -> None:
        for listener in self.on_path_not_found:
            listener()

    def find_path(
        self,
        start: Vec3,
        goal: Vec3,
        obstacles: Sequence[Obstacle],
        waypoints: Optional[Sequence[Waypoint]] = None,
    ) -> None:
        """Begin a new search from ``start`` to ``goal`` around ``obstacles``."""
        self.reset()
        log.info("Finding path from %s to %s", start, goal)
        self._start = start
        self._position = start
        self._goal = goal
        self._obstacles = list(obstacles)
        self._waypoints = list(waypoints) if waypoints is not None else []

        if self._position.distance_to(self._goal) < self.goal_reached_threshold:
            log.info("Start position is already at the goal")
            self._state = BugPathState.PATH_FOUND
            self._path.append(self._position)
            self._emit_found()
            return

        self._state = BugPathState.MOVING_TO_GOAL
        self._path.append(self._position)
        self._emit_state()

    def update(self) -> BugPathState:
        """Advance the search by one step and return the resulting state."""
        if self._state in _TERMINAL_STATES:
            return self._state

        if len(self._path) > MAX_PATH_POINTS:
            log.warning("Max iterations reached, path not found")
            self._state = BugPathState.PATH_NOT_FOUND
            self._emit_not_found()
            self._emit_state()
            return self._state

        if self._state is BugPathState.MOVING_TO_GOAL:
            self._move_to_goal()
        elif self._state is BugPathState.FOLLOWING_OBSTACLE:
            self._follow_obstacle()
        elif self._state is BugPathState.LEAVING_OBSTACLE:
            self._state = BugPathState.MOVING_TO_GOAL
            self._emit_state()

        if (
            self._position.distance_to(self._goal) < self.goal_reached_threshold
            and self._state is not BugPathState.PATH_FOUND
        ):
            log.info("Goal reached at %s", self._position)
            self._path.append(self._goal)
            self._state = BugPathState.PATH_FOUND
            self._emit_found()
            self._emit_state()
        return self._state

    def reset(self) -> None:
        """Forget the current search and return to IDLE."""
        self._state = BugPathState.IDLE
        self._start = Vec3()
        self._goal = Vec3()
        self._position = Vec3()
        self._path = []
        self._obstacles = None
        self._waypoints = None
        self._hit_point = Vec3()
        self._current_obstacle = None
        self._distance_at_hit = 0.0
        self._leave_point = Vec3()
        self._min_distance_on_obstacle = float("inf")
        self._boundary = []
        self._boundary_index = 0

    def is_point_on_m_line(self, point: Vec3) -> bool:
        """True if ``point`` lies on the start-goal segment in the XZ plane."""
        return is_point_on_m_line(point, self._start, self._goal)

    def _drop_obstacle(self) -> None:
        self._current_obstacle = None
        self._boundary = []
        self._boundary_index = 0

    def _move_to_goal(self) -> None:
        offset = self._goal - self._position
        distance = offset.length()
        if distance < self.goal_reached_threshold:
            return
        direction = offset.normalized()

        hit = None
        if self._obstacles is not None and distance >= _SAME_POINT_DISTANCE:
            hit = find_closest_aabb_intersection(self._position, direction, self._obstacles, distance)

        if hit is not None:
            log.info("Obstacle %d blocks the way to the goal; hit at %s", hit.obstacle.id, hit.point)
            self._current_obstacle = hit.obstacle
            self._hit_point = hit.point
            self._distance_at_hit = hit.point.distance_to(self._goal)
            self._min_distance_on_obstacle = self._distance_at_hit
            self._boundary = generate_boundary_path(hit.obstacle, hit.point)
            self._boundary_index = 0
            if not self._boundary:
                log.warning("No boundary path for obstacle %d; path not found", hit.obstacle.id)
                self._state = BugPathState.PATH_NOT_FOUND
                self._emit_not_found()
            else:
                self._state = BugPathState.FOLLOWING_OBSTACLE
            self._emit_state()
            return

        if distance < self.step_size:
            self._position = self._goal
        else:
            self._position = self._position + direction * self.step_size
        self._path.append(self._position)

    def _follow_obstacle(self) -> None:
        if self._current_obstacle is None or not self._boundary:
            self._state = BugPathState.MOVING_TO_GOAL
            self._emit_state()
            return

        if self._can_leave_obstacle():
            log.info("Leaving obstacle at %s", self._position)
            self._drop_obstacle()
            self._state = BugPathState.MOVING_TO_GOAL
            self._emit_state()
            return

        if self._boundary_index >= len(self._boundary):
            log.warning("Boundary index out of range while following an obstacle")
            self._state = BugPathState.PATH_NOT_FOUND
            self._emit_not_found()
            self._emit_state()
            return

        target = self._boundary[self._boundary_index]
        offset = target - self._position
        if offset.length_squared() < self.step_size * self.step_size * 0.25:
            self._position = target
            self._boundary_index += 1
        else:
            self._position = self._position + offset.normalized() * self.step_size
        self._path.append(self._position)

        distance = self._position.distance_to(self._goal)
        if distance < self._min_distance_on_obstacle:
            self._min_distance_on_obstacle = distance

        if self._boundary_index >= len(self._boundary):
            if (
                self._position.distance_to(self._hit_point) < self.step_size
                and self._min_distance_on_obstacle >= self._distance_at_hit
            ):
                log.warning("Returned to hit point without a better leave point; path not found")
                self._state = BugPathState.PATH_NOT_FOUND
                self._emit_not_found()
                self._emit_state()
            else:
                log.warning("Finished boundary points; trying to move to goal again")
                self._drop_obstacle()
                self._state = BugPathState.MOVING_TO_GOAL
                self._emit_state()

    def _can_leave_obstacle(self) -> bool:
        if self._current_obstacle is None:
            return True
        if not self.is_point_on_m_line(self._position):
            return False
        if not has_line_of_sight_aabb(self._position, self._goal, self._obstacles or []):
            return False
        distance = self._position.distance_to(self._goal)
        if distance >= self._distance_at_hit - _LEAVE_DISTANCE_TOLERANCE:
            return False
        if (
            self._position.distance_to(self._hit_point) < self.step_size * 0.5
            and self._boundary_index < 1
        ):
            return False
        self._leave_point = self._position
        return True