"""A* shortest-path search over the waypoint graph."""

from __future__ import annotations

import heapq
import logging
import math
import time

from .mapdata import MapData
from .waypoint import Waypoint

log = logging.getLogger("mapnav.astar")

_PROGRESS_LOG_INTERVAL = 5000


def heuristic(a: Waypoint, b: Waypoint) -> float:
    """Euclidean distance between two waypoints."""
    return a.coordinates.distance_to(b.coordinates)


def _reconstruct(came_from: dict[int, int], goal_id: int) -> list[int]:
    path = [goal_id]
    current = goal_id
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def find_path_astar(map_data: MapData, start_id: int, goal_id: int) -> list[int]:
    """Ids of the waypoints on the shortest path from start to goal, both included.

    Edges cost the distance between their waypoints. An empty list means that one
    of the ids is unknown or that the goal cannot be reached.
    """
    started = time.monotonic()

    start = map_data.find_waypoint(start_id)
    goal = map_data.find_waypoint(goal_id)
    if start is None:
        log.warning("A* search: start node id %d not found", start_id)
        return []
    if goal is None:
        log.warning("A* search: goal node id %d not found", goal_id)
        return []

    g_score: dict[int, float] = {start_id: 0.0}
    came_from: dict[int, int] = {}
    closed: set[int] = set()
    open_queue: list[tuple[float, int]] = [(heuristic(start, goal), start_id)]

    log.info("A* search: starting search from %d to %d", start_id, goal_id)
    iterations = 0

    while open_queue:
        iterations += 1
        _, current_id = heapq.heappop(open_queue)

        # Stale queue entries for nodes already settled are skipped.
        if current_id in closed:
            continue
        closed.add(current_id)

        if current_id == goal_id:
            log.info(
                "A* search: goal reached in %.1f ms and %d iterations",
                (time.monotonic() - started) * 1000.0,
                iterations,
            )
            return _reconstruct(came_from, goal_id)

        current = map_data.find_waypoint(current_id)
        if current is None:
            continue

        for neighbor_id in sorted(current.connected_ids):
            if neighbor_id in closed:
                continue
            neighbor = map_data.find_waypoint(neighbor_id)
            if neighbor is None:
                continue

            tentative = g_score[current_id] + current.coordinates.distance_to(neighbor.coordinates)
            if tentative < g_score.get(neighbor_id, math.inf):
                came_from[neighbor_id] = current_id
                g_score[neighbor_id] = tentative
                heapq.heappush(open_queue, (tentative + heuristic(neighbor, goal), neighbor_id))

        if iterations % _PROGRESS_LOG_INTERVAL == 0:
            log.debug(
                "A* iteration %d, queue size %d, current id %d",
                iterations,
                len(open_queue),
                current_id,
            )

    log.warning(
        "A* search: goal not reached after %.1f ms and %d iterations (start %d, goal %d)",
        (time.monotonic() - started) * 1000.0,
        iterations,
        start_id,
        goal_id,
    )
    return []