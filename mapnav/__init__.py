"""Waypoint maps, line-of-sight checks, and A* and Bug pathfinding for 3D navigation."""

__version__ = "0.1.0"