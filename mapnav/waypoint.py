"""Waypoints of the navigation graph and their JSON form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .vector import Vec3

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _json_int(value: Any, default: int = 0) -> int:
    """Integer value of a JSON number, or ``default`` if it is not a whole number in int range."""
    if not _is_number(value):
        return default
    if isinstance(value, float) and not value.is_integer():
        return default
    result = int(value)
    if result < _INT_MIN or result > _INT_MAX:
        return default
    return result


def _json_float(value: Any, default: float = 0.0) -> float:
    """Float value of a JSON number, or ``default``."""
    return float(value) if _is_number(value) else default


def _json_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class Waypoint:
    """A named point with links to other waypoints by id."""

    id: int = 0
    name: str = ""
    coordinates: Vec3 = field(default_factory=Vec3)
    connected_ids: set[int] = field(default_factory=set)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Waypoint:
        """Build a waypoint from its JSON object; missing fields take defaults."""
        waypoint = cls(id=_json_int(data.get("id")), name=_json_str(data.get("name")))

        coords = data.get("coordinates")
        if isinstance(coords, dict):
            waypoint.coordinates = Vec3(
                _json_float(coords.get("x")),
                _json_float(coords.get("y")),
                _json_float(coords.get("z")),
            )

        connections = data.get("connections")
        if isinstance(connections, list):
            for value in connections:
                # Strings are accepted as entries but, as JSON values, convert to the default id.
                if _is_number(value) or isinstance(value, str):
                    waypoint.connected_ids.add(_json_int(value))
        return waypoint

    def to_json(self) -> dict[str, Any]:
        """JSON object for this waypoint."""
        return {
            "id": self.id,
            "name": self.name,
            "coordinates": {
                "x": self.coordinates.x,
                "y": self.coordinates.y,
                "z": self.coordinates.z,
            },
            "connections": sorted(self.connected_ids),
        }