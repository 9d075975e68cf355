"""Candidate footprints for planets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from starsystem.map.point import Point


@dataclass(frozen=True)
class PlanetDisplay:
    """Square footprint of a planet and its moon orbits, row-major."""

    points: Tuple[Point, ...]
    identifier: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.points:
            raise ValueError("PlanetDisplay requires at least one point")

    @property
    def first_point(self) -> Point:
        return self.points[0]

    @property
    def last_point(self) -> Point:
        return self.points[-1]

    def center(self) -> Point:
        first = self.first_point
        last = self.last_point
        return Point((first.x + last.x) // 2, (first.y + last.y) // 2)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __contains__(self, point: object) -> bool:
        return point in self.points


__all__ = ["PlanetDisplay"]
