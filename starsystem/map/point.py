"""Grid coordinates and the fields written onto them."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Point:
    """1-indexed grid coordinate."""

    x: int
    y: int

    def left(self) -> "Point":
        return Point(self.x - 1, self.y)

    def right(self) -> "Point":
        return Point(self.x + 1, self.y)

    def neighborhood(self, radius: int) -> list["Point"]:
        """Square of points around this one, row-major, unclipped."""

        return [
            Point(self.x + dx, self.y + dy)
            for dy in range(-radius, radius + 1)
            for dx in range(-radius, radius + 1)
        ]


@dataclass(frozen=True)
class Field:
    point: Point
    field_id: int


__all__ = ["Point", "Field"]
