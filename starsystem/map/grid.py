"""Field and blocking storage for one star system map."""
from __future__ import annotations

import random
from typing import Dict, Iterable, Iterator, List, Optional

from pygame.math import Vector2

from starsystem.config.field_types import EMPTY_FIELD_ID, FieldKind, FieldType
from starsystem.errors import FieldConflict
from starsystem.map.blocking import (
    BlockKind,
    BlockState,
    HardBlock,
    SoftBlock,
    block_radius,
    forbids,
    merge,
)
from starsystem.map.display import PlanetDisplay
from starsystem.map.point import Field, Point

HARD_MARKER = "#"
SOFT_MARKER = "~"


class SystemMapData:
    """Rectangular map of field ids with per-point blocking state.

    Points are 1-indexed on both axes and map directly onto the rows and
    columns of :meth:`to_string`.
    """

    RING_BAND = 0.5
    CELLS_PER_PLANET = 80
    MOONS_PER_PLANET = 3

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Invalid map size {width}x{height}")
        self._width = width
        self._height = height
        self._fields: List[List[int]] = [[EMPTY_FIELD_ID] * width for _ in range(height)]
        self._blocked: Dict[Point, BlockState] = {}
        self._identifiers: Dict[Point, str] = {}

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, point: Point) -> bool:
        return 1 <= point.x <= self._width and 1 <= point.y <= self._height

    def points(self) -> Iterator[Point]:
        for y in range(1, self._height + 1):
            for x in range(1, self._width + 1):
                yield Point(x, y)

    def center_point(self) -> Point:
        return Point((self._width + 1) // 2, (self._height + 1) // 2)

    # -- fields -----------------------------------------------------------

    def field_id_at(self, point: Point) -> int:
        return self._fields[point.y - 1][point.x - 1]

    def block_state(self, point: Point) -> BlockState:
        return self._blocked.get(point)

    def is_free(self, point: Point) -> bool:
        return (
            self.in_bounds(point)
            and self.field_id_at(point) == EMPTY_FIELD_ID
            and point not in self._blocked
        )

    def set_field(self, field: Field, block_kind_hint: Optional[BlockKind] = None) -> None:
        point = field.point
        if not self.in_bounds(point):
            raise FieldConflict(f"{point} is outside the {self._width}x{self._height} map")
        kind = FieldKind.decode(field.field_id)
        state = self._blocked.get(point)
        if forbids(state, kind.category):
            raise FieldConflict(f"{point} is blocked ({state}) for {field.field_id}")
        current = self.field_id_at(point)
        if current not in (EMPTY_FIELD_ID, field.field_id):
            raise FieldConflict(f"{point} already holds {current}")
        self._fields[point.y - 1][point.x - 1] = field.field_id
        if block_kind_hint is not None:
            self._blocked[point] = merge(state, SoftBlock(kind.category, block_kind_hint))

    def fields(self) -> Iterator[Field]:
        for point in self.points():
            field_id = self.field_id_at(point)
            if field_id != EMPTY_FIELD_ID:
                yield Field(point, field_id)

    # -- blocking ---------------------------------------------------------

    def block_field(
        self,
        point: Point,
        is_hard: bool,
        owner: Optional[FieldType] = None,
        kind: BlockKind = BlockKind.HARD_BLOCK,
    ) -> None:
        """Block the neighborhood of ``point`` sized by ``owner``.

        MASS_CENTER owners cover 5x5, other owners 3x3 and ``None`` only the
        point itself. Cells outside the map are skipped.
        """

        targets = [p for p in point.neighborhood(block_radius(owner)) if self.in_bounds(p)]
        self.block_points(targets, is_hard, owner, kind)

    def block_points(
        self,
        points: Iterable[Point],
        is_hard: bool,
        owner: Optional[FieldType] = None,
        kind: BlockKind = BlockKind.HARD_BLOCK,
    ) -> None:
        incoming = HardBlock(owner, kind) if is_hard else SoftBlock(owner, kind)
        merged: Dict[Point, BlockState] = {}
        for point in points:
            if not self.in_bounds(point):
                raise FieldConflict(f"{point} is outside the {self._width}x{self._height} map")
            try:
                merged[point] = merge(self._blocked.get(point), incoming)
            except ValueError as exc:
                raise FieldConflict(f"{point} {exc}") from exc
        self._blocked.update(merged)

    # -- identifiers ------------------------------------------------------

    def add_identifier(self, point: Point, label: str) -> None:
        self._identifiers[point] = label

    def identifier_at(self, point: Point) -> Optional[str]:
        return self._identifiers.get(point)

    # -- geometry queries -------------------------------------------------

    def get_asteroid_ring(self, radius_percentage: int) -> List[Point]:
        """Points within half a cell of a circle around the map center."""

        center = Vector2(self._width / 2, self._height / 2)
        radius = min(self._width, self._height) / 2 * radius_percentage / 100
        inner = radius - self.RING_BAND
        outer = radius + self.RING_BAND
        ring: List[Point] = []
        for point in self.points():
            distance = center.distance_to(Vector2(point.x, point.y))
            if inner <= distance < outer:
                ring.append(point)
        return ring

    def get_planet_display(
        self,
        radius_percentage: int,
        moon_range: int,
        identifier: Optional[str] = None,
    ) -> Optional[PlanetDisplay]:
        """First free square of side ``2 * moon_range + 1`` on the orbit."""

        for orbit_point in self.get_asteroid_ring(radius_percentage):
            square = orbit_point.neighborhood(moon_range)
            if all(self.is_free(point) for point in square):
                return PlanetDisplay(tuple(square), identifier)
        return None

    # -- amounts ----------------------------------------------------------

    def _planet_capacity(self) -> int:
        return max(1, (self._width * self._height) // self.CELLS_PER_PLANET)

    def get_random_planet_amount(self, rng: random.Random) -> int:
        return rng.randint(1, self._planet_capacity())

    def get_random_moon_amount(self, rng: random.Random) -> int:
        return rng.randint(0, self._planet_capacity() * self.MOONS_PER_PLANET)

    # -- diagnostics ------------------------------------------------------

    def _token(self, point: Point, show_blocked: bool, show_identifiers: bool) -> str:
        field_id = self.field_id_at(point)
        token = str(field_id)
        if show_blocked and field_id == EMPTY_FIELD_ID:
            state = self._blocked.get(point)
            if isinstance(state, HardBlock):
                token = HARD_MARKER
            elif isinstance(state, SoftBlock):
                token = SOFT_MARKER
        if show_identifiers:
            label = self._identifiers.get(point)
            if label is not None:
                token = f"{token}[{label}]"
        return token

    def to_string(self, show_blocked: bool = False, show_identifiers: bool = False) -> str:
        lines = []
        for y in range(1, self._height + 1):
            row = [
                self._token(Point(x, y), show_blocked, show_identifiers)
                for x in range(1, self._width + 1)
            ]
            lines.append(",".join(row) + "\n")
        return "".join(lines)


__all__ = ["SystemMapData", "HARD_MARKER", "SOFT_MARKER"]
