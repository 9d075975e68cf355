"""Placement of single planets onto a system map."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from starsystem.config.field_types import FieldKind, FieldType
from starsystem.config.planet_tables import (
    get_planet_moon_range,
    get_random_planet_radius_percentage,
)
from starsystem.config.system_config import SystemConfiguration
from starsystem.engine.logger import ChannelLogger
from starsystem.errors import (
    FieldConflict,
    NoFieldIdAvailable,
    PlacementInconsistency,
    PlanetMaximumReached,
)
from starsystem.generation.probabilities import PlanetMoonProbabilities
from starsystem.map.blocking import BlockKind
from starsystem.map.display import PlanetDisplay
from starsystem.map.grid import SystemMapData
from starsystem.map.point import Field, Point


@dataclass(frozen=True)
class PlacedPlanet:
    """A planet written to the map; ``ordinal`` is its 1-based placement index."""

    ordinal: int
    field_id: int
    center: Point
    display: PlanetDisplay

    @property
    def label(self) -> str:
        return str(self.ordinal)


def dump_both_displays(map_data: SystemMapData, logger: Optional[ChannelLogger], reason: str) -> None:
    if logger is None:
        return
    logger.dump(f"{reason} (blocked)", map_data.to_string(True))
    logger.dump(f"{reason} (blocked, identifiers)", map_data.to_string(True, True))


class PlanetPlacement:
    """Places one planet per call within nested retry limits.

    Up to ``MAX_TRIED_PLANET_TYPES`` distinct planet types are drawn. Each is
    given ``MAX_RETRIES_PER_PLANET_TYPE`` random orbit radii to find a free
    display before the next type is drawn.
    """

    MAX_TRIED_PLANET_TYPES = 20
    MAX_RETRIES_PER_PLANET_TYPE = 5

    def __init__(
        self,
        probabilities: PlanetMoonProbabilities,
        rng: random.Random,
        *,
        logger: Optional[ChannelLogger] = None,
        diagnostics: Optional[ChannelLogger] = None,
    ) -> None:
        self._probabilities = probabilities
        self._rng = rng
        self._logger = logger
        self._diagnostics = diagnostics

    def place_planet(
        self,
        ordinal: int,
        map_data: SystemMapData,
        config: SystemConfiguration,
    ) -> PlacedPlanet:
        label = str(ordinal + 1)
        weights = config.get_probabilities(FieldType.PLANET)
        blacklist = config.get_probability_blacklist(FieldType.PLANET)

        tried_field_ids: List[int] = []
        planet_display: Optional[PlanetDisplay] = None
        field_id = 0
        while len(tried_field_ids) < self.MAX_TRIED_PLANET_TYPES:
            try:
                field_id = self._probabilities.pick_random_field_id(
                    set(tried_field_ids), weights, blacklist
                )
            except NoFieldIdAvailable:
                break
            tried_field_ids.append(field_id)

            planet_display = self._try_to_find_planet_display(map_data, field_id, label)
            if planet_display is not None:
                break

        if planet_display is None:
            dump_both_displays(map_data, self._diagnostics, f"planet {label} failed")
            raise PlanetMaximumReached(
                f"could not place any of {self.MAX_TRIED_PLANET_TYPES} colony classes"
                f" (tried {tried_field_ids})"
            )

        placed = PlacedPlanet(
            ordinal=ordinal + 1,
            field_id=field_id,
            center=planet_display.center(),
            display=planet_display,
        )
        try:
            self._write_planet(map_data, placed)
        except FieldConflict as exc:
            dump_both_displays(map_data, self._diagnostics, f"planet {label} inconsistent")
            raise PlacementInconsistency(
                f"free display for planet {label} ({field_id}) could not be written: {exc}"
            ) from exc

        if self._logger:
            self._logger.info(
                "Planet %s placed: field %d at (%d, %d), %d tried types",
                placed.label,
                field_id,
                placed.center.x,
                placed.center.y,
                len(tried_field_ids),
            )
        return placed

    def _try_to_find_planet_display(
        self,
        map_data: SystemMapData,
        field_id: int,
        label: str,
    ) -> Optional[PlanetDisplay]:
        moon_range = get_planet_moon_range(field_id)
        for _ in range(self.MAX_RETRIES_PER_PLANET_TYPE):
            radius_percentage = get_random_planet_radius_percentage(field_id, self._rng)
            display = map_data.get_planet_display(radius_percentage, moon_range, label)
            if display is not None:
                return display
            if self._logger:
                self._logger.debug(
                    "No display for field %d at radius %d%%", field_id, radius_percentage
                )
        return None

    def _write_planet(self, map_data: SystemMapData, placed: PlacedPlanet) -> None:
        center = placed.center
        map_data.set_field(Field(center, placed.field_id))
        map_data.add_identifier(center, placed.label)

        if FieldKind.decode(placed.field_id).is_ring_bearing:
            self._add_planet_ring(map_data, placed.field_id, center)

        map_data.block_field(center, True, FieldType.PLANET, BlockKind.HARD_BLOCK)
        # Rest of the display stays reserved for this planet's moons.
        map_data.block_points(placed.display.points, False, FieldType.MOON, BlockKind.SOFT_BLOCK)

    def _add_planet_ring(self, map_data: SystemMapData, field_id: int, center: Point) -> None:
        kind = FieldKind.decode(field_id)
        left = center.left()
        right = center.right()

        map_data.set_field(Field(left, kind.left_ring_id), BlockKind.MASS_CENTER_PERIMETER_BLOCK)
        map_data.set_field(Field(right, kind.right_ring_id), BlockKind.MASS_CENTER_PERIMETER_BLOCK)

        map_data.block_field(left, True, None, BlockKind.HARD_BLOCK)
        map_data.block_field(right, True, None, BlockKind.HARD_BLOCK)


__all__ = ["PlanetPlacement", "PlacedPlanet", "dump_both_displays"]
