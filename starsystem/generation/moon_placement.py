"""Attachment of moons to already placed planets."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from starsystem.config.field_types import EMPTY_FIELD_ID, FieldType
from starsystem.config.system_config import SystemConfiguration
from starsystem.engine.logger import ChannelLogger
from starsystem.errors import NoFieldIdAvailable
from starsystem.generation.planet_placement import PlacedPlanet
from starsystem.generation.probabilities import PlanetMoonProbabilities
from starsystem.map.blocking import BlockKind, SoftBlock
from starsystem.map.grid import SystemMapData
from starsystem.map.point import Field, Point


@dataclass(frozen=True)
class PlacedMoon:
    planet_ordinal: int
    field_id: int
    point: Point


class MoonPlacement:
    """Puts moons on the reserved orbit cells of placed planets.

    A moon only lands on a point of its planet's display that is still empty
    and soft-blocked for moons, so the blocking written by the planet
    placement is never violated.
    """

    def __init__(
        self,
        probabilities: PlanetMoonProbabilities,
        rng: random.Random,
        *,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self._probabilities = probabilities
        self._rng = rng
        self._logger = logger

    def free_moon_points(self, map_data: SystemMapData, planet: PlacedPlanet) -> List[Point]:
        points = []
        for point in planet.display:
            state = map_data.block_state(point)
            if (
                map_data.field_id_at(point) == EMPTY_FIELD_ID
                and isinstance(state, SoftBlock)
                and state.owner is FieldType.MOON
            ):
                points.append(point)
        return points

    def place_moon(
        self,
        map_data: SystemMapData,
        config: SystemConfiguration,
        planets: Sequence[PlacedPlanet],
    ) -> Optional[PlacedMoon]:
        """Attach one moon, or return None when no planet has room left."""

        eligible = [planet for planet in planets if self.free_moon_points(map_data, planet)]
        if not eligible:
            return None
        try:
            field_id = self._probabilities.pick_random_field_id(
                set(),
                config.get_probabilities(FieldType.MOON),
                config.get_probability_blacklist(FieldType.MOON),
            )
        except NoFieldIdAvailable:
            return None
        planet = self._rng.choice(eligible)
        point = self.free_moon_points(map_data, planet)[0]

        map_data.set_field(Field(point, field_id))
        map_data.block_points([point], True, FieldType.MOON, BlockKind.HARD_BLOCK)
        return PlacedMoon(planet_ordinal=planet.ordinal, field_id=field_id, point=point)

    def place_moons(
        self,
        amount: int,
        map_data: SystemMapData,
        config: SystemConfiguration,
        planets: Sequence[PlacedPlanet],
    ) -> List[PlacedMoon]:
        moons: List[PlacedMoon] = []
        remaining = amount
        while remaining > 0:
            moon = self.place_moon(map_data, config, planets)
            if moon is None:
                if self._logger:
                    self._logger.info("Dropping %d of %d moons, no orbit left", remaining, amount)
                break
            moons.append(moon)
            remaining -= 1
        return moons


__all__ = ["MoonPlacement", "PlacedMoon"]
