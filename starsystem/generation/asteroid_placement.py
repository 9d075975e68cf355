"""Asteroid belt generation along a ring around the map center."""
from __future__ import annotations

import random
from typing import List, Optional

from starsystem.config.field_types import FieldType
from starsystem.config.system_config import SystemConfiguration
from starsystem.engine.logger import ChannelLogger
from starsystem.errors import NoFieldIdAvailable
from starsystem.generation.probabilities import PlanetMoonProbabilities
from starsystem.map.blocking import BlockKind
from starsystem.map.grid import SystemMapData
from starsystem.map.point import Field


class AsteroidPlacement:
    BELT_RADIUS_RANGE = (40, 95)

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

    def place_belt(self, map_data: SystemMapData, config: SystemConfiguration) -> List[Field]:
        if not config.has_asteroids or config.max_asteroids <= 0:
            return []
        weights = config.get_probabilities(FieldType.ASTEROID)
        blacklist = config.get_probability_blacklist(FieldType.ASTEROID)
        radius_percentage = self._rng.randint(*self.BELT_RADIUS_RANGE)

        asteroids: List[Field] = []
        for point in map_data.get_asteroid_ring(radius_percentage):
            if len(asteroids) >= config.max_asteroids:
                break
            if not map_data.is_free(point):
                continue
            try:
                field_id = self._probabilities.pick_random_field_id(set(), weights, blacklist)
            except NoFieldIdAvailable:
                break
            field = Field(point, field_id)
            map_data.set_field(field)
            map_data.block_points([point], False, FieldType.ASTEROID, BlockKind.SOFT_BLOCK)
            asteroids.append(field)

        if self._logger:
            self._logger.info(
                "Asteroid belt at %d%%: %d of %d asteroids",
                radius_percentage,
                len(asteroids),
                config.max_asteroids,
            )
        return asteroids


__all__ = ["AsteroidPlacement"]
