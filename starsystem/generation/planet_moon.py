"""Planet and moon generation for one system map."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from starsystem.config.system_config import SystemConfiguration
from starsystem.engine.logger import ChannelLogger
from starsystem.generation.moon_placement import MoonPlacement, PlacedMoon
from starsystem.generation.planet_placement import PlacedPlanet, PlanetPlacement
from starsystem.map.grid import SystemMapData


@dataclass
class PlanetMoonResult:
    planets: List[PlacedPlanet] = field(default_factory=list)
    moons: List[PlacedMoon] = field(default_factory=list)
    planet_amount: int = 0
    moon_amount: int = 0


class PlanetMoonGenerator:
    """Draws target counts and drives planet and moon placement."""

    def __init__(
        self,
        planet_placement: PlanetPlacement,
        moon_placement: MoonPlacement,
        rng: random.Random,
        *,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self._planet_placement = planet_placement
        self._moon_placement = moon_placement
        self._rng = rng
        self._logger = logger

    def generate(self, map_data: SystemMapData, config: SystemConfiguration) -> PlanetMoonResult:
        result = PlanetMoonResult(
            planet_amount=self.get_planet_amount(map_data, config),
            moon_amount=self.get_moon_amount(map_data, config),
        )
        if self._logger:
            self._logger.info(
                "Generating %d planets and %d moons on %dx%d map",
                result.planet_amount,
                result.moon_amount,
                map_data.width,
                map_data.height,
            )

        ordinal = 0
        for _ in range(result.planet_amount):
            placed = self._planet_placement.place_planet(ordinal, map_data, config)
            ordinal = placed.ordinal
            result.planets.append(placed)

        result.moons = self._moon_placement.place_moons(
            result.moon_amount, map_data, config, result.planets
        )
        return result

    def get_planet_amount(self, map_data: SystemMapData, config: SystemConfiguration) -> int:
        if not config.has_planets:
            return 0
        return min(config.max_planets, map_data.get_random_planet_amount(self._rng))

    def get_moon_amount(self, map_data: SystemMapData, config: SystemConfiguration) -> int:
        if not config.has_moons:
            return 0
        return min(config.max_moons, map_data.get_random_moon_amount(self._rng))


__all__ = ["PlanetMoonGenerator", "PlanetMoonResult"]
