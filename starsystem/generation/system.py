"""Deterministic generation of a complete star system layout."""
from __future__ import annotations

import hashlib
import json
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from starsystem.config.field_types import FieldType
from starsystem.config.system_config import SystemConfiguration, SystemConfigurationDatabase
from starsystem.engine.logger import ChannelLogger, GenerationLogger
from starsystem.errors import NoFieldIdAvailable
from starsystem.generation.asteroid_placement import AsteroidPlacement
from starsystem.generation.moon_placement import MoonPlacement, PlacedMoon
from starsystem.generation.planet_moon import PlanetMoonGenerator
from starsystem.generation.planet_placement import PlacedPlanet, PlanetPlacement
from starsystem.generation.probabilities import PlanetMoonProbabilities
from starsystem.map.blocking import BlockKind
from starsystem.map.grid import SystemMapData
from starsystem.map.point import Field, Point


def _hash_seed(*parts: object) -> int:
    payload = "|".join(str(part) for part in parts)
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return int(digest[:16], 16)


def _point_to_list(point: Point) -> List[int]:
    return [point.x, point.y]


@dataclass
class SystemLayout:
    system_id: str
    seed: int
    size: Tuple[int, int]
    map_data: SystemMapData
    mass_center: Optional[Field]
    planets: List[PlacedPlanet]
    moons: List[PlacedMoon]
    asteroids: List[Field]
    counts: Dict[str, int] = field(default_factory=dict)
    # Wall clock only, not part of the serialised layout.
    generation_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system_id": self.system_id,
            "seed": self.seed,
            "size": list(self.size),
            "mass_center": (
                {"field_id": self.mass_center.field_id, "position": _point_to_list(self.mass_center.point)}
                if self.mass_center
                else None
            ),
            "planets": [
                {
                    "ordinal": planet.ordinal,
                    "field_id": planet.field_id,
                    "position": _point_to_list(planet.center),
                    "display": [_point_to_list(point) for point in planet.display],
                }
                for planet in self.planets
            ],
            "moons": [
                {
                    "planet": moon.planet_ordinal,
                    "field_id": moon.field_id,
                    "position": _point_to_list(moon.point),
                }
                for moon in self.moons
            ],
            "asteroids": [
                {"field_id": asteroid.field_id, "position": _point_to_list(asteroid.point)}
                for asteroid in self.asteroids
            ],
            "counts": self.counts,
            "map": self.map_data.to_string(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


class StarSystemGenerator:
    """Generate deterministic system layouts from configuration records."""

    def __init__(
        self,
        configurations: SystemConfigurationDatabase,
        logger: Optional[GenerationLogger] = None,
    ) -> None:
        self._configurations = configurations
        self._logger = logger

    def _channel(self, name: str) -> Optional[ChannelLogger]:
        if self._logger is None:
            return None
        return self._logger.channel(name)

    def generate(self, system_id: str, seed: int | str = 0) -> SystemLayout:
        config = self._configurations.get(system_id)
        return self.generate_for(config, seed)

    def generate_for(self, config: SystemConfiguration, seed: int | str = 0) -> SystemLayout:
        start_time = time.perf_counter()
        base_seed = _hash_seed(config.id, seed)
        rng = random.Random(base_seed)
        probabilities = PlanetMoonProbabilities(rng)

        size = self.get_map_size(config, rng)
        map_data = SystemMapData(*size)

        mass_center = self._place_mass_center(map_data, config, probabilities)

        planet_moon = PlanetMoonGenerator(
            PlanetPlacement(
                probabilities,
                rng,
                logger=self._channel("placement"),
                diagnostics=self._channel("diagnostics"),
            ),
            MoonPlacement(probabilities, rng, logger=self._channel("moons")),
            rng,
            logger=self._channel("placement"),
        )
        bodies = planet_moon.generate(map_data, config)

        asteroids = AsteroidPlacement(
            probabilities, rng, logger=self._channel("asteroids")
        ).place_belt(map_data, config)

        generation_time_ms = (time.perf_counter() - start_time) * 1000.0
        return SystemLayout(
            system_id=config.id,
            seed=base_seed,
            size=size,
            map_data=map_data,
            mass_center=mass_center,
            planets=bodies.planets,
            moons=bodies.moons,
            asteroids=asteroids,
            generation_time_ms=generation_time_ms,
            counts={
                "planets_requested": bodies.planet_amount,
                "moons_requested": bodies.moon_amount,
                "moons_placed": len(bodies.moons),
                "asteroids_placed": len(asteroids),
            },
        )

    @staticmethod
    def get_map_size(config: SystemConfiguration, rng: random.Random) -> Tuple[int, int]:
        min_size = max(1, config.min_size)
        max_size = max(min_size, min_size * (100 + config.allowed_growth_percentage) // 100)
        edge = rng.randint(min_size, max_size)
        return edge, edge

    def _place_mass_center(
        self,
        map_data: SystemMapData,
        config: SystemConfiguration,
        probabilities: PlanetMoonProbabilities,
    ) -> Optional[Field]:
        try:
            field_id = probabilities.pick_random_field_id(
                set(),
                config.get_probabilities(FieldType.MASS_CENTER),
                config.get_probability_blacklist(FieldType.MASS_CENTER),
            )
        except NoFieldIdAvailable:
            return None
        mass_center = Field(map_data.center_point(), field_id)
        map_data.set_field(mass_center)
        map_data.block_field(mass_center.point, True, FieldType.MASS_CENTER, BlockKind.HARD_BLOCK)
        return mass_center


__all__ = ["StarSystemGenerator", "SystemLayout"]
