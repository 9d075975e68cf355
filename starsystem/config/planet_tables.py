"""Size tables keyed by planet class."""
from __future__ import annotations

import random
from typing import Dict, Tuple

from starsystem.config.field_types import FieldKind, FieldType
from starsystem.errors import InvalidPlanetField

# Cells reserved around the planet for moon orbits.
PLANET_MOON_RANGE: Dict[int, int] = {
    2: 2,
    3: 3,
}

# Orbit radius as percentage of the map half-extent.
PLANET_RADIUS_PERCENTAGE: Dict[int, Tuple[int, int]] = {
    2: (20, 95),
    3: (30, 95),
}


def _planet_class(field_id: int) -> int:
    kind = FieldKind.decode(field_id)
    if kind.category is not FieldType.PLANET:
        raise InvalidPlanetField(f"field id {field_id} is not a planet")
    return kind.field_class


def get_planet_moon_range(field_id: int) -> int:
    return PLANET_MOON_RANGE[_planet_class(field_id)]


def get_random_planet_radius_percentage(field_id: int, rng: random.Random) -> int:
    low, high = PLANET_RADIUS_PERCENTAGE[_planet_class(field_id)]
    return rng.randint(low, high)


__all__ = [
    "PLANET_MOON_RANGE",
    "PLANET_RADIUS_PERCENTAGE",
    "get_planet_moon_range",
    "get_random_planet_radius_percentage",
]
