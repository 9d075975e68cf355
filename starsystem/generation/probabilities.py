"""Weighted draws of field ids from configured probability tables."""
from __future__ import annotations

import random
from typing import AbstractSet, Mapping

from starsystem.errors import NoFieldIdAvailable


class PlanetMoonProbabilities:
    """Draws field ids proportionally to their configured weight."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def pick_random_field_id(
        self,
        excluded: AbstractSet[int],
        weights: Mapping[int, int],
        blacklist: AbstractSet[int],
    ) -> int:
        candidates = sorted(
            field_id
            for field_id, weight in weights.items()
            if weight > 0 and field_id not in excluded and field_id not in blacklist
        )
        if not candidates:
            raise NoFieldIdAvailable(
                f"no field id left among {len(weights)} weighted candidates"
            )
        return self._rng.choices(candidates, weights=[weights[field_id] for field_id in candidates], k=1)[0]


__all__ = ["PlanetMoonProbabilities"]
