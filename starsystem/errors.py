"""Error types raised while generating a star system layout."""
from __future__ import annotations


class StarSystemError(RuntimeError):
    """Base class for generation failures."""


class FieldConflict(StarSystemError):
    """A grid point can not take the requested field or block."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"field can not be used: {detail}")
        self.detail = detail


class PlanetMaximumReached(StarSystemError):
    """No planet type could be placed within the retry limits."""


class PlacementInconsistency(StarSystemError):
    """A display reported as free could not be written."""


class NoFieldIdAvailable(StarSystemError):
    """Every candidate field id is excluded or blacklisted."""


class InvalidPlanetField(StarSystemError, ValueError):
    """A planet table names a field id outside the planet classes."""


class UnknownSystemError(KeyError):
    """No configuration record exists for a system id."""


__all__ = [
    "StarSystemError",
    "FieldConflict",
    "PlanetMaximumReached",
    "PlacementInconsistency",
    "NoFieldIdAvailable",
    "InvalidPlanetField",
    "UnknownSystemError",
]
