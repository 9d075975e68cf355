"""Field id encoding shared with the configuration records.

Field ids are plain integers in the data files. ``id // 100`` is the coarse
class of a body and ring sub-fields are encoded as ``id * 10 + 1`` (left) and
``id * 10 + 2`` (right) of their planet.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache


class FieldType(Enum):
    EMPTY = "empty"
    MASS_CENTER = "mass_center"
    PLANET = "planet"
    MOON = "moon"
    ASTEROID = "asteroid"
    RING = "ring"
    UNCLASSIFIED = "unclassified"


EMPTY_FIELD_ID = 0
RING_BEARING_CLASS = 3
PLANET_CLASSES = (2, RING_BEARING_CLASS)
MOON_CLASS = 4
ASTEROID_CLASS = 7
MASS_CENTER_CLASSES = range(10, 20)
RING_CLASSES = range(30, 40)


def _category_for_class(field_class: int) -> FieldType:
    if field_class in PLANET_CLASSES:
        return FieldType.PLANET
    if field_class == MOON_CLASS:
        return FieldType.MOON
    if field_class == ASTEROID_CLASS:
        return FieldType.ASTEROID
    if field_class in MASS_CENTER_CLASSES:
        return FieldType.MASS_CENTER
    if field_class in RING_CLASSES:
        return FieldType.RING
    return FieldType.UNCLASSIFIED


@dataclass(frozen=True)
class FieldKind:
    raw_id: int
    category: FieldType
    field_class: int
    is_ring_bearing: bool

    @classmethod
    def decode(cls, field_id: int) -> "FieldKind":
        return _decode(int(field_id))

    @property
    def left_ring_id(self) -> int:
        return self.raw_id * 10 + 1

    @property
    def right_ring_id(self) -> int:
        return self.raw_id * 10 + 2


@lru_cache(maxsize=None)
def _decode(field_id: int) -> FieldKind:
    if field_id == EMPTY_FIELD_ID:
        return FieldKind(field_id, FieldType.EMPTY, 0, False)
    field_class = field_id // 100
    return FieldKind(
        raw_id=field_id,
        category=_category_for_class(field_class),
        field_class=field_class,
        is_ring_bearing=field_class == RING_BEARING_CLASS,
    )


def field_type_from_key(key: str) -> FieldType:
    """Map a configuration key such as ``"planet"`` to its field type."""

    try:
        return FieldType(key.lower())
    except ValueError:
        raise ValueError(f"Unknown field type '{key}'") from None


__all__ = [
    "FieldType",
    "FieldKind",
    "EMPTY_FIELD_ID",
    "RING_BEARING_CLASS",
    "field_type_from_key",
]
