"""Per-point exclusion state and the rules deciding placement conflicts."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from starsystem.config.field_types import FieldType


class BlockKind(Enum):
    HARD_BLOCK = "hard_block"
    SOFT_BLOCK = "soft_block"
    MASS_CENTER_PERIMETER_BLOCK = "mass_center_perimeter_block"


@dataclass(frozen=True)
class SoftBlock:
    """Reserved for fields of the owning category."""

    owner: Optional[FieldType]
    kind: BlockKind = BlockKind.SOFT_BLOCK


@dataclass(frozen=True)
class HardBlock:
    """No field may be written here anymore."""

    owner: Optional[FieldType]
    kind: BlockKind = BlockKind.HARD_BLOCK


BlockState = Union[SoftBlock, HardBlock, None]

# Neighborhood radius marked around a blocked point, by owning category.
MASS_CENTER_BLOCK_RADIUS = 2
BODY_BLOCK_RADIUS = 1


def block_radius(owner: Optional[FieldType]) -> int:
    if owner is None:
        return 0
    if owner is FieldType.MASS_CENTER:
        return MASS_CENTER_BLOCK_RADIUS
    return BODY_BLOCK_RADIUS


def forbids(state: BlockState, category: FieldType) -> bool:
    """Return True when ``state`` rejects a field of ``category``."""

    if state is None:
        return False
    if isinstance(state, HardBlock):
        return True
    return state.owner is not category


def merge(existing: BlockState, incoming: Union[SoftBlock, HardBlock]) -> Union[SoftBlock, HardBlock]:
    """Combine a new block with the current one.

    Raises ``ValueError`` when two hard blocks of different owners meet.
    """

    if isinstance(existing, HardBlock):
        if isinstance(incoming, SoftBlock):
            return existing
        if existing.owner is None:
            return incoming
        if incoming.owner is None or incoming.owner is existing.owner:
            return existing
        raise ValueError(
            f"hard-blocked by {existing.owner.value}, requested by {incoming.owner.value}"
        )
    return incoming


__all__ = [
    "BlockKind",
    "BlockState",
    "SoftBlock",
    "HardBlock",
    "block_radius",
    "forbids",
    "merge",
]
