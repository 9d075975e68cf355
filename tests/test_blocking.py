import pytest

from starsystem.config.field_types import FieldType
from starsystem.map.blocking import (
    BlockKind,
    HardBlock,
    SoftBlock,
    block_radius,
    forbids,
    merge,
)


def test_free_point_forbids_nothing():
    assert not forbids(None, FieldType.PLANET)


def test_hard_block_forbids_every_category():
    state = HardBlock(FieldType.PLANET)
    for category in FieldType:
        assert forbids(state, category)


def test_soft_block_forbids_foreign_categories():
    state = SoftBlock(FieldType.MOON)

    assert not forbids(state, FieldType.MOON)
    assert forbids(state, FieldType.PLANET)
    assert forbids(SoftBlock(None), FieldType.MOON)


def test_merge_upgrades_soft_to_hard():
    incoming = HardBlock(FieldType.PLANET)

    assert merge(SoftBlock(FieldType.MOON), incoming) == incoming
    assert merge(None, incoming) == incoming


def test_merge_keeps_hard_against_soft():
    existing = HardBlock(FieldType.PLANET)

    assert merge(existing, SoftBlock(FieldType.MOON)) == existing


def test_merge_hard_blocks():
    planet = HardBlock(FieldType.PLANET)
    anonymous = HardBlock(None, BlockKind.HARD_BLOCK)

    assert merge(anonymous, planet) == planet
    assert merge(planet, anonymous) == planet
    assert merge(planet, HardBlock(FieldType.PLANET)) == planet
    with pytest.raises(ValueError):
        merge(planet, HardBlock(FieldType.MASS_CENTER))


def test_block_radius_by_owner():
    assert block_radius(None) == 0
    assert block_radius(FieldType.PLANET) == 1
    assert block_radius(FieldType.MOON) == 1
    assert block_radius(FieldType.MASS_CENTER) == 2
