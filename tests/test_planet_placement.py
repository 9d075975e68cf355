import logging
import random

import pytest

from starsystem.config.field_types import FieldKind, FieldType
from starsystem.config.system_config import SystemConfiguration
from starsystem.engine.logger import ChannelLogger
from starsystem.errors import FieldConflict, PlacementInconsistency, PlanetMaximumReached
from starsystem.generation.planet_placement import PlanetPlacement
from starsystem.generation.probabilities import PlanetMoonProbabilities
from starsystem.map.blocking import BlockKind, HardBlock, SoftBlock
from starsystem.map.display import PlanetDisplay
from starsystem.map.grid import SystemMapData
from starsystem.map.point import Point


def make_config(planets, blacklist=()) -> SystemConfiguration:
    return SystemConfiguration(
        id="test",
        has_planets=True,
        max_planets=10,
        probabilities={FieldType.PLANET: dict(planets)},
        blacklist={FieldType.PLANET: frozenset(blacklist)},
    )


def make_placement(seed: int = 1, diagnostics=None) -> PlanetPlacement:
    rng = random.Random(seed)
    return PlanetPlacement(PlanetMoonProbabilities(rng), rng, diagnostics=diagnostics)


def test_place_planet_writes_center_and_blocks_perimeter():
    map_data = SystemMapData(30, 30)
    placement = make_placement()

    placed = placement.place_planet(0, map_data, make_config({201: 1}))

    assert placed.ordinal == 1
    assert placed.field_id == 201
    assert len(placed.display) == 25
    assert placed.center == placed.display.center()
    assert map_data.field_id_at(placed.center) == 201
    assert map_data.identifier_at(placed.center) == "1"
    assert placed.display.identifier == "1"
    for point in placed.center.neighborhood(1):
        assert map_data.block_state(point) == HardBlock(FieldType.PLANET, BlockKind.HARD_BLOCK)
    outer = [point for point in placed.display if point not in placed.center.neighborhood(1)]
    assert len(outer) == 16
    for point in outer:
        assert map_data.block_state(point) == SoftBlock(FieldType.MOON, BlockKind.SOFT_BLOCK)
        assert map_data.field_id_at(point) == 0


def test_ring_planet_gets_ring_fields():
    map_data = SystemMapData(30, 30)
    placement = make_placement(seed=4)

    placed = placement.place_planet(0, map_data, make_config({301: 1}))

    center = placed.center
    assert len(placed.display) == 49
    assert map_data.field_id_at(center) == 301
    assert map_data.field_id_at(center.left()) == 3011
    assert map_data.field_id_at(center.right()) == 3012
    assert isinstance(map_data.block_state(center.left()), HardBlock)
    assert isinstance(map_data.block_state(center.right()), HardBlock)
    ring_fields = [field for field in map_data.fields() if FieldKind.decode(field.field_id).category is FieldType.RING]
    assert len(ring_fields) == 2


def test_plain_planet_has_no_ring():
    map_data = SystemMapData(30, 30)

    placed = make_placement().place_planet(0, map_data, make_config({202: 1}))

    assert map_data.field_id_at(placed.center.left()) == 0
    assert map_data.field_id_at(placed.center.right()) == 0
    assert len(list(map_data.fields())) == 1


def test_ordinal_is_owned_by_caller():
    map_data = SystemMapData(40, 40)
    placement = make_placement(seed=8)
    config = make_config({201: 3, 202: 2, 301: 1})

    first = placement.place_planet(0, map_data, config)
    second = placement.place_planet(first.ordinal, map_data, config)

    assert (first.ordinal, second.ordinal) == (1, 2)
    assert map_data.identifier_at(second.center) == "2"


def test_placed_planets_never_overlap():
    map_data = SystemMapData(40, 40)
    placement = make_placement(seed=21)
    config = make_config({201: 3, 202: 2, 301: 2, 302: 1})

    planets = []
    ordinal = 0
    for _ in range(4):
        placed = placement.place_planet(ordinal, map_data, config)
        ordinal = placed.ordinal
        planets.append(placed)

    perimeters = [set(planet.center.neighborhood(1)) for planet in planets]
    for index, perimeter in enumerate(perimeters):
        for other in perimeters[index + 1:]:
            assert not perimeter & other
    for planet in planets:
        kind = FieldKind.decode(planet.field_id)
        if kind.is_ring_bearing:
            assert map_data.field_id_at(planet.center.left()) == planet.field_id * 10 + 1
            assert map_data.field_id_at(planet.center.right()) == planet.field_id * 10 + 2


def test_exhaustion_raises_without_mutating(caplog):
    map_data = SystemMapData(10, 10)
    map_data.block_points(list(map_data.points()), True)
    before = map_data.to_string(True, True)
    diagnostics = ChannelLogger("diagnostics", logging.getLogger("tests.diagnostics"), True)
    placement = make_placement(diagnostics=diagnostics)
    caplog.set_level(logging.WARNING, logger="tests.diagnostics")

    with pytest.raises(PlanetMaximumReached, match="could not place any of 20 colony classes"):
        placement.place_planet(0, map_data, make_config({201: 1, 202: 1, 301: 1, 203: 1}, blacklist={203}))

    assert map_data.to_string(True, True) == before
    assert "planet 1 failed" in caplog.text


def test_blacklist_only_table_raises():
    map_data = SystemMapData(30, 30)

    with pytest.raises(PlanetMaximumReached):
        make_placement().place_planet(0, map_data, make_config({201: 1}, blacklist={201}))

    assert list(map_data.fields()) == []


class _LyingMapData(SystemMapData):
    """Reports a display over a hard-blocked point."""

    def get_planet_display(self, radius_percentage, moon_range, identifier=None):
        return PlanetDisplay(tuple(Point(5, 5).neighborhood(moon_range)), identifier)


def test_write_conflict_is_a_placement_inconsistency():
    map_data = _LyingMapData(9, 9)
    map_data.block_field(Point(5, 5), True)

    with pytest.raises(PlacementInconsistency) as excinfo:
        make_placement().place_planet(0, map_data, make_config({201: 1}))

    assert isinstance(excinfo.value.__cause__, FieldConflict)
    assert not isinstance(excinfo.value, PlanetMaximumReached)
