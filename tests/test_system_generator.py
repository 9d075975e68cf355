import json
import logging
import random

import pytest

from starsystem.config.field_types import FieldKind, FieldType
from starsystem.config.system_config import (
    SystemConfiguration,
    SystemConfigurationDatabase,
    load_default_configurations,
)
from starsystem.errors import UnknownSystemError
from starsystem.generation.system import StarSystemGenerator
from starsystem.map.blocking import HardBlock
from starsystem.map.point import Point

SYSTEM = {
    "id": "alpha",
    "allowedGrowthPercentage": 0,
    "minSize": 40,
    "hasPlanets": True,
    "hasMoons": True,
    "hasAsteroids": True,
    "maxPlanets": 3,
    "maxMoons": 6,
    "maxAsteroids": 20,
    "probabilities": {
        "mass_center": {"1001": 1},
        "planet": {"201": 5, "202": 3, "301": 2},
        "moon": {"401": 1, "402": 1},
        "asteroid": {"701": 3, "702": 1},
    },
    "blacklist": {"planet": [202]},
}


def make_generator(tmp_path) -> StarSystemGenerator:
    path = tmp_path / "alpha.json"
    path.write_text(json.dumps(SYSTEM))
    database = SystemConfigurationDatabase()
    database.load_directory(tmp_path)
    return StarSystemGenerator(database)


def test_same_seed_same_layout(tmp_path):
    generator = make_generator(tmp_path)

    first = generator.generate("alpha", 17)
    second = generator.generate("alpha", 17)

    assert first.map_data.to_string() == second.map_data.to_string()
    assert first.map_data.to_string(True, True) == second.map_data.to_string(True, True)
    assert first.to_json() == second.to_json()
    assert "generation_time_ms" not in first.to_dict()


def test_layout_structure(tmp_path):
    layout = make_generator(tmp_path).generate("alpha", 3)
    map_data = layout.map_data

    assert layout.size == (40, 40)
    assert layout.mass_center is not None
    assert layout.mass_center.point == Point(20, 20)
    assert map_data.block_state(Point(18, 18)) == HardBlock(FieldType.MASS_CENTER)
    assert 1 <= len(layout.planets) <= 3
    assert all(planet.field_id != 202 for planet in layout.planets)
    assert len(layout.asteroids) <= 20
    for asteroid in layout.asteroids:
        assert map_data.field_id_at(asteroid.point) == asteroid.field_id


def test_ring_invariant_holds_on_map(tmp_path):
    layout = make_generator(tmp_path).generate("alpha", 11)
    map_data = layout.map_data

    ring_points = set()
    for field in map_data.fields():
        kind = FieldKind.decode(field.field_id)
        if kind.is_ring_bearing:
            left = field.point.left()
            right = field.point.right()
            assert map_data.field_id_at(left) == kind.left_ring_id
            assert map_data.field_id_at(right) == kind.right_ring_id
            ring_points.update({left, right})
    assert ring_points == {
        field.point for field in map_data.fields()
        if FieldKind.decode(field.field_id).category is FieldType.RING
    }


def test_layout_serialises(tmp_path):
    layout = make_generator(tmp_path).generate("alpha", "seed")

    data = json.loads(layout.to_json())

    assert data["system_id"] == "alpha"
    assert data["size"] == [40, 40]
    assert len(data["planets"]) == len(layout.planets)
    assert data["map"] == layout.map_data.to_string()


def test_unknown_system(tmp_path):
    with pytest.raises(UnknownSystemError):
        make_generator(tmp_path).generate("missing")


def test_map_size_uses_growth():
    config = SystemConfiguration(id="x", min_size=22, allowed_growth_percentage=300)
    rng = random.Random(4)

    for _ in range(30):
        width, height = StarSystemGenerator.get_map_size(config, rng)
        assert width == height
        assert 22 <= width <= 88


def test_generator_leaves_root_logging_alone(tmp_path):
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)

    make_generator(tmp_path).generate("alpha", 5)
    StarSystemGenerator(load_default_configurations()).generate("1044", 1)

    assert root.level == level
    assert root.handlers == handlers
