"""Per-system configuration records."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional

from starsystem.config.field_types import FieldKind, FieldType, field_type_from_key
from starsystem.errors import UnknownSystemError

DEFAULT_DATA_DIRECTORY = Path(__file__).resolve().parent / "data"


def _parse_probabilities(data: Dict) -> Dict[FieldType, Dict[int, int]]:
    tables: Dict[FieldType, Dict[int, int]] = {}
    for key, table in data.items():
        tables[field_type_from_key(key)] = {
            int(field_id): int(weight) for field_id, weight in table.items()
        }
    for field_id in tables.get(FieldType.PLANET, {}):
        if FieldKind.decode(field_id).category is not FieldType.PLANET:
            raise ValueError(f"planet table holds non-planet field id {field_id}")
    return tables


def _parse_blacklist(data: Dict) -> Dict[FieldType, FrozenSet[int]]:
    return {
        field_type_from_key(key): frozenset(int(field_id) for field_id in ids)
        for key, ids in data.items()
    }


@dataclass
class SystemConfiguration:
    """Numeric parameter set driving the layout of one system."""

    id: str = ""
    allowed_growth_percentage: int = 0
    min_size: int = 0
    has_planets: bool = False
    has_moons: bool = False
    has_asteroids: bool = False
    max_planets: int = 0
    max_moons: int = 0
    max_asteroids: int = 0
    probabilities: Dict[FieldType, Dict[int, int]] = field(default_factory=dict)
    blacklist: Dict[FieldType, FrozenSet[int]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict) -> "SystemConfiguration":
        return cls(
            id=str(data["id"]),
            allowed_growth_percentage=int(data.get("allowedGrowthPercentage", 0)),
            min_size=int(data.get("minSize", 0)),
            has_planets=bool(data.get("hasPlanets", False)),
            has_moons=bool(data.get("hasMoons", False)),
            has_asteroids=bool(data.get("hasAsteroids", False)),
            max_planets=int(data.get("maxPlanets", 0)),
            max_moons=int(data.get("maxMoons", 0)),
            max_asteroids=int(data.get("maxAsteroids", 0)),
            probabilities=_parse_probabilities(data.get("probabilities", {})),
            blacklist=_parse_blacklist(data.get("blacklist", {})),
        )

    def get_probabilities(self, field_type: FieldType) -> Dict[int, int]:
        return dict(self.probabilities.get(field_type, {}))

    def get_probability_blacklist(self, field_type: FieldType) -> FrozenSet[int]:
        return self.blacklist.get(field_type, frozenset())


class SystemConfigurationDatabase:
    """Configuration records read from JSON files, keyed by system id."""

    def __init__(self) -> None:
        self._configs: Dict[str, SystemConfiguration] = {}

    def load_directory(self, directory: Path) -> None:
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.json")):
            try:
                data = json.loads(path.read_text())
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict):
                data = [data]
            for entry in data:
                try:
                    config = SystemConfiguration.from_dict(entry)
                except (KeyError, TypeError, ValueError, AttributeError):
                    continue
                self._configs[config.id] = config

    def get(self, system_id: str) -> SystemConfiguration:
        try:
            return self._configs[str(system_id)]
        except KeyError:
            raise UnknownSystemError(f"No configuration for system '{system_id}'") from None

    def system_ids(self) -> Iterable[str]:
        return sorted(self._configs.keys())


def load_default_configurations(directory: Optional[Path] = None) -> SystemConfigurationDatabase:
    database = SystemConfigurationDatabase()
    database.load_directory(directory or DEFAULT_DATA_DIRECTORY)
    return database


__all__ = [
    "SystemConfiguration",
    "SystemConfigurationDatabase",
    "load_default_configurations",
    "DEFAULT_DATA_DIRECTORY",
]
