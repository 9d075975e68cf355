"""Entry point for the star system layout generator."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict

from starsystem.config.system_config import DEFAULT_DATA_DIRECTORY, load_default_configurations
from starsystem.engine.logger import init_logger
from starsystem.errors import StarSystemError, UnknownSystemError
from starsystem.generation.system import StarSystemGenerator


SETTINGS_PATH = Path("settings.json")


def load_settings() -> Dict[str, Any]:
    if not SETTINGS_PATH.exists():
        return {
            "systemId": "1044",
            "seed": 0,
        }
    try:
        return json.loads(SETTINGS_PATH.read_text())
    except json.JSONDecodeError:
        return {
            "systemId": "1044",
            "seed": 0,
        }


def main() -> int:
    settings = load_settings()
    logger = init_logger(SETTINGS_PATH)
    data_directory = Path(settings.get("dataDirectory", DEFAULT_DATA_DIRECTORY))
    configurations = load_default_configurations(data_directory)

    system_id = str(settings.get("systemId", "1044"))
    seed = settings.get("seed", 0)
    if len(sys.argv) > 1:
        system_id = sys.argv[1]
    if len(sys.argv) > 2:
        seed = sys.argv[2]

    generator = StarSystemGenerator(configurations, logger)
    try:
        layout = generator.generate(system_id, seed)
    except UnknownSystemError as exc:
        logger.channel("diagnostics").error("%s", exc.args[0])
        return 2
    except StarSystemError as exc:
        logger.channel("diagnostics").error("Generation of system %s failed: %s", system_id, exc)
        return 1

    print(layout.map_data.to_string(show_identifiers=True), end="")
    if settings.get("printJson", False):
        print(layout.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
