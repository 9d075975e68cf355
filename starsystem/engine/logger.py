"""Generation logging with per-channel toggles."""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

DEFAULT_CHANNELS = {
    "placement": True,
    "moons": False,
    "asteroids": False,
    "diagnostics": True,
}

ROOT_LOGGER_NAME = "starsystem"


@dataclass
class LoggerConfig:
    """Log level and enabled channels, usually read from settings.json."""

    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=DEFAULT_CHANNELS.copy)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerConfig":
        level = getattr(logging, str(data.get("logLevel", "INFO")).upper(), logging.INFO)
        channels = DEFAULT_CHANNELS.copy()
        channels.update(data.get("logChannels", {}))
        return cls(level=level, channels=channels)

    @classmethod
    def from_settings(cls, settings_path: Path) -> "LoggerConfig":
        if not settings_path.exists():
            return cls()
        try:
            data = json.loads(settings_path.read_text())
        except json.JSONDecodeError:
            return cls()
        return cls.from_dict(data)


class ChannelLogger:
    """Named sink that drops records while its channel is disabled."""

    def __init__(self, name: str, logger: logging.Logger, enabled: bool) -> None:
        self.name = name
        self.enabled = enabled
        self._logger = logger

    def _emit(self, level: int, msg: str, args: tuple, kwargs: Dict[str, Any]) -> None:
        if self.enabled:
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.ERROR, msg, args, kwargs)

    def dump(self, title: str, text: str, level: int = logging.WARNING) -> None:
        """Emit a multi-line text block, one record per line."""

        if not self.enabled or not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, "%s", title)
        for line in text.splitlines():
            self._logger.log(level, "  %s", line)


class GenerationLogger:
    """Registry of channel loggers below the ``starsystem`` logger.

    Only an application entry point should pass ``configure_root=True``;
    it installs a stdout handler on the root logger.
    """

    def __init__(self, config: LoggerConfig, configure_root: bool = True) -> None:
        if configure_root:
            logging.basicConfig(
                level=config.level,
                format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                stream=sys.stdout,
            )
        self._channels: Dict[str, ChannelLogger] = {
            name: self._make_channel(name, enabled) for name, enabled in config.channels.items()
        }

    @staticmethod
    def _make_channel(name: str, enabled: bool) -> ChannelLogger:
        return ChannelLogger(name, logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"), enabled)

    def channel(self, name: str) -> ChannelLogger:
        # Channels missing from the settings stay off until enabled.
        return self._channels.setdefault(name, self._make_channel(name, False))

    def set_enabled(self, name: str, enabled: bool) -> None:
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return self._channels.keys()

    @classmethod
    def quiet(cls) -> "GenerationLogger":
        """Registry with every known channel disabled and logging untouched."""

        channels = {name: False for name in DEFAULT_CHANNELS}
        return cls(LoggerConfig(level=logging.CRITICAL, channels=channels), configure_root=False)


def init_logger(settings_path: Optional[Path] = None) -> GenerationLogger:
    """Configure process logging from settings.json for the command line."""

    return GenerationLogger(LoggerConfig.from_settings(settings_path or Path("settings.json")))


__all__ = ["GenerationLogger", "LoggerConfig", "ChannelLogger", "DEFAULT_CHANNELS", "init_logger"]
