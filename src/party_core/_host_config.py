# Area: Host
"""
party_core._host_config — Host settings
=======================================

Runtime settings for the host and CLI, read from the environment.
A ``.env`` file in the working directory (or the path given) is
loaded first; variables already set in the environment win.

    PARTY_CONFIG_DIR   directory scanned for game.json files
    PARTY_GAME         game id to load
    PARTY_PLAYER_ID    player id (multiplayer-capable games only)
    PARTY_ROOM_ID      room id (multiplayer-capable games only)
    PARTY_LOG_FILE     JSON log file path
    PARTY_LOG_LEVEL    DEBUG, INFO, WARNING, ERROR
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger("party_core")

ENV_MAPPINGS = {
    "PARTY_CONFIG_DIR": "config_dir",
    "PARTY_GAME": "game",
    "PARTY_PLAYER_ID": "player_id",
    "PARTY_ROOM_ID": "room_id",
    "PARTY_LOG_FILE": "log_file",
    "PARTY_LOG_LEVEL": "log_level",
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class HostSettings:
    config_dir: Optional[str] = None
    game: Optional[str] = None
    player_id: Optional[str] = None
    room_id: Optional[str] = None
    log_file: str = "party_core.log"
    log_level: str = "INFO"

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "HostSettings":
        """
        Build settings from environment-style variables.

        Raises:
            ValueError: If PARTY_LOG_LEVEL is not a known level
        """
        kwargs = {}
        for env_key, field_name in ENV_MAPPINGS.items():
            value = values.get(env_key)
            if value:
                kwargs[field_name] = value
        if "log_level" in kwargs:
            kwargs["log_level"] = kwargs["log_level"].upper()
        settings = cls(**kwargs)
        validate_settings(settings)
        return settings


def validate_settings(settings: HostSettings) -> None:
    """
    Validate settings values.

    Raises:
        ValueError: If the log level is unknown
    """
    if settings.log_level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid PARTY_LOG_LEVEL {settings.log_level!r}; expected one of {sorted(LOG_LEVELS)}"
        )


def load_settings(env_file: Optional[str] = None) -> HostSettings:
    """Load ``.env`` (if present) and build HostSettings from os.environ."""
    if load_dotenv(dotenv_path=env_file, override=False):
        logger.debug(f"Loaded environment from {env_file or '.env'}")
    return HostSettings.from_mapping(os.environ)
