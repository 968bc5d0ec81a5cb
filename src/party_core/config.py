# Area: Config
"""
party_core.config — GameConfig schema, loading and discovery
============================================================

Each game ships a ``game.json`` describing its identity, player bounds,
ordered phases and the screens those phases render. The file is
validated once at load time and the resulting GameConfig is immutable
for the lifetime of the run.

Unknown extra fields are ignored so that newer configs still load on
older hosts.

Usage:
    from party_core.config import ConfigCatalog
    catalog = ConfigCatalog.from_directory("games/")
    config = catalog.load("nameblame")
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigValidationError
from .types import ActionType

logger = logging.getLogger("party_core.config")

CONFIG_FILENAME = "game.json"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


class PhaseDescriptor(_ConfigModel):
    """One state of the module's phase machine."""

    id: str = Field(min_length=1)
    screen_id: str = Field(alias="screenId", min_length=1)
    allowed_actions: List[ActionType] = Field(alias="allowedActions", min_length=1)

    def allows(self, action_type: ActionType) -> bool:
        return action_type in self.allowed_actions


class ContentProviderConfig(_ConfigModel):
    type: str
    source: Optional[str] = None
    shuffle: Optional[bool] = None


class MultiplayerConfig(_ConfigModel):
    supports_room: bool = Field(default=False, alias="supportsRoom")
    requires_room: bool = Field(default=False, alias="requiresRoom")


class GameSettings(_ConfigModel):
    """Content sizing knobs read by module business logic."""

    categories_per_game: int = Field(default=5, ge=1, le=20, alias="categoriesPerGame")
    questions_per_category: int = Field(default=10, ge=1, le=50, alias="questionsPerCategory")
    max_questions_total: int = Field(default=50, ge=1, le=100, alias="maxQuestionsTotal")
    allow_repeat_questions: bool = Field(default=False, alias="allowRepeatQuestions")
    shuffle_questions: bool = Field(default=True, alias="shuffleQuestions")
    shuffle_categories: bool = Field(default=True, alias="shuffleCategories")
    game_time_limit: int = Field(default=0, ge=0, le=3600, alias="gameTimeLimit")
    auto_advance_time: int = Field(default=0, ge=0, le=60, alias="autoAdvanceTime")
    allow_skip_questions: bool = Field(default=True, alias="allowSkipQuestions")
    show_progress: bool = Field(default=True, alias="showProgress")


class GameConfig(_ConfigModel):
    """Validated, immutable description of one game module."""

    id: str = Field(min_length=1)
    title: str
    description: str = ""
    version: str
    min_players: int = Field(ge=1, alias="minPlayers")
    max_players: int = Field(ge=1, alias="maxPlayers")
    tags: List[str] = Field(default_factory=list)
    screens: Dict[str, str]
    phases: List[PhaseDescriptor] = Field(min_length=1)
    content_provider: Optional[ContentProviderConfig] = Field(default=None, alias="contentProvider")
    game_settings: GameSettings = Field(default_factory=GameSettings, alias="gameSettings")
    feature_flags: Dict[str, bool] = Field(default_factory=dict, alias="featureFlags")
    multiplayer: MultiplayerConfig = Field(default_factory=MultiplayerConfig)

    @model_validator(mode="after")
    def _check_consistency(self) -> "GameConfig":
        if self.max_players < self.min_players:
            raise ValueError(
                f"maxPlayers ({self.max_players}) is lower than minPlayers ({self.min_players})"
            )
        seen = set()
        for phase in self.phases:
            if phase.id in seen:
                raise ValueError(f"Duplicate phase id: {phase.id}")
            seen.add(phase.id)
            if phase.screen_id not in self.screens:
                raise ValueError(
                    f"Phase {phase.id} references unknown screen {phase.screen_id}"
                )
        return self

    @property
    def phase_ids(self) -> List[str]:
        return [phase.id for phase in self.phases]

    @property
    def initial_phase_id(self) -> str:
        return self.phases[0].id

    def get_phase(self, phase_id: Optional[str]) -> Optional[PhaseDescriptor]:
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def has_phase(self, phase_id: str) -> bool:
        return self.get_phase(phase_id) is not None

    def feature_enabled(self, flag: str) -> bool:
        return self.feature_flags.get(flag, False)


def _format_validation_errors(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        messages.append(f"{location}: {msg}" if location else msg)
    return messages


def parse_game_config(data: Any, source: Optional[str] = None) -> GameConfig:
    """
    Validate raw config data.

    Args:
        data: Decoded JSON object
        source: Where the data came from, used in error messages

    Returns:
        The validated GameConfig

    Raises:
        ConfigValidationError: If required fields are missing or malformed
    """
    if isinstance(data, GameConfig):
        return data
    if not isinstance(data, dict):
        raise ConfigValidationError(
            [f"Expected a JSON object, got {type(data).__name__}"], source=source
        )
    try:
        return GameConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(_format_validation_errors(e), source=source) from e


def load_game_config(path: Union[str, Path]) -> GameConfig:
    """Load and validate a single ``game.json`` file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigValidationError([f"Cannot read file: {e}"], source=str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigValidationError([f"Invalid JSON: {e}"], source=str(path)) from e
    return parse_game_config(data, source=str(path))


def discover_game_configs(root: Union[str, Path]) -> List[GameConfig]:
    """
    Find every ``game.json`` below a directory.

    Invalid configs are logged and skipped so that one broken game
    does not hide the others.
    """
    root = Path(root)
    results: List[GameConfig] = []
    if not root.is_dir():
        logger.warning(f"Config directory not found: {root}")
        return results

    for path in sorted(root.rglob(CONFIG_FILENAME)):
        try:
            results.append(load_game_config(path))
        except ConfigValidationError as e:
            logger.error(f"Invalid config at {path}: {e}")
    return results


class ConfigCatalog:
    """
    Game configs indexed by id.

    The host asks the catalog for a config when a game is selected;
    unknown ids raise ConfigValidationError.
    """

    def __init__(self, configs: Iterable[Union[GameConfig, Dict[str, Any]]] = ()):
        self._configs: Dict[str, GameConfig] = {}
        for config in configs:
            self.add(parse_game_config(config))

    @classmethod
    def from_directory(cls, root: Union[str, Path]) -> "ConfigCatalog":
        return cls(discover_game_configs(root))

    def add(self, config: GameConfig) -> None:
        if config.id in self._configs:
            logger.warning(f"Config {config.id} defined twice, keeping the latest")
        self._configs[config.id] = config

    def get(self, game_id: str) -> Optional[GameConfig]:
        return self._configs.get(game_id)

    def load(self, game_id: str) -> GameConfig:
        config = self._configs.get(game_id)
        if config is None:
            raise ConfigValidationError([f"No config found for game {game_id}"])
        return config

    def ids(self) -> List[str]:
        return list(self._configs)

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._configs

    def __iter__(self) -> Iterator[GameConfig]:
        return iter(self._configs.values())

    def __len__(self) -> int:
        return len(self._configs)
