"""
party_core — Party Game Framework Core
======================================

Hosts pluggable party-game modules: each module declares its phases in
a game.json config and supplies one controller per phase; the core
routes player actions through the current phase's controller and
announces every lifecycle step on an event bus.

Quick Start (no implementation needed):
    from party_core import (
        ConfigCatalog, DemoQuizModule, DEMO_QUIZ_CONFIG, GameHost, ModuleRegistry,
    )
    host = GameHost(ModuleRegistry([DemoQuizModule()]), ConfigCatalog([DEMO_QUIZ_CONFIG]))
    ctx = asyncio.run(host.load("demo-quiz"))
    ctx.dispatch("ADVANCE")

Custom Implementation:
    from party_core import GameModule, PhaseController, goto, stay
    class MyGame(GameModule): ...  # Implement init, register_screens, get_phase_controllers

Command line:
    python -m party_core --demo --actions ADVANCE,ADVANCE
"""

from ._core import (
    DispatchStatus,
    EventBus,
    GameContext,
    LoadStatus,
    ModuleRegistry,
    PhaseRouter,
)
from .config import (
    ConfigCatalog,
    ContentProviderConfig,
    GameConfig,
    GameSettings,
    MultiplayerConfig,
    PhaseDescriptor,
    discover_game_configs,
    load_game_config,
    parse_game_config,
)
from .demo_module import DEMO_QUIZ_CONFIG, DEMO_QUIZ_ID, DemoQuizModule
from .errors import (
    PartyCoreError,
    ConfigValidationError,
    DuplicateModuleError,
    ModuleNotRegisteredError,
    ModuleNotReadyError,
    InvalidActionError,
    MissingControllerError,
    MissingScreenError,
    TransitionError,
    GameLoadError,
)
from .host import GameHost
from .module import (
    FunctionController,
    GameModule,
    ModuleContext,
    ModuleExtensions,
    PhaseController,
)
from .providers import ContentProvider, Progress, StaticListProvider
from .storage import STORAGE_KEYS, MemoryBackend, NamespacedStorage
from .types import (
    # Actions
    ActionType,
    GameAction,
    # Transitions
    Stay,
    Goto,
    Complete,
    Error,
    stay,
    goto,
    complete,
    error,
    # Events
    EventType,
    EventEnvelope,
    WILDCARD,
)
from .url import InitialParams, parse_initial_params

__all__ = [
    # Main classes
    "GameHost",
    "GameContext",
    "EventBus",
    "ModuleRegistry",
    "PhaseRouter",
    "DispatchStatus",
    "LoadStatus",
    # Modules
    "GameModule",
    "PhaseController",
    "FunctionController",
    "ModuleContext",
    "ModuleExtensions",
    "DemoQuizModule",
    "DEMO_QUIZ_CONFIG",
    "DEMO_QUIZ_ID",
    # Config
    "GameConfig",
    "PhaseDescriptor",
    "GameSettings",
    "MultiplayerConfig",
    "ContentProviderConfig",
    "ConfigCatalog",
    "parse_game_config",
    "load_game_config",
    "discover_game_configs",
    # Errors
    "PartyCoreError",
    "ConfigValidationError",
    "DuplicateModuleError",
    "ModuleNotRegisteredError",
    "ModuleNotReadyError",
    "InvalidActionError",
    "MissingControllerError",
    "MissingScreenError",
    "TransitionError",
    "GameLoadError",
    # Actions and transitions
    "ActionType",
    "GameAction",
    "Stay",
    "Goto",
    "Complete",
    "Error",
    "stay",
    "goto",
    "complete",
    "error",
    # Events
    "EventType",
    "EventEnvelope",
    "WILDCARD",
    # Content, storage, url
    "ContentProvider",
    "Progress",
    "StaticListProvider",
    "NamespacedStorage",
    "MemoryBackend",
    "STORAGE_KEYS",
    "InitialParams",
    "parse_initial_params",
]
__version__ = "0.1.0"
