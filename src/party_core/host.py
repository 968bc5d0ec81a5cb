# Area: Host
"""
party_core.host — Game host bootstrap
=====================================

Wires a GameConfig, a GameModule and a PhaseRouter together.

Bootstrap sequence (each step may suspend):

    LIFECYCLE/INIT
    -> load GameConfig from the catalog
    -> resolve the module from the registry
    -> await module.init(ctx)
    -> register screens and phase controllers
    -> LIFECYCLE/READY
    -> router.start()  (PHASE/ENTER for config.phases[0])

If any step fails the host records an ``error`` load state, publishes
an ERROR event and never reaches LIFECYCLE/READY.

Usage:
    registry = ModuleRegistry([DemoQuizModule()])
    host = GameHost(registry, ConfigCatalog([DEMO_QUIZ_CONFIG]))
    ctx = asyncio.run(host.load("demo-quiz"))
    ctx.dispatch(ActionType.ADVANCE)
"""

from __future__ import annotations
import inspect
import logging
from typing import Any, Optional, Union

from ._core.context import GameContext
from ._core.enums import LoadStatus
from ._core.event_bus import EventBus
from ._core.registry import ModuleRegistry
from ._core.router import PhaseRouter
from .config import ConfigCatalog, GameConfig
from .errors import GameLoadError, PartyCoreError
from .module import ModuleExtensions
from .storage import STORAGE_KEYS, NamespacedStorage
from .types import EventType
from .url import InitialParams, parse_initial_params

logger = logging.getLogger("party_core.host")


class GameHost:
    """
    Hosts one game module run at a time.

    Attributes:
        registry: Modules available to this host
        catalog: Source of GameConfigs
        event_bus: Bus shared by the host, router and module
        storage: Namespaced storage for host-level selections
        load_status: Current LoadStatus
        load_error: Message of the last failed load, if any
    """

    def __init__(
        self,
        registry: ModuleRegistry,
        catalog: ConfigCatalog,
        event_bus: Optional[EventBus] = None,
        storage: Optional[NamespacedStorage] = None,
    ):
        self.registry = registry
        self.catalog = catalog
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.storage = storage if storage is not None else NamespacedStorage()
        self.load_status = LoadStatus.IDLE
        self.load_error: Optional[str] = None
        self.game_id: Optional[str] = None
        self.module: Optional[Any] = None
        self.router: Optional[PhaseRouter] = None
        self.context: Optional[GameContext] = None

    @property
    def is_ready(self) -> bool:
        return self.load_status == LoadStatus.READY

    async def load(
        self,
        game_id: str,
        player_id: Optional[str] = None,
        room_id: Optional[str] = None,
    ) -> GameContext:
        """
        Load a game and start its first phase.

        Returns:
            The GameContext for the rendering layer

        Raises:
            GameLoadError: If config loading, module resolution,
                module init or registration fails
        """
        if self.router is not None:
            self.unload()

        self.game_id = game_id
        self.load_status = LoadStatus.LOADING
        self.load_error = None
        logger.info(f"Loading game {game_id}")
        self.event_bus.publish(EventType.LIFECYCLE_INIT, gameId=game_id)

        try:
            config = await self._load_config(game_id)
            module = self.registry.require(config.id)
            router = PhaseRouter(config, self.event_bus, player_id=player_id, room_id=room_id)
            result = module.init(router.context)
            if inspect.isawaitable(result):
                await result
            router.attach(module.register_screens(), module.get_phase_controllers())
            extensions = ModuleExtensions.collect(module)
        except Exception as e:
            self._fail(game_id, e)
            raise GameLoadError(game_id, e) from e

        self.module = module
        self.router = router
        self.context = GameContext(router, extensions)
        self.load_status = LoadStatus.READY
        self.storage.set(STORAGE_KEYS["selected_game"], game_id)
        self.event_bus.publish(EventType.LIFECYCLE_READY, gameId=game_id)

        router.start()
        return self.context

    def restart(self) -> None:
        """Start the loaded game again from its first phase."""
        if self.router is None:
            raise PartyCoreError("No game loaded")
        self.router.start()

    async def settle(self) -> None:
        """Wait for pending async phase hooks of the loaded game."""
        if self.router is not None:
            await self.router.settle()

    def unload(self) -> None:
        """Tear down the loaded game: notify, clear the bus, discard router state."""
        if self.router is not None:
            self.event_bus.publish(EventType.LIFECYCLE_UNLOAD, gameId=self.game_id)
            logger.info(f"Unloading game {self.game_id}")
            self.router.reset()
        self.event_bus.clear()
        self.module = None
        self.router = None
        self.context = None
        self.game_id = None
        self.load_status = LoadStatus.IDLE
        self.load_error = None

    def select_initial_game(
        self, params: Union[InitialParams, str, None] = None
    ) -> Optional[str]:
        """
        Pick the game to load first.

        Priority: ``game`` URL param > stored selection > first catalog entry.
        The choice is persisted.
        """
        if not isinstance(params, InitialParams):
            params = parse_initial_params(params)

        stored = self.storage.get(STORAGE_KEYS["selected_game"])
        ids = self.catalog.ids()
        if params.game and params.game in self.catalog:
            selected = params.game
        elif stored and stored in self.catalog:
            selected = stored
        else:
            selected = ids[0] if ids else None

        if selected:
            self.storage.set(STORAGE_KEYS["selected_game"], selected)
        return selected

    async def _load_config(self, game_id: str) -> GameConfig:
        config = self.catalog.load(game_id)
        if inspect.isawaitable(config):
            config = await config
        return config

    def _fail(self, game_id: str, exc: Exception) -> None:
        self.load_status = LoadStatus.ERROR
        self.load_error = str(exc)
        if isinstance(exc, PartyCoreError):
            logger.error(exc.format_error_log())
        else:
            logger.error(f"Init failed for {game_id}: {exc}", exc_info=exc)
        self.event_bus.publish(EventType.ERROR, {
            "error": f"Init failed: {exc}",
            "kind": getattr(exc, "error_type", type(exc).__name__),
            "gameId": game_id,
        })
