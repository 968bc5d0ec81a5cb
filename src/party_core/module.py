# Area: Module Contract
"""
party_core.module — The contract every game module implements
==============================================================

A game module subclasses GameModule and provides:

    id                      unique module id (matches the config id)
    init(ctx)               load content, warm caches (may be async)
    register_screens()      screen id -> screen reference
    get_phase_controllers() phase id -> PhaseController

and may override three optional hooks (translations, theme extension,
module-local store).

Controllers decide what happens next. They receive the ModuleContext
and return a TransitionResult; they never touch the router directly.

Example:
    class IntroController(PhaseController):
        def transition(self, action, ctx, payload=None):
            if action.type == ActionType.ADVANCE:
                return goto("play")
            return stay()
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union,
)

from .types import GameAction, TransitionResult

if TYPE_CHECKING:
    from .config import GameConfig
    from ._core.event_bus import EventBus
    from ._core.enums import DispatchStatus

Dispatch = Callable[..., "DispatchStatus"]
HookResult = Union[None, Awaitable[None]]
ScreenRegistry = Mapping[str, Any]


@dataclass
class ModuleContext:
    """Capability bundle handed to a module and its phase controllers.

    ``player_id`` and ``room_id`` are only set for multiplayer-capable
    modules; single-device modules always see ``None``.
    """

    config: "GameConfig"
    dispatch: Dispatch
    event_bus: "EventBus"
    player_id: Optional[str] = None
    room_id: Optional[str] = None


class PhaseController:
    """
    Policy object for one phase.

    Override ``transition`` (required) and optionally ``on_enter`` /
    ``on_exit``. Hooks may be coroutines; ``transition`` must return
    synchronously so dispatch ordering stays deterministic.
    """

    def on_enter(self, ctx: ModuleContext) -> HookResult:
        return None

    def on_exit(self, ctx: ModuleContext) -> HookResult:
        return None

    def transition(
        self, action: GameAction, ctx: ModuleContext, payload: Any = None
    ) -> TransitionResult:
        raise NotImplementedError


class FunctionController(PhaseController):
    """Builds a controller from plain callables."""

    def __init__(
        self,
        transition: Callable[[GameAction, ModuleContext, Any], TransitionResult],
        on_enter: Optional[Callable[[ModuleContext], HookResult]] = None,
        on_exit: Optional[Callable[[ModuleContext], HookResult]] = None,
    ):
        self._transition = transition
        self._on_enter = on_enter
        self._on_exit = on_exit

    def on_enter(self, ctx: ModuleContext) -> HookResult:
        if self._on_enter is None:
            return None
        return self._on_enter(ctx)

    def on_exit(self, ctx: ModuleContext) -> HookResult:
        if self._on_exit is None:
            return None
        return self._on_exit(ctx)

    def transition(
        self, action: GameAction, ctx: ModuleContext, payload: Any = None
    ) -> TransitionResult:
        return self._transition(action, ctx, payload)


PhaseControllerMap = Mapping[str, PhaseController]


class GameModule(ABC):
    """
    Abstract base class for a game module.

    The host calls ``init`` once per run, awaits it if it is a
    coroutine, and only then asks for screens and controllers.
    """

    id: str = ""

    @abstractmethod
    def init(self, ctx: ModuleContext) -> HookResult:
        """Prepare the module for a run (load content, warm caches)."""

    @abstractmethod
    def register_screens(self) -> ScreenRegistry:
        """Return the screen id -> screen reference map."""

    @abstractmethod
    def get_phase_controllers(self) -> PhaseControllerMap:
        """Return the phase id -> controller map."""

    # Optional hooks

    def get_translations(self) -> Optional[List[Dict[str, Any]]]:
        """Translation bundles as ``[{"namespace": str, "resources": dict}]``."""
        return None

    def get_theme_extensions(self) -> Optional[Any]:
        return None

    def get_module_store(self) -> Optional[Any]:
        return None


@dataclass(frozen=True)
class ModuleExtensions:
    """Optional module contributions collected by the host after init."""

    translations: Dict[str, Dict[str, Any]]
    theme: Optional[Any] = None
    store: Optional[Any] = None

    @classmethod
    def collect(cls, module: Any) -> "ModuleExtensions":
        """Call whichever optional hooks the module provides."""

        def call(hook_name: str) -> Any:
            hook = getattr(module, hook_name, None)
            return hook() if callable(hook) else None

        translations: Dict[str, Dict[str, Any]] = {}
        for bundle in call("get_translations") or []:
            namespace = bundle.get("namespace")
            if not namespace:
                continue
            translations.setdefault(namespace, {}).update(bundle.get("resources") or {})
        return cls(
            translations=translations,
            theme=call("get_theme_extensions"),
            store=call("get_module_store"),
        )
