# Area: Core
"""
party_core._core.context — Context handed to the rendering layer
================================================================

GameContext is the single injection point for screens. It performs no
logic; every property reads through to the router, so the selected
screen always matches ``current_phase_id``.
"""

from __future__ import annotations
from typing import Any, Callable, Mapping, Optional

from ..config import GameConfig, PhaseDescriptor
from ..errors import MissingScreenError
from ..module import ModuleExtensions
from .enums import DispatchStatus
from .event_bus import EventBus
from .router import PhaseRouter


class GameContext:
    """Read-only view over a running module."""

    __slots__ = ("_router", "_extensions")

    def __init__(self, router: PhaseRouter, extensions: Optional[ModuleExtensions] = None):
        self._router = router
        self._extensions = extensions

    @property
    def config(self) -> GameConfig:
        return self._router.config

    @property
    def current_phase_id(self) -> Optional[str]:
        return self._router.current_phase_id

    @property
    def current_phase(self) -> Optional[PhaseDescriptor]:
        return self._router.current_phase

    @property
    def current_screen_id(self) -> Optional[str]:
        phase = self._router.current_phase
        return phase.screen_id if phase else None

    @property
    def dispatch(self) -> Callable[..., DispatchStatus]:
        return self._router.dispatch

    @property
    def event_bus(self) -> EventBus:
        return self._router.event_bus

    @property
    def screens(self) -> Mapping[str, Any]:
        return self._router.screens

    @property
    def extensions(self) -> Optional[ModuleExtensions]:
        return self._extensions

    @property
    def player_id(self) -> Optional[str]:
        return self._router.context.player_id

    @property
    def room_id(self) -> Optional[str]:
        return self._router.context.room_id

    def resolve_screen(self) -> Any:
        """
        Screen reference for the current phase.

        Raises:
            MissingScreenError: If the phase's screen id is not registered
        """
        phase = self._router.current_phase
        if phase is None:
            raise MissingScreenError(str(self._router.current_phase_id), "")
        screen = self._router.screens.get(phase.screen_id)
        if screen is None:
            raise MissingScreenError(phase.id, phase.screen_id)
        return screen

    def __repr__(self) -> str:
        return f"GameContext(game={self.config.id!r}, phase={self.current_phase_id!r})"
