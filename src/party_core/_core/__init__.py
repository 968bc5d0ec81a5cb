# Area: Core
"""
Framework core internals.

This package contains:
- EventBus: ordered synchronous publish/subscribe
- ModuleRegistry: game modules keyed by id
- PhaseRouter: the per-module phase state machine
- GameContext: read-only view handed to screens
"""

from .enums import DispatchStatus, LoadStatus
from .event_bus import EventBus
from .registry import ModuleRegistry, validate_module
from .router import PhaseRouter
from .context import GameContext

__all__ = [
    "DispatchStatus",
    "LoadStatus",
    "EventBus",
    "ModuleRegistry",
    "validate_module",
    "PhaseRouter",
    "GameContext",
]
