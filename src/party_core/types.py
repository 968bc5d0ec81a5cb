# Area: Core
"""
party_core.types — Action, transition and event contracts
=========================================================

The shared vocabulary between the router, game modules and the
rendering layer:

    GameAction        what the UI (or a timer) asks for
    TransitionResult  what a phase controller decides
    EventEnvelope     what the event bus carries

All types are exported from the main package:

    from party_core import ActionType, GameAction, goto, stay, EventType
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


# ============================================
# Actions
# ============================================

class ActionType(str, Enum):
    """Closed set of action kinds a phase can allow."""
    ADVANCE = "ADVANCE"
    BACK = "BACK"
    SELECT_TARGET = "SELECT_TARGET"
    REVEAL = "REVEAL"
    RESTART = "RESTART"
    CUSTOM = "CUSTOM"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GameAction:
    """A typed intent submitted to the dispatcher.

    Fields
    ------
    type : ActionType
        The action kind checked against ``allowed_actions``.
    name : str, optional
        Module-defined label, used with ``ActionType.CUSTOM``
        (e.g. ``"VOTE"``).
    timestamp : datetime
        When the action was created (UTC).
    source : str, optional
        Who produced it, e.g. ``"ui"`` or ``"timer"``.
    priority : int
        Informational ordering hint; dispatch is always FIFO.
    payload : Any
        Optional data attached to the action itself.
    """
    type: ActionType
    name: Optional[str] = None
    timestamp: datetime = field(default_factory=_utc_now)
    source: Optional[str] = None
    priority: int = 0
    payload: Any = None

    @classmethod
    def coerce(cls, value: Union["GameAction", ActionType, str]) -> "GameAction":
        """Build a GameAction from an action, an ActionType or its string value."""
        if isinstance(value, GameAction):
            return value
        if isinstance(value, ActionType):
            return cls(type=value)
        if isinstance(value, str):
            try:
                return cls(type=ActionType(value))
            except ValueError:
                raise ValueError(f"Unknown action type: {value!r}") from None
        raise ValueError(f"Cannot build a GameAction from {type(value).__name__}")

    @classmethod
    def custom(cls, name: str, **kwargs: Any) -> "GameAction":
        return cls(type=ActionType.CUSTOM, name=name, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value}
        if self.name is not None:
            data["name"] = self.name
        if self.source is not None:
            data["source"] = self.source
        if self.priority:
            data["priority"] = self.priority
        data["timestamp"] = self.timestamp.isoformat()
        return data


# ============================================
# Transition results
# ============================================

class TransitionKind(str, Enum):
    """Tag of a PhaseTransitionResult variant."""
    STAY = "STAY"
    GOTO = "GOTO"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Stay:
    """Remain in the current phase."""
    kind = TransitionKind.STAY


@dataclass(frozen=True)
class Goto:
    """Move to another phase declared in the config."""
    phase_id: str
    kind = TransitionKind.GOTO


@dataclass(frozen=True)
class Complete:
    """End the module run. The router does not pick a next phase."""
    summary: Any = None
    kind = TransitionKind.COMPLETE


@dataclass(frozen=True)
class Error:
    """Report a failure; the current phase is left unchanged."""
    message: str
    kind = TransitionKind.ERROR


TransitionResult = Union[Stay, Goto, Complete, Error]
TRANSITION_TYPES = (Stay, Goto, Complete, Error)

STAY = Stay()


def stay() -> Stay:
    return STAY


def goto(phase_id: str) -> Goto:
    return Goto(phase_id)


def complete(summary: Any = None) -> Complete:
    return Complete(summary)


def error(message: str) -> Error:
    return Error(message)


# ============================================
# Events
# ============================================

WILDCARD = "*"


class EventType(str, Enum):
    """Namespaced event types published by the core."""
    LIFECYCLE_INIT = "LIFECYCLE/INIT"
    LIFECYCLE_READY = "LIFECYCLE/READY"
    LIFECYCLE_UNLOAD = "LIFECYCLE/UNLOAD"
    PHASE_ENTER = "PHASE/ENTER"
    PHASE_EXIT = "PHASE/EXIT"
    ACTION_DISPATCH = "ACTION/DISPATCH"
    CONTENT_NEXT = "CONTENT/NEXT"
    GAME_COMPLETE = "GAME/COMPLETE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class EventEnvelope:
    """A bus message: a namespaced ``type`` plus an open payload."""
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Normalize enum members to their plain string value
        if isinstance(self.type, EventType):
            object.__setattr__(self, "type", self.type.value)

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    @property
    def namespace(self) -> str:
        return self.type.split("/", 1)[0]
