# Area: Shared
"""
party_core.errors — Custom exception classes
============================================

Defines the exception hierarchy for the framework core.
Each exception stores its context so it can be rendered either as an
``ERROR`` event payload or as a structured log block.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class PartyCoreError(Exception):
    """Base exception for all party_core errors."""

    error_type = "PARTY_CORE_ERROR"

    def context(self) -> Dict[str, Any]:
        """Structured fields describing the failure."""
        return {}

    def to_event_payload(self) -> Dict[str, Any]:
        """Payload for an ``ERROR`` envelope on the event bus."""
        payload = {"error": str(self), "kind": self.error_type}
        payload.update(self.context())
        return payload

    def format_error_log(self) -> str:
        return _format_error_block(self.error_type, str(self), self.context())


class ConfigValidationError(PartyCoreError):
    """Raised when a GameConfig is missing or has malformed required fields."""

    error_type = "CONFIG_VALIDATION"

    def __init__(self, errors: List[str], source: Optional[str] = None):
        self.errors = list(errors)
        self.source = source
        where = f" ({source})" if source else ""
        super().__init__(f"Invalid game config{where}: {'; '.join(self.errors)}")

    def context(self) -> Dict[str, Any]:
        return {"source": self.source, "validation_errors": self.errors}


class DuplicateModuleError(PartyCoreError):
    """Raised when a module id is registered twice."""

    error_type = "DUPLICATE_MODULE"

    def __init__(self, module_id: str):
        self.module_id = module_id
        super().__init__(f"Module with id {module_id} already registered")

    def context(self) -> Dict[str, Any]:
        return {"module_id": self.module_id}


class ModuleNotRegisteredError(PartyCoreError):
    """Raised when a module id cannot be resolved from the registry."""

    error_type = "MODULE_NOT_REGISTERED"

    def __init__(self, module_id: str):
        self.module_id = module_id
        super().__init__(f"Module {module_id} not registered")

    def context(self) -> Dict[str, Any]:
        return {"module_id": self.module_id}


class ModuleNotReadyError(PartyCoreError):
    """Raised when the router is started before the module finished registering."""

    error_type = "MODULE_NOT_READY"

    def __init__(self, message: str = "Module screens and controllers are not registered"):
        super().__init__(message)


class InvalidActionError(PartyCoreError):
    """A dispatched value is not a known action type."""

    error_type = "INVALID_ACTION"

    def __init__(self, message: str, phase_id: Optional[str] = None):
        self.phase_id = phase_id
        super().__init__(message)

    def context(self) -> Dict[str, Any]:
        return {"phase_id": self.phase_id}


class MissingControllerError(PartyCoreError):
    """No phase controller is registered for the current phase."""

    error_type = "MISSING_CONTROLLER"

    def __init__(self, phase_id: Optional[str]):
        self.phase_id = phase_id
        super().__init__(f"No controller for phase {phase_id}")

    def context(self) -> Dict[str, Any]:
        return {"phase_id": self.phase_id}


class MissingScreenError(PartyCoreError):
    """A phase's screen id is not present in the registered screen map."""

    error_type = "MISSING_SCREEN"

    def __init__(self, phase_id: str, screen_id: str):
        self.phase_id = phase_id
        self.screen_id = screen_id
        super().__init__(f"Screen not found: {screen_id} for phase {phase_id}")

    def context(self) -> Dict[str, Any]:
        return {"phase_id": self.phase_id, "screen_id": self.screen_id}


class TransitionError(PartyCoreError):
    """A controller returned ``ERROR`` or produced an unusable transition."""

    error_type = "TRANSITION_ERROR"

    def __init__(self, message: str, phase_id: Optional[str] = None):
        self.phase_id = phase_id
        super().__init__(message)

    def context(self) -> Dict[str, Any]:
        return {"phase_id": self.phase_id}


class GameLoadError(PartyCoreError):
    """Raised by the host when any bootstrap step fails."""

    error_type = "GAME_LOAD_FAILED"

    def __init__(self, game_id: Optional[str], cause: BaseException):
        self.game_id = game_id
        self.cause = cause
        super().__init__(f"Failed to load game {game_id}: {cause}")

    def context(self) -> Dict[str, Any]:
        return {"game_id": self.game_id, "cause": type(self.cause).__name__}


def _format_error_block(error_type: str, message: str, context: Dict[str, Any]) -> str:
    """Format a structured error block for terminal output."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " PARTY CORE ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Message:      {message}",
    ]

    if context:
        lines.append("")
        lines.append(" ── CONTEXT " + "─" * 52)
        lines.append(_indent_json(context))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
