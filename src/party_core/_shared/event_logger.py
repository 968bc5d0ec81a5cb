# Area: Shared
"""
party_core._shared.event_logger — Event bus trace output
========================================================

Subscribes to every event (``"*"``) and prints one colored line per
envelope with the game id and current phase. This is the supported
way to observe the core while debugging.
"""

from __future__ import annotations
import logging
import sys
from datetime import datetime
from typing import Any, Callable, List, Optional, TextIO

from ..types import EventEnvelope, EventType, WILDCARD

logger = logging.getLogger("party_core.events")

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Lifecycle
CYAN = "\033[36m"          # Phase changes
ORANGE = "\033[38;5;208m"  # Actions and content
RED = "\033[31m"           # Errors
RESET = "\033[0m"

NAMESPACE_COLORS = {
    "LIFECYCLE": GREEN,
    "PHASE": CYAN,
    "ACTION": ORANGE,
    "CONTENT": ORANGE,
    "GAME": GREEN,
    "ERROR": RED,
}

# Payload keys shown first, in this order
PRIMARY_KEYS = ("gameId", "phaseId", "action", "index", "error")


class EventLogger:
    """Prints bus events as they are published."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream
        self.color = color
        self.game_id: str = "-"
        self.phase_id: str = "-"
        self.history: List[EventEnvelope] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self, event_bus) -> Callable[[], None]:
        """Subscribe to every event on the bus. Returns the unsubscribe callable."""
        self.detach()
        self._unsubscribe = event_bus.subscribe(WILDCARD, self.handle)
        return self.detach

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def handle(self, envelope: EventEnvelope) -> None:
        if envelope.type == EventType.LIFECYCLE_INIT.value:
            self.game_id = envelope.get("gameId") or "-"
        if envelope.type == EventType.PHASE_ENTER.value:
            self.phase_id = envelope.get("phaseId") or "-"
        self.history.append(envelope)
        line = self.format(envelope)
        logger.debug(line)
        stream = self.stream or (sys.stderr if envelope.type == EventType.ERROR.value else sys.stdout)
        print(line, file=stream)

    def format(self, envelope: EventEnvelope) -> str:
        details = " ".join(
            f"{key}={_short(envelope.payload[key])}"
            for key in _ordered_keys(envelope.payload)
            if envelope.payload[key] is not None
        )
        line = (
            f"{datetime.now().strftime('%H:%M:%S')} | GAME: {self.game_id:12} | "
            f"PHASE: {self.phase_id:12} | {envelope.type:18} | {details}"
        ).rstrip()
        if not self.color:
            return line
        color = NAMESPACE_COLORS.get(envelope.namespace, RESET)
        return f"{color}{line}{RESET}"


def _ordered_keys(payload: dict) -> List[str]:
    primary = [k for k in PRIMARY_KEYS if k in payload]
    return primary + sorted(k for k in payload if k not in PRIMARY_KEYS)


def _short(value: Any, limit: int = 60) -> str:
    text = str(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."
