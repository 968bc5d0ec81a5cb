# Area: Core
"""
party_core._core.event_bus — Synchronous publish/subscribe
==========================================================

Lifecycle and transition notifications travel over a single EventBus
per host. Delivery rules:

- handlers run synchronously, in subscription order
- a publish delivers to a snapshot taken when it starts; handlers
  added meanwhile wait for the next publish
- ``once`` handlers fire at most one time, even under reentrant publish
- a failing handler never stops the others; the failure is logged and
  reported as an ``ERROR`` event once the delivery finishes

Usage:
    bus = EventBus()
    unsubscribe = bus.subscribe("PHASE/ENTER", on_enter)
    bus.publish(EventEnvelope("PHASE/ENTER", {"phaseId": "intro"}))
    unsubscribe()
"""

from __future__ import annotations
import logging
from typing import Any, Callable, List, Optional, Tuple, Union

from ..types import EventEnvelope, EventType, WILDCARD

logger = logging.getLogger("party_core.event_bus")

Handler = Callable[[EventEnvelope], Any]
Unsubscribe = Callable[[], None]


class _Subscription:
    """One registered handler. Inactive subscriptions are never invoked."""

    __slots__ = ("event_type", "handler", "once", "active")

    def __init__(self, event_type: str, handler: Handler, once: bool):
        self.event_type = event_type
        self.handler = handler
        self.once = once
        self.active = True

    def matches(self, event_type: str) -> bool:
        return self.event_type == event_type or self.event_type == WILDCARD


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventBus:
    """
    Ordered, synchronous event bus.

    The handler list is private; it only changes through
    ``subscribe``, ``once``, the returned unsubscribe callables
    and ``clear``.
    """

    def __init__(self):
        self._subscriptions: List[_Subscription] = []

    def subscribe(self, event_type: Union[str, EventType], handler: Handler) -> Unsubscribe:
        """
        Register a handler for one event type (or ``"*"`` for all).

        Returns:
            A callable that removes the handler; calling it twice is harmless
        """
        return self._add(event_type, handler, once=False)

    def once(self, event_type: Union[str, EventType], handler: Handler) -> Unsubscribe:
        """Register a handler that is removed right before its first call."""
        return self._add(event_type, handler, once=True)

    def publish(
        self,
        event: Union[EventEnvelope, str, EventType],
        payload: Optional[dict] = None,
        **fields: Any,
    ) -> int:
        """
        Deliver an event to every matching handler.

        Accepts an EventEnvelope, or an event type plus payload
        (``publish("PHASE/ENTER", phaseId="intro")``).

        Returns:
            Number of handlers invoked
        """
        envelope = self._to_envelope(event, payload, fields)
        snapshot = [s for s in self._subscriptions if s.matches(envelope.type)]
        failures: List[Tuple[_Subscription, Exception]] = []
        delivered = 0

        for sub in snapshot:
            if not sub.active:
                continue
            if sub.once:
                self._remove(sub)
            delivered += 1
            try:
                sub.handler(envelope)
            except Exception as e:
                logger.exception(
                    f"Handler {_handler_name(sub.handler)} failed on {envelope.type}"
                )
                failures.append((sub, e))

        if envelope.type != EventType.ERROR.value:
            for sub, exc in failures:
                self.publish(EventEnvelope(EventType.ERROR.value, {
                    "error": f"Handler error on {envelope.type}: {exc}",
                    "event_type": envelope.type,
                    "handler": _handler_name(sub.handler),
                }))

        return delivered

    def clear(self) -> None:
        """Remove every handler (module teardown)."""
        for sub in self._subscriptions:
            sub.active = False
        self._subscriptions.clear()
        logger.debug("Event bus cleared")

    def count(self, event_type: Optional[Union[str, EventType]] = None) -> int:
        """Number of active subscriptions, optionally for one exact key."""
        if event_type is None:
            return len(self._subscriptions)
        key = _type_key(event_type)
        return sum(1 for s in self._subscriptions if s.event_type == key)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def _add(self, event_type: Union[str, EventType], handler: Handler, once: bool) -> Unsubscribe:
        if not callable(handler):
            raise TypeError("Event handler must be callable")
        sub = _Subscription(_type_key(event_type), handler, once)
        self._subscriptions.append(sub)

        def unsubscribe() -> None:
            self._remove(sub)

        return unsubscribe

    def _remove(self, sub: _Subscription) -> None:
        sub.active = False
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)

    @staticmethod
    def _to_envelope(event, payload, fields) -> EventEnvelope:
        if isinstance(event, EventEnvelope):
            return event
        data = dict(payload or {})
        data.update(fields)
        return EventEnvelope(_type_key(event), data)


def _type_key(event_type: Union[str, EventType]) -> str:
    if isinstance(event_type, EventType):
        return event_type.value
    return event_type
