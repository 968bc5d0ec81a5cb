# Area: Core
"""
party_core._core.router — Phase router (the state machine engine)
=================================================================

States are the phase ids declared in ``config.phases``; the initial
state is ``config.phases[0]``. Each dispatched action is forwarded to
the current phase's controller, whose TransitionResult decides what
happens next:

    STAY            nothing else is published
    GOTO(phase)     PHASE/EXIT(prev) -> on_exit -> phase changes
                    -> on_enter -> PHASE/ENTER(next)
    COMPLETE        GAME/COMPLETE; the run ends until start() is called again
    ERROR(message)  one ERROR event; the phase is left unchanged

The router is the only writer of ``current_phase_id``.
"""

from __future__ import annotations
import asyncio
import inspect
import logging
from collections import deque
from contextlib import contextmanager
from functools import partial
from types import MappingProxyType
from typing import Any, Awaitable, Deque, Dict, Iterator, Mapping, Optional, Set, Tuple

from ..config import GameConfig, PhaseDescriptor
from ..errors import (
    InvalidActionError,
    MissingControllerError,
    MissingScreenError,
    ModuleNotReadyError,
    PartyCoreError,
    TransitionError,
)
from ..module import ModuleContext, PhaseController
from ..types import (
    Complete, Error, EventEnvelope, EventType, GameAction, Goto, Stay,
)
from .enums import DispatchStatus
from .event_bus import EventBus

logger = logging.getLogger("party_core.router")


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def _action_label(action: Any) -> str:
    if isinstance(action, GameAction):
        return action.type.value
    return getattr(action, "value", None) or str(action)


class PhaseRouter:
    """
    Phase state machine for one module run.

    Attributes:
        config: The immutable GameConfig of the run
        event_bus: Bus receiving every lifecycle and transition event
        context: ModuleContext handed to controllers
    """

    def __init__(
        self,
        config: GameConfig,
        event_bus: EventBus,
        player_id: Optional[str] = None,
        room_id: Optional[str] = None,
    ):
        self.config = config
        self.event_bus = event_bus
        self._current_phase_id: Optional[str] = None
        self._screens: Optional[Dict[str, Any]] = None
        self._controllers: Optional[Dict[str, PhaseController]] = None
        self._started = False
        self._complete = False
        self._dispatching = False
        self._queue: Deque[Tuple[Any, Any]] = deque()
        self._pending_hooks: Set[asyncio.Future] = set()

        if not config.multiplayer.supports_room and (player_id or room_id):
            logger.debug(f"Module {config.id} is single-device; dropping player/room ids")
            player_id = room_id = None

        self.context = ModuleContext(
            config=config,
            dispatch=self.dispatch,
            event_bus=event_bus,
            player_id=player_id,
            room_id=room_id,
        )

    # ──────────────────────────────────────────────────────────────
    # Read-only state
    # ──────────────────────────────────────────────────────────────

    @property
    def current_phase_id(self) -> Optional[str]:
        return self._current_phase_id

    @property
    def current_phase(self) -> Optional[PhaseDescriptor]:
        return self.config.get_phase(self._current_phase_id)

    @property
    def is_ready(self) -> bool:
        return self._screens is not None and self._controllers is not None

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def screens(self) -> Mapping[str, Any]:
        return MappingProxyType(self._screens or {})

    @property
    def controllers(self) -> Mapping[str, PhaseController]:
        return MappingProxyType(self._controllers or {})

    @property
    def pending_hooks(self) -> int:
        return len(self._pending_hooks)

    # ──────────────────────────────────────────────────────────────
    # Lifecycle
    # ──────────────────────────────────────────────────────────────

    def attach(
        self,
        screens: Mapping[str, Any],
        controllers: Mapping[str, PhaseController],
    ) -> None:
        """
        Record the module's screens and phase controllers.

        Raises:
            MissingScreenError: If the initial phase's screen is not registered
        """
        screens = dict(screens or {})
        controllers = dict(controllers or {})

        initial = self.config.phases[0]
        if initial.screen_id not in screens:
            raise MissingScreenError(initial.id, initial.screen_id)

        for phase in self.config.phases[1:]:
            if phase.screen_id not in screens:
                logger.warning(f"Screen {phase.screen_id} for phase {phase.id} is not registered")
        for phase_id in controllers:
            if not self.config.has_phase(phase_id):
                logger.warning(f"Controller registered for undeclared phase {phase_id}")

        self._screens = screens
        self._controllers = controllers
        logger.debug(
            f"Attached {len(screens)} screens and {len(controllers)} controllers "
            f"for {self.config.id}"
        )

    def start(self) -> None:
        """
        Seed the initial phase and publish PHASE/ENTER for it.

        Also restarts a run: after GAME/COMPLETE the phase goes back to
        ``config.phases[0]``.

        Raises:
            ModuleNotReadyError: If attach() has not been called
        """
        if not self.is_ready:
            raise ModuleNotReadyError(
                f"Cannot start {self.config.id}: screens and controllers are not registered"
            )

        self._queue.clear()
        self._complete = False
        self._started = True
        initial = self.config.initial_phase_id
        logger.info(f"Starting {self.config.id} at phase {initial}")

        with self._exclusive() as outermost:
            self._current_phase_id = initial
            controller = self._controllers.get(initial)
            if controller is not None:
                self._run_hook(controller, "on_enter", initial)
            self._publish(EventType.PHASE_ENTER, phaseId=initial)
        if outermost:
            self._drain_queue()

    def reset(self) -> None:
        """Discard all run state (used when the host unloads the module)."""
        for task in list(self._pending_hooks):
            task.cancel()
        self._pending_hooks.clear()
        self._queue.clear()
        self._current_phase_id = None
        self._screens = None
        self._controllers = None
        self._started = False
        self._complete = False
        logger.debug(f"Router for {self.config.id} reset")

    async def settle(self) -> None:
        """Wait until every scheduled async on_enter/on_exit hook has finished."""
        while self._pending_hooks:
            await asyncio.gather(*list(self._pending_hooks), return_exceptions=True)
            await asyncio.sleep(0)

    # ──────────────────────────────────────────────────────────────
    # Dispatch
    # ──────────────────────────────────────────────────────────────

    def dispatch(self, action: Any, payload: Any = None) -> DispatchStatus:
        """
        Route an action to the current phase's controller.

        Args:
            action: GameAction, ActionType or action type string
            payload: Optional data passed to the controller; defaults to
                ``action.payload``

        Returns:
            DispatchStatus describing what happened. An unknown action
            type is published as ACTION/DISPATCH plus ERROR and returns
            FAILED.
        """
        if self._dispatching:
            self._queue.append((action, payload))
            logger.debug(f"Queued {_action_label(action)} behind the running dispatch")
            return DispatchStatus.QUEUED

        with self._exclusive():
            status = self._dispatch_one(action, payload)
        self._drain_queue()
        return status

    def _drain_queue(self) -> None:
        while self._queue and not self._dispatching:
            action, payload = self._queue.popleft()
            with self._exclusive():
                self._dispatch_one(action, payload)

    @contextmanager
    def _exclusive(self) -> Iterator[bool]:
        """Mark a dispatch as running; yields True for the outermost one."""
        outermost = not self._dispatching
        self._dispatching = True
        try:
            yield outermost
        finally:
            if outermost:
                self._dispatching = False

    def _dispatch_one(self, raw_action: Any, payload: Any) -> DispatchStatus:
        phase_id = self._current_phase_id
        try:
            action = GameAction.coerce(raw_action)
        except ValueError as e:
            self._publish(
                EventType.ACTION_DISPATCH,
                action=_action_label(raw_action), payload=payload, phaseId=phase_id,
            )
            self._report(InvalidActionError(str(e), phase_id))
            return DispatchStatus.FAILED

        if payload is None:
            payload = action.payload
        event = {"action": action.type.value, "payload": payload, "phaseId": phase_id}
        if action.name is not None:
            event["name"] = action.name
        self._publish(EventType.ACTION_DISPATCH, **event)

        if not self._started:
            self._report(ModuleNotReadyError("Router has not been started"))
            return DispatchStatus.FAILED
        if self._complete:
            logger.info(f"Ignoring {action.type.value}: run of {self.config.id} is complete")
            return DispatchStatus.IGNORED

        controller = self._controllers.get(phase_id)
        if controller is None:
            self._report(MissingControllerError(phase_id))
            return DispatchStatus.FAILED

        phase = self.config.get_phase(phase_id)
        if not phase.allows(action.type):
            logger.debug(f"Action {action.type.value} not allowed in phase {phase_id}; ignored")
            return DispatchStatus.REJECTED

        try:
            result = controller.transition(action, self.context, payload)
        except Exception as e:
            logger.exception(f"Controller for phase {phase_id} raised")
            self._report(TransitionError(f"Controller for phase {phase_id} raised: {e}", phase_id))
            return DispatchStatus.FAILED

        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            self._report(TransitionError(
                f"transition() for phase {phase_id} must return synchronously", phase_id
            ))
            return DispatchStatus.FAILED

        return self._apply(phase_id, controller, result)

    def _apply(self, phase_id: str, controller: PhaseController, result: Any) -> DispatchStatus:
        if isinstance(result, Stay):
            return DispatchStatus.APPLIED

        if isinstance(result, Goto):
            return self._goto(phase_id, controller, result.phase_id)

        if isinstance(result, Complete):
            self._complete = True
            logger.info(f"Run of {self.config.id} complete in phase {phase_id}")
            self._publish(EventType.GAME_COMPLETE, phaseId=phase_id, summary=result.summary)
            return DispatchStatus.APPLIED

        if isinstance(result, Error):
            self._report(TransitionError(result.message, phase_id))
            return DispatchStatus.FAILED

        self._report(TransitionError(
            f"Controller for phase {phase_id} returned {type(result).__name__}, "
            f"expected a transition result",
            phase_id,
        ))
        return DispatchStatus.FAILED

    def _goto(self, prev_id: str, controller: PhaseController, next_id: str) -> DispatchStatus:
        target = self.config.get_phase(next_id)
        if target is None:
            self._report(TransitionError(
                f"Phase {prev_id} tried to move to undeclared phase {next_id}", prev_id
            ))
            return DispatchStatus.FAILED
        if target.screen_id not in self._screens:
            self._report(MissingScreenError(next_id, target.screen_id))
            return DispatchStatus.FAILED

        self._publish(EventType.PHASE_EXIT, phaseId=prev_id)
        self._run_hook(controller, "on_exit", prev_id)

        self._current_phase_id = next_id
        logger.info(f"Phase {prev_id} -> {next_id}")

        next_controller = self._controllers.get(next_id)
        if next_controller is None:
            logger.warning(f"Entering phase {next_id} without a controller")
        else:
            self._run_hook(next_controller, "on_enter", next_id)
        self._publish(EventType.PHASE_ENTER, phaseId=next_id)
        return DispatchStatus.APPLIED

    # ──────────────────────────────────────────────────────────────
    # Hooks
    # ──────────────────────────────────────────────────────────────

    def _run_hook(self, controller: PhaseController, hook_name: str, phase_id: str) -> None:
        hook = getattr(controller, hook_name, None)
        if hook is None:
            return
        try:
            result = hook(self.context)
        except Exception as e:
            logger.exception(f"{hook_name} failed in phase {phase_id}")
            self._report(TransitionError(f"{hook_name} failed in phase {phase_id}: {e}", phase_id))
            return
        if inspect.isawaitable(result):
            self._schedule(result, hook_name, phase_id)

    def _schedule(self, awaitable: Awaitable[Any], hook_name: str, phase_id: str) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # No loop running: finish the hook before returning
            try:
                asyncio.run(_await(awaitable))
            except Exception as e:
                logger.exception(f"{hook_name} failed in phase {phase_id}")
                self._report(TransitionError(f"{hook_name} failed in phase {phase_id}: {e}", phase_id))
            return

        task = asyncio.ensure_future(awaitable)
        self._pending_hooks.add(task)
        task.add_done_callback(partial(self._hook_done, hook_name, phase_id))

    def _hook_done(self, hook_name: str, phase_id: str, task: asyncio.Future) -> None:
        self._pending_hooks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"{hook_name} failed in phase {phase_id}: {exc}")
            self._report(TransitionError(f"{hook_name} failed in phase {phase_id}: {exc}", phase_id))

    # ──────────────────────────────────────────────────────────────
    # Events
    # ──────────────────────────────────────────────────────────────

    def _publish(self, event_type: EventType, **payload: Any) -> None:
        self.event_bus.publish(EventEnvelope(event_type.value, payload))

    def _report(self, err: PartyCoreError) -> None:
        logger.warning(f"{err.error_type}: {err}")
        self._publish(EventType.ERROR, **err.to_event_payload())
