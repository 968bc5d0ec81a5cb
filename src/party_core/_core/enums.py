# Area: Core
"""
party_core._core.enums — Router and host status enums
=====================================================

Defines the outcome of a single dispatch call and the host's
load state.
"""

from enum import Enum


class DispatchStatus(Enum):
    """
    Outcome of ``PhaseRouter.dispatch``.

    APPLIED:  the controller's result was applied (STAY, GOTO or COMPLETE)
    REJECTED: the action type is not allowed in the current phase;
              the controller was not consulted
    FAILED:   an ERROR event was published (missing controller,
              controller ERROR, invalid transition, router not started)
    IGNORED:  the run already completed; waiting for a restart
    QUEUED:   issued from inside another dispatch; runs after it finishes
    """
    APPLIED = "APPLIED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"
    IGNORED = "IGNORED"
    QUEUED = "QUEUED"


class LoadStatus(Enum):
    """
    Host load states.

    IDLE -> LOADING (on load)
    LOADING -> READY (module initialized, router started)
    LOADING -> ERROR (any bootstrap step failed)
    Any state -> IDLE (on unload)
    """
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
