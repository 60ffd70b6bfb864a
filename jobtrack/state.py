"""Lifecycle shared by the intake and sync flows."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


_ALLOWED: dict[FlowState, frozenset[FlowState]] = {
    FlowState.IDLE: frozenset({FlowState.LOADING, FlowState.CANCELLED}),
    FlowState.LOADING: frozenset({FlowState.READY, FlowState.ERROR}),
    # READY → LOADING is a manual refresh; READY → ERROR a failed submit.
    FlowState.READY: frozenset(
        {FlowState.LOADING, FlowState.ERROR, FlowState.SUBMITTED, FlowState.CANCELLED}
    ),
    FlowState.ERROR: frozenset({FlowState.LOADING, FlowState.CANCELLED}),
    FlowState.SUBMITTED: frozenset(),
    FlowState.CANCELLED: frozenset(),
}


class InvalidTransitionError(Exception):
    """Raised when a flow is asked to move to a state it cannot reach."""


class FlowStateMachine:
    """Tracks the current FlowState and rejects illegal transitions."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._state = FlowState.IDLE

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def finished(self) -> bool:
        return self._state in (FlowState.SUBMITTED, FlowState.CANCELLED)

    def transition(self, target: FlowState) -> None:
        if target not in _ALLOWED[self._state]:
            raise InvalidTransitionError(
                f"{self._name}: cannot go from {self._state.value} to {target.value}"
            )
        logger.debug("%s: %s → %s", self._name, self._state.value, target.value)
        self._state = target
