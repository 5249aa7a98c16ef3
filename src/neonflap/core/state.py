"""
State machine for a NEONFLAP run.

States:
    IDLE: Menu shown, no simulation
    PLAYING: Simulation ticking
    PAUSED: Simulation frozen, run persisted for resume
    GAME_OVER: Run ended by a collision, frozen for display
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Run lifecycle states."""
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


StateListener = Callable[[RunState, RunState], None]


class StateMachine:
    """
    Tracks the run state and rejects invalid transitions.

    A rejected transition is a no-op: it is logged and reported by a False
    return value, never raised.
    """

    VALID_TRANSITIONS: list[tuple[RunState, RunState]] = [
        (RunState.IDLE, RunState.PLAYING),

        # From PLAYING
        (RunState.PLAYING, RunState.PAUSED),
        (RunState.PLAYING, RunState.GAME_OVER),

        # From PAUSED
        (RunState.PAUSED, RunState.PLAYING),  # Resume
        (RunState.PAUSED, RunState.IDLE),  # Abandon

        # From GAME_OVER
        (RunState.GAME_OVER, RunState.IDLE),
        (RunState.GAME_OVER, RunState.PLAYING),  # Restart
    ]

    def __init__(self, initial_state: RunState = RunState.IDLE) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> RunState:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: RunState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: RunState) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in list(self._listeners):
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
