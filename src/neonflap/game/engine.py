"""
Run controller for NEONFLAP.

Owns the current run and the state machine, advances the simulation each
frame, and talks to the collaborators (persistence, event subscribers)
through injected objects. Collaborator failures are logged and contained
so they can never stall the frame loop.
"""

from typing import Any, Callable, List, Optional
import logging
import random

from neonflap.core.events import Event, EventBus, EventType, crash_event, score_event
from neonflap.core.state import RunState, StateMachine
from neonflap.game.avatar import apply_impulse, integrate
from neonflap.game.collision import evaluate, out_of_bounds
from neonflap.game.run import Run, SnapshotError
from neonflap.settings import Settings, get_settings
from neonflap.storage.persistence import HighScore, MemoryPersistence, Persistence

logger = logging.getLogger(__name__)


class FlapEngine:
    """
    The game: one avatar, a stream of obstacles, and a score.

    Lifecycle:
        start() -> update()/jump() while PLAYING -> pause() or crash()
        pause() -> resume() or go_home()
        crash() -> start() or go_home()

    Every operation requested from the wrong state is a no-op returning False.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        persistence: Persistence | None = None,
        event_bus: EventBus | None = None,
        state_machine: StateMachine | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.persistence = persistence or MemoryPersistence()
        self.event_bus = event_bus or EventBus()
        self.state_machine = state_machine or StateMachine()
        self._rng = rng or random.Random()
        self._run: Optional[Run] = None

        self.state_machine.add_listener(self._on_state_changed)

    @property
    def state(self) -> RunState:
        return self.state_machine.state

    @property
    def run(self) -> Optional[Run]:
        """The current run; after a crash it stays frozen for display."""
        return self._run

    @property
    def score(self) -> int:
        return self._run.score if self._run else 0

    @property
    def can_resume(self) -> bool:
        """Whether a paused run is waiting in storage."""
        return bool(self._guard("check snapshot", self.persistence.has_state))

    @property
    def high_scores(self) -> List[HighScore]:
        return self._guard("read hall of fame", self.persistence.get_high_scores) or []

    # Transitions
    def start(self) -> bool:
        """Begin a fresh run, discarding whatever run was on screen."""
        if not self.state_machine.can_transition(RunState.PLAYING):
            logger.warning(f"Cannot start from {self.state.name}")
            return False

        self._run = Run.new(self.settings)
        return self.state_machine.transition(RunState.PLAYING)

    def pause(self) -> bool:
        """Freeze the run and store it for a later resume."""
        if not self.state_machine.can_transition(RunState.PAUSED):
            logger.warning(f"Cannot pause from {self.state.name}")
            return False

        self._guard("save snapshot", self.persistence.save_state, self._run.to_snapshot())
        return self.state_machine.transition(RunState.PAUSED)

    def resume(self) -> bool:
        """Continue the stored run. The stored snapshot is consumed."""
        if not self.state_machine.can_transition(RunState.PLAYING):
            logger.warning(f"Cannot resume from {self.state.name}")
            return False

        data = self._guard("load snapshot", self.persistence.load_state)
        if data is None:
            logger.info("Nothing to resume")
            return False

        try:
            run = Run.from_snapshot(data)
        except SnapshotError as e:
            logger.warning(f"Ignoring stored run: {e}")
            self._guard("clear snapshot", self.persistence.clear_state)
            return False

        self._guard("clear snapshot", self.persistence.clear_state)
        self._run = run
        logger.info(f"Resuming run at score {run.score}")
        return self.state_machine.transition(RunState.PLAYING)

    def crash(self) -> bool:
        """End the run: freeze it, forget any stored snapshot, record the score."""
        if not self.state_machine.can_transition(RunState.GAME_OVER):
            logger.warning(f"Cannot crash from {self.state.name}")
            return False

        self._guard("clear snapshot", self.persistence.clear_state)
        self._guard("save score", self.persistence.save_score, self._run.score)
        # Events from the crashing tick come before the game over
        self.event_bus.flush()
        self.state_machine.transition(RunState.GAME_OVER)

        avatar = self._run.avatar
        self.event_bus.queue_event(crash_event(self._run.score, avatar.x, avatar.y))
        self.event_bus.flush()
        logger.info(f"Run over with score {self._run.score}")
        return True

    def go_home(self) -> bool:
        """Back to the menu from the pause or game over screen."""
        if self.state not in (RunState.PAUSED, RunState.GAME_OVER):
            logger.warning(f"Cannot go home from {self.state.name}")
            return False
        return self.state_machine.transition(RunState.IDLE)

    # Input
    def jump(self) -> bool:
        """Flap. Takes effect on the next update; the latest flap wins."""
        if self.state is not RunState.PLAYING:
            return False

        apply_impulse(self._run.avatar, self.settings.physics.jump_strength)
        self.event_bus.emit(Event(EventType.JUMP))
        return True

    # Simulation
    def update(self, delta_ms: float) -> None:
        """Advance the run by one frame: physics, obstacles, then collisions."""
        if self.state is not RunState.PLAYING:
            return

        run = self._run
        settings = self.settings
        world = settings.world

        integrate(run.avatar, delta_ms, settings.physics)

        spawned = run.stream.tick(
            delta_ms, world.width, world.height, settings.obstacles, self._rng
        )
        if spawned is not None:
            self.event_bus.queue_event(Event(
                EventType.OBSTACLE_SPAWNED, data={"gap_top": spawned.gap_top}
            ))

        crashed = out_of_bounds(run.avatar, world.height, settings.collision)
        if not crashed:
            for obstacle in run.stream:
                result = evaluate(
                    run.avatar, obstacle, world.height,
                    settings.collision, settings.obstacles,
                )
                if result.collision:
                    crashed = True
                    break
                if result.scored:
                    run.score += 1
                    self.event_bus.queue_event(score_event(run.score))

        if crashed:
            self.crash()

        self.event_bus.flush()

    # Internals
    def _on_state_changed(self, old: RunState, new: RunState) -> None:
        self.event_bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"from": old, "to": new, "score": self.score},
        ))

    def _guard(self, what: str, action: Callable[..., Any], *args: Any) -> Any:
        """Call a collaborator, logging instead of propagating its failure."""
        try:
            return action(*args)
        except Exception as e:
            logger.error(f"Failed to {what}: {e}")
            return None
