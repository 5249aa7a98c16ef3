"""Frame loop: clock, engine and crash effects driven by the display callback."""

import logging

from neonflap.animation.particles import ParticleEmitter
from neonflap.core.clock import FrameClock
from neonflap.core.events import Event, EventType
from neonflap.core.state import RunState
from neonflap.game.engine import FlapEngine

logger = logging.getLogger(__name__)


class GameLoop:
    """Decides when frames are needed and feeds them to the engine.

    The loop arms itself when a run starts or resumes, and when a crash
    leaves particles to animate. It disarms once there is nothing left
    to simulate, so an idle menu costs no simulation work.
    """

    def __init__(
        self,
        engine: FlapEngine,
        effects: ParticleEmitter | None = None,
        clock: FrameClock | None = None,
    ) -> None:
        self.engine = engine
        self.effects = effects or ParticleEmitter()
        self.clock = clock or FrameClock(engine.settings.physics.max_frame_ms)
        self._armed = False
        self._restart_clock = False

        bus = engine.event_bus
        bus.subscribe(EventType.STATE_CHANGED, self._on_state_changed)
        bus.subscribe(EventType.CRASH, self._on_crash)

    @property
    def running(self) -> bool:
        """Whether the loop wants frames."""
        return self._armed

    def schedule(self) -> None:
        """Arm the loop; timing restarts on the next frame."""
        self._armed = True
        self._restart_clock = True

    def frame(self, now_ms: float) -> bool:
        """Run one frame at timestamp now_ms.

        Returns:
            True if another frame should be scheduled
        """
        if not self._armed:
            return False

        if self._restart_clock:
            self.clock.reset(now_ms)
            self._restart_clock = False

        delta_ms = self.clock.tick(now_ms)
        self.engine.update(delta_ms)
        self.effects.update(delta_ms)

        state = self.engine.state
        self._armed = state is RunState.PLAYING or (
            state is RunState.GAME_OVER and self.effects.alive
        )
        if not self._armed:
            logger.debug(f"Frame loop idle in {state.name}")
        return self._armed

    def _on_state_changed(self, event: Event) -> None:
        new_state = event.data["to"]
        if new_state is RunState.PLAYING:
            self.effects.clear()
            self.schedule()
        elif new_state is RunState.GAME_OVER:
            # Crashes happen mid-frame; keep the running clock
            self._armed = True
        else:
            self._armed = False

    def _on_crash(self, event: Event) -> None:
        self.effects.burst(event.data["x"], event.data["y"])
