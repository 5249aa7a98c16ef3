"""Frame clock: turns display-callback timestamps into bounded deltas."""

import logging

logger = logging.getLogger(__name__)


class FrameClock:
    """Derives a clamped per-frame delta from monotonically increasing timestamps.

    The clamp bounds the physics step after a stall so an obstacle or the
    floor cannot be skipped over in a single step.
    """

    def __init__(self, max_delta_ms: float = 100.0) -> None:
        self.max_delta_ms = max_delta_ms
        self._last_ms: float | None = None

    def reset(self, now_ms: float) -> None:
        """Restart timing from now; the next tick measures from here."""
        self._last_ms = now_ms

    def tick(self, now_ms: float) -> float:
        """Return milliseconds since the previous tick, clamped to [0, max]."""
        if self._last_ms is None:
            self._last_ms = now_ms
            return 0.0

        delta = now_ms - self._last_ms
        self._last_ms = now_ms

        if delta > self.max_delta_ms:
            logger.debug(f"Frame delta {delta:.1f}ms clamped to {self.max_delta_ms}ms")
            return self.max_delta_ms
        return max(0.0, delta)
