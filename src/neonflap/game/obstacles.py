"""Obstacle stream: timed spawning, leftward scrolling and off-screen pruning."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import random

from neonflap.settings import ObstacleSettings

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A pipe pair. The gap spans [gap_top, gap_top + gap_size]."""

    x: float
    gap_top: float
    passed: bool = False

    def trailing_edge(self, width: float) -> float:
        return self.x + width

    def is_off_screen(self, config: ObstacleSettings) -> bool:
        return self.x + config.width + config.removal_margin < 0

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "gap_top": self.gap_top, "passed": self.passed}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Obstacle":
        passed = data.get("passed", False)
        if not isinstance(passed, bool):
            raise TypeError(f"passed must be a bool, got {passed!r}")
        return cls(x=float(data["x"]), gap_top=float(data["gap_top"]), passed=passed)


@dataclass
class ObstacleStream:
    """Obstacles in spawn order (leftmost first) plus the spawn accumulator."""

    obstacles: List[Obstacle] = field(default_factory=list)
    spawn_timer_ms: float = 0.0

    @classmethod
    def fresh(cls, config: ObstacleSettings) -> "ObstacleStream":
        """Empty stream whose first obstacle appears after first_spawn_delay_ms."""
        primed = max(0.0, config.spawn_interval_ms - config.first_spawn_delay_ms)
        return cls(obstacles=[], spawn_timer_ms=primed)

    def __iter__(self):
        return iter(self.obstacles)

    def __len__(self) -> int:
        return len(self.obstacles)

    def tick(
        self,
        delta_ms: float,
        world_width: float,
        world_height: float,
        config: ObstacleSettings,
        rng: random.Random | None = None,
    ) -> Optional[Obstacle]:
        """Spawn, scroll and prune for one frame.

        Returns:
            The obstacle spawned this frame, if any
        """
        spawned = None

        self.spawn_timer_ms += delta_ms
        if self.spawn_timer_ms > config.spawn_interval_ms:
            # Overshoot is dropped, never carried into the next interval
            self.spawn_timer_ms = 0.0
            spawned = Obstacle(
                x=float(world_width),
                gap_top=float(random_gap_top(world_height, config, rng)),
            )
            self.obstacles.append(spawned)
            logger.debug(f"Obstacle spawned: gap_top={spawned.gap_top:.0f}")

        shift = config.speed * delta_ms / 1000
        for obstacle in self.obstacles:
            obstacle.x -= shift

        self.obstacles = [o for o in self.obstacles if not o.is_off_screen(config)]
        return spawned


def random_gap_top(
    world_height: float,
    config: ObstacleSettings,
    rng: random.Random | None = None,
) -> int:
    """Uniform gap position keeping at least min_gap_margin to ceiling and floor."""
    rng = rng or random
    low = config.min_gap_margin
    high = int(world_height - config.gap_size - config.min_gap_margin)
    # World too short for both margins: pin the gap to the top margin
    return rng.randint(low, max(low, high))
