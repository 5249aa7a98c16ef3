"""A single run and its snapshot codec for pause/resume."""

from dataclasses import dataclass, field
from typing import Any, Dict
import math

from neonflap.game.avatar import Avatar
from neonflap.game.obstacles import Obstacle, ObstacleStream
from neonflap.settings import Settings


class SnapshotError(ValueError):
    """Raised when a persisted snapshot cannot be turned back into a run."""


@dataclass
class Run:
    """Everything needed to continue a game: avatar, obstacles and score."""

    avatar: Avatar
    stream: ObstacleStream = field(default_factory=ObstacleStream)
    score: int = 0

    @classmethod
    def new(cls, settings: Settings) -> "Run":
        return cls(
            avatar=Avatar.centered(settings.world),
            stream=ObstacleStream.fresh(settings.obstacles),
        )

    @property
    def obstacles(self) -> list[Obstacle]:
        return self.stream.obstacles

    def to_snapshot(self) -> Dict[str, Any]:
        """Plain JSON-compatible copy of the run."""
        return {
            "avatar": self.avatar.to_dict(),
            "obstacles": [o.to_dict() for o in self.stream.obstacles],
            "score": self.score,
            "spawn_timer_ms": self.stream.spawn_timer_ms,
        }

    @classmethod
    def from_snapshot(cls, data: Any) -> "Run":
        """Rebuild a run from to_snapshot() output.

        Raises:
            SnapshotError: data is not a well-formed snapshot
        """
        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot must be a mapping, got {type(data).__name__}")

        try:
            avatar = Avatar.from_dict(data["avatar"])
            obstacles = [Obstacle.from_dict(o) for o in data["obstacles"]]
            score = data["score"]
            spawn_timer = float(data.get("spawn_timer_ms", 0.0))
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"Malformed snapshot: {e!r}") from e

        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise SnapshotError(f"Invalid score in snapshot: {score!r}")

        # Reject NaN and Infinity
        numbers = [avatar.x, avatar.y, avatar.velocity, avatar.rotation, spawn_timer]
        for obstacle in obstacles:
            numbers.extend((obstacle.x, obstacle.gap_top))
        if not all(math.isfinite(n) for n in numbers):
            raise SnapshotError("Snapshot contains non-finite numbers")

        return cls(
            avatar=avatar,
            stream=ObstacleStream(obstacles=obstacles, spawn_timer_ms=spawn_timer),
            score=score,
        )
