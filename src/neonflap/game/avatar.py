"""Avatar physics: gravity, the flap impulse, and derived tilt."""

from dataclasses import dataclass
from typing import Any, Dict

from neonflap.settings import PhysicsSettings, WorldSettings


@dataclass
class Avatar:
    """The player-controlled entity. Only y, velocity and rotation change during a run."""

    x: float
    y: float
    velocity: float = 0.0
    rotation: float = 0.0

    @classmethod
    def centered(cls, world: WorldSettings) -> "Avatar":
        """Create an avatar at rest, vertically centered, at the fixed horizontal offset."""
        return cls(x=world.width * world.avatar_x_ratio, y=world.height / 2)

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "velocity": self.velocity,
            "rotation": self.rotation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Avatar":
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            velocity=float(data["velocity"]),
            rotation=float(data.get("rotation", 0.0)),
        )


def integrate(avatar: Avatar, delta_ms: float, config: PhysicsSettings) -> None:
    """Advance the avatar by delta_ms.

    Motion is expressed per reference frame (60Hz), so the step is scaled by
    delta_ms / reference_frame_ms to stay independent of the display rate.
    """
    time_scale = delta_ms / config.reference_frame_ms

    avatar.velocity += config.gravity * time_scale
    avatar.y += avatar.velocity * time_scale

    # Tilt follows velocity: nose up while rising, down while falling
    tilt = avatar.velocity * config.rotation_gain
    avatar.rotation = max(-config.max_rotation, min(config.max_rotation, tilt))


def apply_impulse(avatar: Avatar, jump_strength: float) -> None:
    """Flap: replace the current velocity, regardless of what it was."""
    avatar.velocity = jump_strength
