"""Particle burst shown when the avatar crashes."""

from typing import List, Optional, Tuple
from dataclasses import dataclass
import random

Color = Tuple[int, int, int]

YELLOW: Color = (244, 208, 63)
ORANGE: Color = (230, 126, 34)


@dataclass
class Particle:
    """A single particle. Velocities are pixels per reference frame."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    color: Color = YELLOW
    life: float = 1.0  # 1.0 fresh, <= 0 dead

    @property
    def is_dead(self) -> bool:
        """Check if particle has expired."""
        return self.life <= 0

    @property
    def alpha(self) -> float:
        return max(0.0, min(1.0, self.life))

    def update(self, time_scale: float, gravity: float, decay: float) -> None:
        """Update particle physics for time_scale reference frames."""
        self.x += self.vx * time_scale
        self.y += self.vy * time_scale
        self.vy += gravity * time_scale
        self.life -= decay * time_scale


@dataclass
class EmitterConfig:
    """Configuration for the crash emitter."""

    burst: int = 20
    speed: float = 10.0  # each velocity component in [-speed/2, speed/2)
    gravity: float = 0.2
    decay: float = 0.02  # life lost per reference frame
    size: int = 6
    colors: Tuple[Color, ...] = (YELLOW, ORANGE)
    reference_frame_ms: float = 16.66


class ParticleEmitter:
    """Emits and ages particles."""

    def __init__(
        self,
        config: EmitterConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EmitterConfig()
        self.particles: List[Particle] = []
        self._rng = rng or random.Random()

    @property
    def alive(self) -> bool:
        """Whether any particle is still visible."""
        return bool(self.particles)

    def burst(self, x: float, y: float, count: Optional[int] = None) -> None:
        """Emit a burst of particles from one point."""
        cfg = self.config
        rng = self._rng
        for _ in range(count if count is not None else cfg.burst):
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=(rng.random() - 0.5) * cfg.speed,
                vy=(rng.random() - 0.5) * cfg.speed,
                color=rng.choice(cfg.colors),
            ))

    def update(self, delta_ms: float) -> None:
        """Age all particles and drop the dead ones."""
        if not self.particles:
            return
        time_scale = delta_ms / self.config.reference_frame_ms
        for particle in self.particles:
            particle.update(time_scale, self.config.gravity, self.config.decay)
        self.particles = [p for p in self.particles if not p.is_dead]

    def clear(self) -> None:
        self.particles = []
