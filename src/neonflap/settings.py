"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. NEONFLAP_PHYSICS__GRAVITY=0.3.
"""

import math
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseModel):
    """Avatar physics, expressed per 60Hz reference frame."""

    gravity: float = 0.25
    jump_strength: float = -4.5
    reference_frame_ms: float = Field(default=16.66, gt=0)
    rotation_gain: float = 0.1
    max_rotation: float = Field(default=math.pi / 4, ge=0)

    # Upper bound on a single simulation step (tab stalls, debugger pauses)
    max_frame_ms: float = Field(default=100.0, gt=0)


class ObstacleSettings(BaseModel):
    """Obstacle stream settings."""

    speed: float = Field(default=180.0, ge=0)  # pixels per second
    spawn_interval_ms: float = Field(default=1500.0, gt=0)
    gap_size: float = Field(default=150.0, gt=0)
    min_gap_margin: int = Field(default=50, ge=0)
    width: float = Field(default=50.0, gt=0)
    removal_margin: float = Field(default=0.0, ge=0)

    # Delay before the first obstacle of a fresh run
    first_spawn_delay_ms: float = Field(default=0.0, ge=0)


class CollisionSettings(BaseModel):
    """Avatar collision half-extents."""

    avatar_half_width: float = Field(default=10.0, ge=0)
    avatar_half_height: float = Field(default=10.0, ge=0)


class WorldSettings(BaseModel):
    """Playfield dimensions in pixels."""

    width: int = Field(default=480, gt=0)
    height: int = Field(default=640, gt=0)
    avatar_x_ratio: float = Field(default=0.2, ge=0.0, le=1.0)


class DisplaySettings(BaseModel):
    """Simulator display settings."""

    fps: int = 60
    scale: int = Field(default=1, ge=1)
    title: str = "NEONFLAP"

    # Night palette window (local hours)
    night_start_hour: int = Field(default=18, ge=0, le=23)
    night_end_hour: int = Field(default=6, ge=0, le=23)


class StorageSettings(BaseModel):
    """Snapshot and hall of fame storage."""

    enabled: bool = True
    directory: Path = Field(default_factory=lambda: Path.home() / ".neonflap")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEONFLAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    mute: bool = False

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    collision: CollisionSettings = Field(default_factory=CollisionSettings)
    world: WorldSettings = Field(default_factory=WorldSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def window_size(self) -> tuple[int, int]:
        """Simulator window size in screen pixels."""
        return (
            self.world.width * self.display.scale,
            self.world.height * self.display.scale,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
