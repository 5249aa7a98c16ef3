from __future__ import annotations

import pytest
from pydantic import ValidationError

from neonflap.settings import ObstacleSettings, PhysicsSettings, Settings


def test_defaults_match_the_arcade_tuning(settings: Settings) -> None:
    assert settings.physics.gravity == 0.25
    assert settings.physics.jump_strength == -4.5
    assert settings.physics.reference_frame_ms == 16.66
    assert settings.obstacles.speed == 180.0
    assert settings.obstacles.spawn_interval_ms == 1500.0
    assert settings.obstacles.gap_size == 150.0
    assert settings.window_size == (480, 640)


def test_environment_overrides_nested_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEONFLAP_PHYSICS__GRAVITY", "0.5")
    monkeypatch.setenv("NEONFLAP_OBSTACLES__GAP_SIZE", "120")
    monkeypatch.setenv("NEONFLAP_DEBUG", "true")

    settings = Settings(_env_file=None)

    assert settings.physics.gravity == 0.5
    assert settings.obstacles.gap_size == 120.0
    assert settings.debug is True


def test_nonsense_constants_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ObstacleSettings(spawn_interval_ms=0)
    with pytest.raises(ValidationError):
        PhysicsSettings(reference_frame_ms=-1)
