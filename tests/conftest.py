from __future__ import annotations

import random

import pytest

from neonflap.core.events import EventBus
from neonflap.game.engine import FlapEngine
from neonflap.settings import Settings
from neonflap.storage.persistence import MemoryPersistence


@pytest.fixture()
def settings() -> Settings:
    # Defaults only: ignore any developer .env
    return Settings(_env_file=None)


@pytest.fixture()
def persistence() -> MemoryPersistence:
    return MemoryPersistence()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def engine(settings: Settings, persistence: MemoryPersistence, bus: EventBus) -> FlapEngine:
    return FlapEngine(
        settings=settings,
        persistence=persistence,
        event_bus=bus,
        rng=random.Random(1234),
    )
