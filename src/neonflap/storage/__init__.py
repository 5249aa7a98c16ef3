"""Snapshot and hall of fame storage."""

from neonflap.storage.persistence import (
    HighScore,
    Persistence,
    MemoryPersistence,
    JsonFilePersistence,
    create_persistence,
)

__all__ = [
    "HighScore",
    "Persistence",
    "MemoryPersistence",
    "JsonFilePersistence",
    "create_persistence",
]
