"""
Persistence for NEONFLAP.

Two pieces of data survive a session:
    - the single-slot snapshot of a paused run
    - the hall of fame, the top five scores with their dates

Storage problems never reach the game: unreadable data reads as absent,
failed writes are logged and dropped.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging

logger = logging.getLogger(__name__)

STATE_KEY = "flappy_save_state_v2"
HALL_OF_FAME_KEY = "flappy_hof_v2"
HALL_OF_FAME_SIZE = 5


@dataclass
class HighScore:
    """One hall of fame entry."""

    score: int
    date: str


class Persistence(ABC):
    """Snapshot slot and hall of fame on top of a small key-value store.

    Subclasses provide raw text storage; values are JSON encoded here.
    """

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None."""
        ...

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""
        ...

    @abstractmethod
    def _remove(self, key: str) -> None:
        """Delete key if present."""
        ...

    def _load_json(self, key: str) -> Any:
        try:
            raw = self._read(key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unreadable {key}: {e}")
            return None

    def _store_json(self, key: str, value: Any) -> bool:
        try:
            self._write(key, json.dumps(value))
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not store {key}: {e}")
            return False

    # Snapshot slot
    def save_state(self, snapshot: Dict[str, Any]) -> None:
        """Overwrite the snapshot slot."""
        if self._store_json(STATE_KEY, snapshot):
            logger.info("Run snapshot saved")

    def load_state(self) -> Optional[Dict[str, Any]]:
        """Return the stored snapshot, or None if absent or corrupt."""
        data = self._load_json(STATE_KEY)
        if data is not None and not isinstance(data, dict):
            logger.warning("Discarding snapshot that is not an object")
            return None
        return data

    def has_state(self) -> bool:
        return self.load_state() is not None

    def clear_state(self) -> None:
        """Empty the snapshot slot. Safe to call when already empty."""
        try:
            self._remove(STATE_KEY)
        except OSError as e:
            logger.warning(f"Could not clear snapshot: {e}")

    # Hall of fame
    def get_high_scores(self) -> List[HighScore]:
        """Top scores, best first."""
        data = self._load_json(HALL_OF_FAME_KEY)
        if not isinstance(data, list):
            return []
        try:
            return [HighScore(score=int(e["score"]), date=str(e["date"])) for e in data]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding unreadable hall of fame: {e!r}")
            return []

    def save_score(self, score: int, when: date | None = None) -> None:
        """Record a finished run. Zero scores are not recorded."""
        if score <= 0:
            return

        entry = HighScore(score=score, date=(when or date.today()).isoformat())
        scores = self.get_high_scores()
        scores.append(entry)
        # Stable sort: an equal score keeps the older entry ahead
        scores.sort(key=lambda s: s.score, reverse=True)
        scores = scores[:HALL_OF_FAME_SIZE]

        if self._store_json(HALL_OF_FAME_KEY, [asdict(s) for s in scores]):
            logger.info(f"Score {score} committed to hall of fame")


class MemoryPersistence(Persistence):
    """In-process store. Used when disk storage is disabled, and in tests."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, value: str) -> None:
        self._data[key] = value

    def _remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFilePersistence(Persistence):
    """One JSON file per key inside a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def _remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def create_persistence(enabled: bool, directory: Path) -> Persistence:
    """Pick the store for the current settings."""
    if enabled:
        logger.info(f"Persistence directory: {directory}")
        return JsonFilePersistence(directory)
    logger.info("Disk storage disabled, scores last for this session only")
    return MemoryPersistence()
