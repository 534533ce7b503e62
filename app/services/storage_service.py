"""
Storage service.

Persists every collection as one JSON document through the key-value
repository.  A record that fails to decode or validate is logged and
treated as absent, so a corrupted collection never blocks the rest of the
application.
"""

import datetime
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, Optional

from loguru import logger
from pydantic import TypeAdapter, ValidationError
from sqlmodel import Session

from app.db.repositories.key_value import KeyValueRepository
from app.schemas.app_settings import AppSettings
from app.schemas.exercise import Exercise
from app.schemas.history import ExerciseHistoryEntry
from app.schemas.scheduled_exercise import ScheduledExercise
from app.schemas.sprint import SprintSession
from app.schemas.walk import DailyWalk


class StorageKey(str, Enum):
    """Document keys of the stored collections."""
    EXERCISES = "exercises"
    SETTINGS = "app_settings"
    LAST_SCHEDULED_DATE = "last_scheduled_date"
    SCHEDULED_EXERCISES = "scheduled_exercises"
    EXERCISE_HISTORY = "exercise_history"
    DAILY_WALKS = "daily_walks"
    SPRINT_SESSIONS = "sprint_sessions"


_EXERCISES = TypeAdapter(list[Exercise])
_SCHEDULED = TypeAdapter(list[ScheduledExercise])
_SPRINTS = TypeAdapter(list[SprintSession])
_WALKS = TypeAdapter(list[DailyWalk])
_HISTORY = TypeAdapter(list[ExerciseHistoryEntry])
_SETTINGS = TypeAdapter(AppSettings)
_DATE = TypeAdapter(datetime.date)


class StorageService:
    """Load and save the application's collections."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.repository = KeyValueRepository(session)
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    # ======================================================================
    # Locking
    # ======================================================================

    @contextmanager
    def locked(self, key: StorageKey) -> Iterator[None]:
        """
        Hold the lock for one collection.

        Wrap every load → mutate → save sequence on a collection in this so
        that two sequences on the same key never interleave.  Re-entrant.
        """
        with self._locks_guard:
            lock = self._locks.setdefault(key.value, threading.RLock())
        with lock:
            yield

    # ======================================================================
    # Raw encode / decode
    # ======================================================================

    def _read(self, key: StorageKey, adapter: TypeAdapter) -> Optional[Any]:
        payload = self.repository.get(key.value)
        if payload is None:
            return None
        try:
            return adapter.validate_json(payload)
        except ValidationError as e:
            logger.warning(f"Discarding malformed '{key.value}' record: {e}")
            return None

    def _write(self, key: StorageKey, adapter: TypeAdapter, value: Any) -> None:
        self.repository.set(key.value, adapter.dump_json(value).decode())
        logger.debug(f"Saved '{key.value}'")

    # ======================================================================
    # Exercises
    # ======================================================================

    def load_exercises(self) -> Optional[list[Exercise]]:
        """Stored exercise list, or None on first launch."""
        return self._read(StorageKey.EXERCISES, _EXERCISES)

    def save_exercises(self, exercises: list[Exercise]) -> None:
        self._write(StorageKey.EXERCISES, _EXERCISES, exercises)

    # ======================================================================
    # Settings
    # ======================================================================

    def load_settings(self) -> Optional[AppSettings]:
        return self._read(StorageKey.SETTINGS, _SETTINGS)

    def save_settings(self, settings: AppSettings) -> None:
        self._write(StorageKey.SETTINGS, _SETTINGS, settings)

    # ======================================================================
    # Today's schedule
    # ======================================================================

    def load_scheduled_exercises(self) -> Optional[list[ScheduledExercise]]:
        return self._read(StorageKey.SCHEDULED_EXERCISES, _SCHEDULED)

    def save_scheduled_exercises(self, scheduled: list[ScheduledExercise]) -> None:
        self._write(StorageKey.SCHEDULED_EXERCISES, _SCHEDULED, scheduled)

    def clear_scheduled_exercises(self) -> None:
        self.repository.delete(StorageKey.SCHEDULED_EXERCISES.value)

    def load_last_scheduled_date(self) -> Optional[datetime.date]:
        return self._read(StorageKey.LAST_SCHEDULED_DATE, _DATE)

    def save_last_scheduled_date(self, day: datetime.date) -> None:
        self._write(StorageKey.LAST_SCHEDULED_DATE, _DATE, day)

    # ======================================================================
    # Sprints and walks
    # ======================================================================

    def load_sprint_sessions(self) -> list[SprintSession]:
        return self._read(StorageKey.SPRINT_SESSIONS, _SPRINTS) or []

    def save_sprint_sessions(self, sprints: list[SprintSession]) -> None:
        self._write(StorageKey.SPRINT_SESSIONS, _SPRINTS, sprints)

    def load_daily_walks(self) -> list[DailyWalk]:
        return self._read(StorageKey.DAILY_WALKS, _WALKS) or []

    def save_daily_walks(self, walks: list[DailyWalk]) -> None:
        self._write(StorageKey.DAILY_WALKS, _WALKS, walks)

    # ======================================================================
    # History
    # ======================================================================

    def load_exercise_history(self) -> list[ExerciseHistoryEntry]:
        return self._read(StorageKey.EXERCISE_HISTORY, _HISTORY) or []

    def append_exercise_history(self, entry: ExerciseHistoryEntry) -> None:
        """Append one entry to the log.  Existing entries are never rewritten."""
        with self.locked(StorageKey.EXERCISE_HISTORY):
            history = self.load_exercise_history()
            history.append(entry)
            self._write(StorageKey.EXERCISE_HISTORY, _HISTORY, history)

    # ======================================================================
    # Maintenance
    # ======================================================================

    def clear_all(self) -> None:
        """Delete every stored collection."""
        self.repository.clear()
        logger.info("Cleared all stored data")
