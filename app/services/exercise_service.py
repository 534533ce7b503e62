"""
Exercise service.

Business logic for the exercise list: seeding, enabling, progression after
a session, and the completion history.
"""

import datetime
import random
from typing import Optional

from loguru import logger

from app.core.clock import Clock
from app.primal.catalog import reconcile_with_seed, seed_exercises
from app.primal.history import entries_on, history_statistics, make_history_entry
from app.primal.progression import (
    ProgressionConfig,
    adjust_reps,
    apply_session_result,
    find_exercise,
    mark_performed,
    replace_exercise,
    require_exercise,
)
from app.primal.selection import (
    SportDayPolicy,
    alternating_weekday_policy,
    available_today,
    day_type_filter,
    exercises_for_day_type,
    select_random_exercise,
)
from app.primal.session_scheduler import find_pending, needs_scheduling_today, replace_scheduled
from app.schemas.app_settings import AppSettings
from app.schemas.exercise import Exercise
from app.schemas.history import ExerciseHistoryEntry, ExerciseHistoryStatistics
from app.services.storage_service import StorageKey, StorageService


class ExerciseService:
    """Service for the user's exercise list."""

    def __init__(
        self,
        storage: StorageService,
        clock: Clock,
        rng: Optional[random.Random] = None,
        is_sport_day: SportDayPolicy = alternating_weekday_policy,
        progression_config: Optional[ProgressionConfig] = None,
    ):
        """
        Initialize service.

        Args:
            storage: Storage collaborator
            clock: Source of the current time
            rng: Optional random source shared by selection calls
            is_sport_day: Day-type policy
            progression_config: Optional progression increments override
        """
        self.storage = storage
        self.clock = clock
        self.rng = rng
        self.is_sport_day = is_sport_day
        self.progression_config = progression_config

    # ======================================================================
    # Loading
    # ======================================================================

    def initialize(self) -> list[Exercise]:
        """
        Load the exercise list, seeding or merging the built-in catalog.

        First launch stores the catalog.  Later launches drop retired
        exercises and append new catalog entries, saving only on change.
        """
        with self.storage.locked(StorageKey.EXERCISES):
            stored = self.storage.load_exercises()
            if stored is None:
                exercises = seed_exercises()
                self.storage.save_exercises(exercises)
                logger.info(f"Seeded {len(exercises)} exercises")
                return exercises

            exercises, changed = reconcile_with_seed(stored)
            if changed:
                self.storage.save_exercises(exercises)
                logger.info(f"Exercise list reconciled with catalog ({len(stored)} -> {len(exercises)})")
            return exercises

    def list_exercises(self) -> list[Exercise]:
        stored = self.storage.load_exercises()
        return stored if stored is not None else self.initialize()

    def get(self, exercise_id: str) -> Optional[Exercise]:
        return find_exercise(self.list_exercises(), exercise_id)

    def _update(self, exercise_id: str, change) -> Exercise:
        with self.storage.locked(StorageKey.EXERCISES):
            exercises = self.list_exercises()
            updated = change(require_exercise(exercises, exercise_id))
            self.storage.save_exercises(replace_exercise(exercises, updated))
            return updated

    # ======================================================================
    # Editing
    # ======================================================================

    def set_enabled(self, exercise_id: str, enabled: bool) -> Exercise:
        """
        Enable or disable an exercise.

        Raises:
            ExerciseNotFoundError: If the id is unknown
        """
        return self._update(exercise_id, lambda e: e.model_copy(update={"is_enabled": enabled}))

    def toggle_enabled(self, exercise_id: str) -> Exercise:
        return self._update(exercise_id, lambda e: e.model_copy(update={"is_enabled": not e.is_enabled}))

    def adjust_reps(self, exercise_id: str, new_reps: int) -> Exercise:
        """Manual target change, clamped to at least 1."""
        return self._update(exercise_id, lambda e: adjust_reps(e, new_reps))

    def mark_performed(self, exercise_id: str) -> Exercise:
        return self._update(exercise_id, lambda e: mark_performed(e, self.clock.now()))

    def add_exercise(self, exercise: Exercise) -> list[Exercise]:
        """Add a custom exercise.  An exercise with the same id is replaced."""
        with self.storage.locked(StorageKey.EXERCISES):
            exercises = [e for e in self.list_exercises() if e.id != exercise.id] + [exercise]
            self.storage.save_exercises(exercises)
            return exercises

    def remove_exercise(self, exercise_id: str) -> list[Exercise]:
        with self.storage.locked(StorageKey.EXERCISES):
            exercises = [e for e in self.list_exercises() if e.id != exercise_id]
            self.storage.save_exercises(exercises)
            return exercises

    def reset_todays_exercises(self) -> list[Exercise]:
        """Forget today's completions for today's exercise family."""
        today = self.clock.today()
        family = day_type_filter(today, self.is_sport_day)
        with self.storage.locked(StorageKey.EXERCISES):
            exercises = [
                e.model_copy(update={"last_performed_date": None})
                if e.type == family and e.performed_on(today) else e
                for e in self.list_exercises()
            ]
            self.storage.save_exercises(exercises)
            return exercises

    def reset_to_defaults(self) -> list[Exercise]:
        """Replace the list with the built-in catalog, discarding all progression."""
        with self.storage.locked(StorageKey.EXERCISES):
            exercises = seed_exercises()
            self.storage.save_exercises(exercises)
            logger.info("Exercises reset to defaults")
            return exercises

    # ======================================================================
    # Selection
    # ======================================================================

    def _settings(self) -> AppSettings:
        return self.storage.load_settings() or AppSettings()

    def available_today(self) -> list[Exercise]:
        return available_today(self.list_exercises(), self._settings(), self.clock.now(),
                               rng=self.rng, is_sport_day=self.is_sport_day)

    def random_exercise(self) -> Optional[Exercise]:
        """One exercise for an ad-hoc snack, or None when nothing is enabled."""
        return select_random_exercise(self.list_exercises(), self._settings(), self.clock.now(),
                                      rng=self.rng, is_sport_day=self.is_sport_day)

    def exercises_for_day_type(self, sport_day: bool) -> list[Exercise]:
        return exercises_for_day_type(self.list_exercises(), sport_day,
                                      include_secondary=self._settings().secondary_discipline_enabled)

    # ======================================================================
    # Sessions
    # ======================================================================

    def complete_session(self, exercise_id: str, actual_amount: int, was_easy: bool) -> Exercise:
        """
        Record a finished session.

        Progresses the exercise, marks the first pending schedule entry for
        it as completed and appends a history entry.  A session with no
        pending entry is logged as an ad-hoc completion.

        Raises:
            ExerciseNotFoundError: If the id is unknown
        """
        now = self.clock.now()
        with self.storage.locked(StorageKey.EXERCISES):
            exercises, updated = apply_session_result(self.list_exercises(), exercise_id, actual_amount,
                                                      was_easy, now, self.progression_config)
            self.storage.save_exercises(exercises)

        with self.storage.locked(StorageKey.SCHEDULED_EXERCISES):
            scheduled = self.storage.load_scheduled_exercises() or []
            if needs_scheduling_today(scheduled, now.date()):
                scheduled = []
            pending = find_pending(scheduled, exercise_id)
            if pending is not None:
                self.storage.save_scheduled_exercises(replace_scheduled(scheduled, pending.mark_completed()))
            else:
                logger.debug(f"Ad-hoc session for '{exercise_id}'")

        with self.storage.locked(StorageKey.EXERCISE_HISTORY):
            entry = make_history_entry(self.storage.load_exercise_history(), updated.id, updated.name, now)
            self.storage.append_exercise_history(entry)
        logger.info(f"Completed {updated.name}: {actual_amount} {updated.unit_label}, "
                    f"next target {updated.current_reps}")
        return updated

    # ======================================================================
    # History
    # ======================================================================

    def history(self) -> list[ExerciseHistoryEntry]:
        return self.storage.load_exercise_history()

    def todays_history(self) -> list[ExerciseHistoryEntry]:
        return entries_on(self.history(), self.clock.today())

    def history_statistics(self) -> ExerciseHistoryStatistics:
        return history_statistics(self.history(), self.clock.now())

    def history_for_day(self, day: datetime.date) -> list[ExerciseHistoryEntry]:
        return entries_on(self.history(), day)
