"""
Schedule service.

Owns today's morning/afternoon schedule: the once-daily build, reminder
callbacks (tap and snooze), and per-entry updates.
"""

import random
from typing import Optional

from loguru import logger

from app.core.clock import Clock
from app.primal.selection import SportDayPolicy, alternating_weekday_policy, available_today
from app.primal.session_scheduler import (
    completed_count,
    find_pending,
    needs_scheduling_today,
    reconcile_with_history,
    replace_scheduled,
    schedule_today,
    session_reminders,
    snooze_scheduled,
    split_counts,
)
from app.schemas.app_settings import AppSettings
from app.schemas.scheduled_exercise import ScheduledExercise
from app.services.exercise_service import ExerciseService
from app.services.reminders import ReminderDispatcher
from app.services.storage_service import StorageKey, StorageService

DEFAULT_SNOOZE_MINUTES = 15


class ScheduleService:
    """Service for today's exercise schedule."""

    def __init__(
        self,
        storage: StorageService,
        exercises: ExerciseService,
        reminders: ReminderDispatcher,
        clock: Clock,
        rng: Optional[random.Random] = None,
        is_sport_day: SportDayPolicy = alternating_weekday_policy,
    ):
        self.storage = storage
        self.exercises = exercises
        self.reminders = reminders
        self.clock = clock
        self.rng = rng
        self.is_sport_day = is_sport_day

    def _settings(self) -> AppSettings:
        return self.storage.load_settings() or AppSettings()

    def today(self) -> list[ScheduledExercise]:
        """Today's stored schedule; empty when it belongs to another day."""
        scheduled = self.storage.load_scheduled_exercises() or []
        if needs_scheduling_today(scheduled, self.clock.today()):
            return []
        return scheduled

    # ======================================================================
    # Daily build
    # ======================================================================

    def _build(self) -> list[ScheduledExercise]:
        now = self.clock.now()
        settings = self._settings()
        available = available_today(self.exercises.list_exercises(), settings, now,
                                    rng=self.rng, is_sport_day=self.is_sport_day)
        scheduled = schedule_today(available, settings, now, rng=self.rng)

        morning_count, afternoon_count = split_counts(settings.snacks_per_day)
        reminders = session_reminders(settings, morning_count, afternoon_count, now) if scheduled else []
        self.reminders.schedule_daily(reminders)

        self.storage.save_scheduled_exercises(scheduled)
        self.storage.save_last_scheduled_date(now.date())
        logger.info(f"Scheduled {len(scheduled)} exercises for {now.date()}")
        return scheduled

    def ensure_today_scheduled(self) -> list[ScheduledExercise]:
        """
        Build today's schedule if it does not exist yet.

        An existing schedule is left alone apart from marking entries the
        history log already shows as done today.
        """
        with self.storage.locked(StorageKey.SCHEDULED_EXERCISES):
            existing = self.storage.load_scheduled_exercises()
            today = self.clock.today()
            if needs_scheduling_today(existing, today):
                return self._build()

            scheduled, changed = reconcile_with_history(existing, self.storage.load_exercise_history(), today)
            if changed:
                self.storage.save_scheduled_exercises(scheduled)
                logger.debug("Schedule reconciled with history")
            return scheduled

    def reschedule_today(self) -> list[ScheduledExercise]:
        """Discard today's schedule and build a new one, e.g. after a settings change."""
        with self.storage.locked(StorageKey.SCHEDULED_EXERCISES):
            self.storage.clear_scheduled_exercises()
            return self._build()

    # ======================================================================
    # Reminder callbacks
    # ======================================================================

    def handle_tap(self, exercise_id: str) -> Optional[ScheduledExercise]:
        """
        A reminder for *exercise_id* was tapped.

        Returns:
            The pending schedule entry to open, or None when the exercise
            has nothing pending today
        """
        entry = find_pending(self.today(), exercise_id)
        if entry is None:
            logger.debug(f"Tap on '{exercise_id}' with nothing pending")
        return entry

    def handle_snooze(self, exercise_id: str, minutes: int = DEFAULT_SNOOZE_MINUTES) -> ScheduledExercise:
        """
        Push the reminder for *exercise_id* back by *minutes*.

        The original reminder is cancelled and the snoozed one is scheduled
        under its offset key.
        """
        now = self.clock.now()
        exercise = self.exercises.get(exercise_id)
        name = exercise.name if exercise is not None else exercise_id

        with self.storage.locked(StorageKey.SCHEDULED_EXERCISES):
            scheduled = self.today()
            original = next((s for s in scheduled if s.exercise_id == exercise_id), None)
            updated, snoozed = snooze_scheduled(scheduled, exercise_id, name, minutes, now)
            if original is not None:
                self.storage.save_scheduled_exercises(updated)
                self.reminders.cancel(original.notification_id)

        body = exercise.related_stretch if exercise is not None else ""
        self.reminders.schedule_snoozed(snoozed, body=body)
        logger.info(f"Snoozed '{exercise_id}' for {minutes} min")
        return snoozed

    # ======================================================================
    # Entry updates
    # ======================================================================

    def update_entry(self, updated: ScheduledExercise) -> list[ScheduledExercise]:
        """Replace the entry with the same reminder key and persist."""
        with self.storage.locked(StorageKey.SCHEDULED_EXERCISES):
            scheduled = replace_scheduled(self.today(), updated)
            self.storage.save_scheduled_exercises(scheduled)
            return scheduled

    def progress(self) -> tuple[int, int]:
        """``(completed, total)`` for today's schedule."""
        scheduled = self.today()
        return completed_count(scheduled), len(scheduled)
