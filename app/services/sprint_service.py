"""
Sprint service.

Keeps the sprint calendar populated and drives today's session through its
hidden → revealed → completed states.
"""

import datetime
import random
from typing import Optional

from loguru import logger

from app.core.clock import Clock
from app.primal.sprint_calendar import (
    SprintConfig,
    add_ad_hoc_sprint,
    complete_todays_sprint,
    ensure_sprints_scheduled,
    increment_todays_rep,
    next_sprint,
    past_sprints,
    reschedule_for_month,
    reveal_todays_sprint,
    todays_sprint,
    upcoming_sprints,
)
from app.schemas.sprint import SprintSession, SprintStatistics
from app.services.reminders import ReminderDispatcher
from app.services.storage_service import StorageKey, StorageService


class SprintService:
    """Service for sprint sessions."""

    def __init__(
        self,
        storage: StorageService,
        reminders: ReminderDispatcher,
        clock: Clock,
        rng: Optional[random.Random] = None,
        config: Optional[SprintConfig] = None,
    ):
        self.storage = storage
        self.reminders = reminders
        self.clock = clock
        self.rng = rng
        self.config = config

    def sessions(self) -> list[SprintSession]:
        return self.storage.load_sprint_sessions()

    # ======================================================================
    # Calendar
    # ======================================================================

    def ensure_scheduled(self) -> list[SprintSession]:
        """
        Fill the current and next month, then remind about today's sprint.

        The reminder is only set while today's session is still open.
        """
        today = self.clock.today()
        with self.storage.locked(StorageKey.SPRINT_SESSIONS):
            sprints, changed = ensure_sprints_scheduled(self.sessions(), today, self.config)
            if changed:
                self.storage.save_sprint_sessions(sprints)
                logger.info(f"Sprint calendar extended to {len(sprints)} sessions")

        session = todays_sprint(sprints, today)
        if session is not None and not session.completed:
            self.reminders.schedule_sprint_reminder(session, self.clock.now())
        return sprints

    def reschedule_month(self) -> list[SprintSession]:
        """Redraw the current month's remaining sprint days."""
        today = self.clock.today()
        with self.storage.locked(StorageKey.SPRINT_SESSIONS):
            sprints = reschedule_for_month(self.sessions(), today, rng=self.rng, config=self.config)
            self.storage.save_sprint_sessions(sprints)

        if todays_sprint(sprints, today) is None:
            self.reminders.cancel_sprint_reminder()
        logger.info(f"Rescheduled sprints for {today:%Y-%m}")
        return sprints

    def add_ad_hoc(self, day: datetime.date, target_sets: int) -> list[SprintSession]:
        """Schedule an extra sprint with a known target.  Replaces a same-day session."""
        with self.storage.locked(StorageKey.SPRINT_SESSIONS):
            sprints = add_ad_hoc_sprint(self.sessions(), day, target_sets)
            self.storage.save_sprint_sessions(sprints)
            return sprints

    # ======================================================================
    # Today's session
    # ======================================================================

    def todays_sprint(self) -> Optional[SprintSession]:
        """Today's session, revealing its target on first look."""
        with self.storage.locked(StorageKey.SPRINT_SESSIONS):
            sprints, session, changed = reveal_todays_sprint(self.sessions(), self.clock.today(),
                                                             rng=self.rng, config=self.config)
            if changed:
                self.storage.save_sprint_sessions(sprints)
                logger.info(f"Sprint target revealed: {session.target_sets}")
            return session

    def increment(self) -> Optional[SprintSession]:
        """Count one finished sprint.  None when today is not a sprint day."""
        with self.storage.locked(StorageKey.SPRINT_SESSIONS):
            sprints, session = increment_todays_rep(self.sessions(), self.clock.today(), self.clock.now(),
                                                    rng=self.rng, config=self.config)
            if session is None:
                return None
            self.storage.save_sprint_sessions(sprints)

        if session.completed:
            self.reminders.cancel_sprint_reminder()
        return session

    def complete_today(self) -> Optional[SprintSession]:
        with self.storage.locked(StorageKey.SPRINT_SESSIONS):
            sprints, session = complete_todays_sprint(self.sessions(), self.clock.today(), self.clock.now())
            if session is None:
                return None
            self.storage.save_sprint_sessions(sprints)

        self.reminders.cancel_sprint_reminder()
        return session

    # ======================================================================
    # Queries
    # ======================================================================

    def upcoming(self) -> list[SprintSession]:
        return upcoming_sprints(self.sessions(), self.clock.today())

    def past(self) -> list[SprintSession]:
        return past_sprints(self.sessions(), self.clock.today())

    def next_session(self) -> Optional[SprintSession]:
        return next_sprint(self.sessions(), self.clock.today())

    def statistics(self) -> SprintStatistics:
        return SprintStatistics.from_sessions(self.sessions(), self.clock.today())
