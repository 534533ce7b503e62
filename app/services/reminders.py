"""
Reminder collaborator.

The engine never talks to a notification system directly.  Services hand
reminders to a :class:`ReminderDispatcher`; the platform layer implements
it and reports taps and snoozes back through
:meth:`app.services.schedule_service.ScheduleService.handle_tap` and
:meth:`~app.services.schedule_service.ScheduleService.handle_snooze`.

:class:`LoggingReminderDispatcher` is the in-process implementation: it
keeps the pending reminders in memory and logs every change.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict

from app.schemas.scheduled_exercise import ScheduledExercise, SessionReminder, SessionSlot
from app.schemas.sprint import SprintSession

SPRINT_REMINDER_ID = 900
SPRINT_REMINDER_TIME = datetime.time(9, 0)


class PendingReminder(BaseModel):
    """A reminder waiting to fire."""

    model_config = ConfigDict(frozen=True)

    notification_id: int
    fire_at: datetime.datetime
    title: str
    body: str
    exercise_id: Optional[str] = None


def session_title(slot: SessionSlot) -> str:
    return "Morning exercise snacks" if slot == SessionSlot.MORNING else "Afternoon exercise snacks"


def sprint_fire_time(session: SprintSession, now: datetime.datetime) -> datetime.datetime:
    """09:00 on the sprint day, or *now* when that has already passed."""
    at = datetime.datetime.combine(session.date, SPRINT_REMINDER_TIME)
    return at if at > now else now


class ReminderDispatcher(ABC):
    """Schedules and cancels user-facing reminders."""

    @abstractmethod
    def schedule_daily(self, reminders: list[SessionReminder]) -> None:
        """Replace every pending reminder with today's session reminders."""

    @abstractmethod
    def schedule_snoozed(self, entry: ScheduledExercise, body: str = "") -> None:
        """Schedule a single-exercise reminder at ``entry.scheduled_time``."""

    @abstractmethod
    def cancel(self, notification_id: int) -> None:
        ...

    @abstractmethod
    def cancel_all(self) -> None:
        ...

    @abstractmethod
    def schedule_sprint_reminder(self, session: SprintSession, now: datetime.datetime) -> None:
        """Remind about today's sprint; fires immediately when 09:00 is past."""

    def cancel_sprint_reminder(self) -> None:
        self.cancel(SPRINT_REMINDER_ID)


class LoggingReminderDispatcher(ReminderDispatcher):
    """In-memory dispatcher.  ``pending`` maps reminder keys to reminders."""

    def __init__(self):
        self.pending: dict[int, PendingReminder] = {}

    def _add(self, reminder: PendingReminder) -> None:
        self.pending[reminder.notification_id] = reminder
        logger.info(f"Reminder {reminder.notification_id} at {reminder.fire_at:%Y-%m-%d %H:%M}: {reminder.title}")

    def schedule_daily(self, reminders: list[SessionReminder]) -> None:
        self.cancel_all()
        for r in reminders:
            self._add(PendingReminder(
                notification_id=r.notification_id,
                fire_at=r.scheduled_time,
                title=session_title(r.session),
                body=f"{r.exercise_count} exercises ready to go",
            ))

    def schedule_snoozed(self, entry: ScheduledExercise, body: str = "") -> None:
        self._add(PendingReminder(
            notification_id=entry.notification_id,
            fire_at=entry.scheduled_time,
            title=f"Time for {entry.exercise_name}",
            body=body,
            exercise_id=entry.exercise_id,
        ))

    def cancel(self, notification_id: int) -> None:
        if self.pending.pop(notification_id, None) is not None:
            logger.debug(f"Cancelled reminder {notification_id}")

    def cancel_all(self) -> None:
        if self.pending:
            logger.debug(f"Cancelled {len(self.pending)} pending reminders")
        self.pending.clear()

    def schedule_sprint_reminder(self, session: SprintSession, now: datetime.datetime) -> None:
        self._add(PendingReminder(
            notification_id=SPRINT_REMINDER_ID,
            fire_at=sprint_fire_time(session, now),
            title="Sprint day",
            body="Today is a sprint day. Find out how many sprints are waiting for you.",
        ))

    def due(self, now: datetime.datetime) -> list[PendingReminder]:
        """Pending reminders whose fire time has come, earliest first."""
        return sorted((r for r in self.pending.values() if r.fire_at <= now), key=lambda r: r.fire_at)
