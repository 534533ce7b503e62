"""
Scheduled exercise schemas.

A day's schedule is a list of :class:`ScheduledExercise` created in one
batch by the session scheduler.  ``notification_id`` is the key used by the
reminder collaborator; it is only unique within that day's batch and is
regenerated every day.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Snoozed reminders are re-keyed so they never collide with the original.
SNOOZE_NOTIFICATION_OFFSET = 100


class SessionSlot(str, Enum):
    """Time bucket of a scheduled exercise."""
    MORNING = "morning"
    AFTERNOON = "afternoon"


class ScheduledExercise(BaseModel):
    """One reminder slot of today's schedule."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str
    exercise_name: str = Field(..., description="Snapshot of the exercise name at scheduling time")
    scheduled_time: datetime.datetime
    notification_id: int = Field(..., ge=0)
    session: Optional[SessionSlot] = Field(
        None,
        description="Missing on legacy records; callers treat that as 'needs reschedule'",
    )
    is_completed: bool = False

    def mark_completed(self) -> ScheduledExercise:
        return self.model_copy(update={"is_completed": True})

    def snooze(self, minutes: int, now: datetime.datetime) -> ScheduledExercise:
        """Return a copy re-timed to ``now + minutes`` under a derived reminder key."""
        return self.model_copy(update={
            "scheduled_time": now + datetime.timedelta(minutes=minutes),
            "notification_id": self.notification_id + SNOOZE_NOTIFICATION_OFFSET,
            "is_completed": False,
        })


class SessionReminder(BaseModel):
    """Session-level reminder ("3 exercises ready to go") fired at a session start."""

    model_config = ConfigDict(frozen=True)

    notification_id: int
    session: SessionSlot
    exercise_count: int
    scheduled_time: datetime.datetime
