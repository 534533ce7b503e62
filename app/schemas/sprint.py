"""
Sprint session schemas.

A :class:`SprintSession` moves through three states:

- ``hidden``:    scheduled, ``target_sets is None`` (target not yet revealed)
- ``revealed``:  ``target_sets`` set, ``completed_sets < target_sets``
- ``completed``: ``completed is True``

The target is revealed lazily on the day itself, so the athlete never knows
in advance how many sprints the session will ask for.
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SprintSession(BaseModel):
    """A single sprint day.  At most one per calendar date."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    completed: bool = False
    completed_at: Optional[datetime.datetime] = None
    target_sets: Optional[int] = Field(None, description="None until revealed on the day")
    completed_sets: int = Field(0, ge=0)

    @property
    def state(self) -> str:
        if self.completed:
            return "completed"
        if self.target_sets is None:
            return "hidden"
        return "revealed"

    def is_on(self, day: datetime.date) -> bool:
        return self.date == day

    def is_in_month(self, year: int, month: int) -> bool:
        return self.date.year == year and self.date.month == month

    def mark_completed(self, now: datetime.datetime) -> SprintSession:
        """Manual completion.  Forces ``completed_sets`` up to the target."""
        completed_sets = self.completed_sets
        if self.target_sets is not None and self.target_sets > completed_sets:
            completed_sets = self.target_sets
        return self.model_copy(update={"completed": True, "completed_at": now, "completed_sets": completed_sets})

    def increment_sets(self, now: datetime.datetime) -> SprintSession:
        """Count one finished sprint.  Reaching the target completes the session.

        A completed session, or one already at its target, is returned
        unchanged, so the increment path alone never overshoots.
        """
        if self.completed or (self.target_sets is not None and self.completed_sets >= self.target_sets):
            return self
        completed_sets = self.completed_sets + 1
        if self.target_sets is not None and completed_sets >= self.target_sets:
            return self.model_copy(update={"completed_sets": completed_sets, "completed": True, "completed_at": now})
        return self.model_copy(update={"completed_sets": completed_sets})


class SprintStatistics(BaseModel):
    """Aggregate over past-or-today sprint sessions.  Never persisted."""

    total_scheduled: int = 0
    total_completed: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    completed_chunks: int = Field(0, description="Sum of finished sprints (sets)")
    missed_chunks: int = Field(0, description="Sum of sprints left undone")

    @property
    def completion_rate(self) -> float:
        if self.total_scheduled == 0:
            return 0.0
        return self.total_completed / self.total_scheduled * 100

    @classmethod
    def empty(cls) -> SprintStatistics:
        return cls()

    @classmethod
    def from_sessions(cls, sessions: list[SprintSession], today: datetime.date) -> SprintStatistics:
        """Compute statistics from *sessions*, ignoring future ones.

        Current streak walks most-recent-first: today's still-open session
        neither counts nor breaks the streak, the first past incomplete
        session stops it.  Longest streak walks chronologically and resets on
        any incomplete session.

        A legacy session without ``target_sets`` is treated as a one-sprint
        target: it contributes one missed chunk when not completed.
        """
        past = sorted((s for s in sessions if s.date <= today), key=lambda s: s.date, reverse=True)
        if not past:
            return cls.empty()

        completed_chunks = 0
        missed_chunks = 0
        for s in past:
            completed_chunks += s.completed_sets
            if s.target_sets is not None:
                if not s.completed or s.completed_sets < s.target_sets:
                    missed_chunks += max(s.target_sets - s.completed_sets, 0)
            elif not s.completed:
                missed_chunks += 1

        current_streak = 0
        for s in past:
            if s.completed:
                current_streak += 1
            elif s.date < today:
                break

        longest_streak = 0
        running = 0
        for s in reversed(past):
            if s.completed:
                running += 1
                longest_streak = max(longest_streak, running)
            else:
                running = 0

        return cls(
            total_scheduled=len(past),
            total_completed=sum(1 for s in past if s.completed),
            current_streak=current_streak,
            longest_streak=longest_streak,
            completed_chunks=completed_chunks,
            missed_chunks=missed_chunks,
        )
