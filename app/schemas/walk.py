"""
Daily walk schemas.

One :class:`DailyWalk` per calendar date accumulates every timed walk of
that day.  ``completed`` is derived (``total_seconds > 0``) and never stored.
"""

from __future__ import annotations

import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DailyWalk(BaseModel):
    """Accumulated walking time and distance for one day."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    total_seconds: int = Field(0, ge=0)
    distance_meters: float = Field(0.0, ge=0.0)
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _migrate_minutes(cls, data: Any) -> Any:
        """Older records stored ``completed`` + ``duration_minutes``."""
        if not isinstance(data, dict) or "total_seconds" in data:
            return data
        migrated = {k: v for k, v in data.items() if k not in ("completed", "duration_minutes")}
        minutes = data.get("duration_minutes")
        if data.get("completed") is True and minutes is not None:
            migrated["total_seconds"] = int(minutes) * 60
        else:
            migrated["total_seconds"] = 0
        return migrated

    @property
    def completed(self) -> bool:
        return self.total_seconds > 0

    @property
    def duration_minutes(self) -> int:
        return self.total_seconds // 60

    def add_seconds(self, seconds: int, extra_distance: float = 0.0) -> DailyWalk:
        return self.model_copy(update={
            "total_seconds": self.total_seconds + max(seconds, 0),
            "distance_meters": self.distance_meters + max(extra_distance, 0.0),
        })


class WalkStatistics(BaseModel):
    """Aggregate over a list of daily walks.  Never persisted."""

    total_days: int = 0
    completed_days: int = 0
    total_seconds: int = 0
    total_distance_meters: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    period_start: Optional[datetime.date] = None
    period_end: Optional[datetime.date] = None

    @property
    def completion_rate(self) -> float:
        if self.total_days == 0:
            return 0.0
        return self.completed_days / self.total_days * 100

    @property
    def average_duration_seconds(self) -> float:
        if self.completed_days == 0:
            return 0.0
        return self.total_seconds / self.completed_days

    @property
    def average_duration_minutes(self) -> float:
        return self.average_duration_seconds / 60

    @property
    def total_minutes(self) -> int:
        return self.total_seconds // 60

    @classmethod
    def empty(cls, period_start: Optional[datetime.date] = None,
              period_end: Optional[datetime.date] = None) -> WalkStatistics:
        return cls(period_start=period_start, period_end=period_end)

    @classmethod
    def from_walks(cls, walks: list[DailyWalk], today: datetime.date,
                   period_start: Optional[datetime.date] = None,
                   period_end: Optional[datetime.date] = None) -> WalkStatistics:
        """Compute statistics from *walks*.

        The period bounds are recorded on the result, not applied as a
        filter; pass an already-restricted list
        (see :func:`app.primal.walks.walks_in_range`).

        ``current_streak`` counts back from *today* one day at a time; a
        missing record breaks it exactly like an incomplete one.
        ``longest_streak`` only chains completed records on consecutive
        dates; a gap restarts the run at 1.
        """
        if not walks:
            return cls.empty(period_start, period_end)

        completed = sorted((w for w in walks if w.completed), key=lambda w: w.date)
        completed_by_date = {w.date: w for w in completed}

        current_streak = 0
        check = today
        while check in completed_by_date:
            current_streak += 1
            check -= datetime.timedelta(days=1)

        longest_streak = 0
        running = 0
        previous: Optional[datetime.date] = None
        for w in completed:
            if previous is not None and (w.date - previous).days == 1:
                running += 1
            else:
                running = 1
            longest_streak = max(longest_streak, running)
            previous = w.date

        return cls(
            total_days=len(walks),
            completed_days=len(completed),
            total_seconds=sum(w.total_seconds for w in completed),
            total_distance_meters=sum(w.distance_meters for w in completed),
            current_streak=current_streak,
            longest_streak=longest_streak,
            period_start=period_start,
            period_end=period_end,
        )
