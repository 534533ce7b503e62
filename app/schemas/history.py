"""Exercise history schemas (append-only completion log)."""

from __future__ import annotations

import datetime
from collections import Counter

from pydantic import BaseModel, ConfigDict, Field


class ExerciseHistoryEntry(BaseModel):
    """One completed exercise.  Written once, never mutated or deleted."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Millisecond timestamp, unique within the log")
    exercise_id: str
    exercise_name: str
    completed_at: datetime.datetime


class ExerciseHistoryStatistics(BaseModel):
    """Completion counts derived from the history log."""

    total_completed: int = 0
    last_7_days: int = 0
    last_30_days: int = 0
    counts_by_name: list[tuple[str, int]] = Field(
        default_factory=list,
        description="(exercise_name, count), most performed first",
    )

    @classmethod
    def from_history(cls, history: list[ExerciseHistoryEntry],
                     now: datetime.datetime) -> ExerciseHistoryStatistics:
        """Totals over the whole log and over the trailing 7 and 30 days.

        Ties in ``counts_by_name`` are broken alphabetically.
        """
        week_ago = now - datetime.timedelta(days=7)
        month_ago = now - datetime.timedelta(days=30)
        counts = Counter(h.exercise_name for h in history)
        return cls(
            total_completed=len(history),
            last_7_days=sum(1 for h in history if h.completed_at > week_ago),
            last_30_days=sum(1 for h in history if h.completed_at > month_ago),
            counts_by_name=sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])),
        )
