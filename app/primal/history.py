"""Exercise history log: entry creation and completion counts."""

from __future__ import annotations

import datetime

from app.schemas.history import ExerciseHistoryEntry, ExerciseHistoryStatistics


def next_history_id(history: list[ExerciseHistoryEntry], now: datetime.datetime) -> str:
    """Millisecond timestamp of *now*, bumped past any id already in the log."""
    taken = {h.id for h in history}
    candidate = int(now.timestamp() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def make_history_entry(history: list[ExerciseHistoryEntry], exercise_id: str, exercise_name: str,
                       now: datetime.datetime) -> ExerciseHistoryEntry:
    return ExerciseHistoryEntry(id=next_history_id(history, now), exercise_id=exercise_id,
                                exercise_name=exercise_name, completed_at=now)


def entries_on(history: list[ExerciseHistoryEntry], day: datetime.date) -> list[ExerciseHistoryEntry]:
    """Entries completed on *day*, newest first."""
    return sorted((h for h in history if h.completed_at.date() == day),
                  key=lambda h: h.completed_at, reverse=True)


def history_statistics(history: list[ExerciseHistoryEntry], now: datetime.datetime) -> ExerciseHistoryStatistics:
    return ExerciseHistoryStatistics.from_history(history, now)
