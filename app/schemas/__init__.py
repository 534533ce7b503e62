"""Pydantic schemas for persisted records and derived statistics."""

from app.schemas.app_settings import AppSettings
from app.schemas.exercise import Exercise, ExerciseType
from app.schemas.history import ExerciseHistoryEntry, ExerciseHistoryStatistics
from app.schemas.scheduled_exercise import (
    SNOOZE_NOTIFICATION_OFFSET,
    ScheduledExercise,
    SessionReminder,
    SessionSlot,
)
from app.schemas.sprint import SprintSession, SprintStatistics
from app.schemas.walk import DailyWalk, WalkStatistics

__all__ = [
    "AppSettings",
    "Exercise",
    "ExerciseType",
    "ExerciseHistoryEntry",
    "ExerciseHistoryStatistics",
    "SNOOZE_NOTIFICATION_OFFSET",
    "ScheduledExercise",
    "SessionReminder",
    "SessionSlot",
    "SprintSession",
    "SprintStatistics",
    "DailyWalk",
    "WalkStatistics",
]
