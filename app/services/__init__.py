"""Business logic services."""

from app.services.exercise_service import ExerciseService
from app.services.reminders import LoggingReminderDispatcher, ReminderDispatcher
from app.services.schedule_service import ScheduleService
from app.services.settings_service import SettingsService
from app.services.sprint_service import SprintService
from app.services.storage_service import StorageKey, StorageService
from app.services.walk_service import WalkService

__all__ = [
    "ExerciseService",
    "LoggingReminderDispatcher",
    "ReminderDispatcher",
    "ScheduleService",
    "SettingsService",
    "SprintService",
    "StorageKey",
    "StorageService",
    "WalkService",
]
