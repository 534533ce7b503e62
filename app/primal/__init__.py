"""Primal Pal core algorithms: selection, session scheduling, progression, sprint calendar, walks."""

from app.primal.errors import ExerciseNotFoundError, PrimalError
from app.primal.progression import ProgressionConfig, complete_session
from app.primal.selection import SelectionConfig, alternating_weekday_policy, available_today
from app.primal.session_scheduler import needs_scheduling_today, schedule_today
from app.primal.sprint_calendar import (
    SprintConfig,
    ensure_sprints_scheduled,
    generate_sprint_days_for_month,
    needs_scheduling_for_month,
    reschedule_for_month,
)

__all__ = [
    "ExerciseNotFoundError",
    "PrimalError",
    "ProgressionConfig",
    "complete_session",
    "SelectionConfig",
    "alternating_weekday_policy",
    "available_today",
    "needs_scheduling_today",
    "schedule_today",
    "SprintConfig",
    "ensure_sprints_scheduled",
    "generate_sprint_days_for_month",
    "needs_scheduling_for_month",
    "reschedule_for_month",
]
