"""
Adaptive difficulty progression.

After each session the user reports how many reps (or seconds) they did and
whether it felt easy.  Progression is **monotone**: difficulty only ever
goes up, and only when both conditions hold:

    was_easy  AND  actual_amount >= current target

Increment is +2 reps for rep-based exercises, +5 seconds for timed ones.
There is no automatic regression path; lowering a target is a manual
:func:`adjust_reps`.
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.primal.errors import ExerciseNotFoundError
from app.schemas.exercise import Exercise


class ProgressionConfig(BaseModel):
    """Increment sizes applied after an easy, fully completed session."""

    rep_increment: int = Field(2, ge=0)
    timed_increment_seconds: int = Field(5, ge=0)


DEFAULT_PROGRESSION_CONFIG = ProgressionConfig()

MIN_REPS = 1


def next_target(exercise: Exercise, actual_amount: int, was_easy: bool,
                config: Optional[ProgressionConfig] = None) -> int:
    """Target after a session, without touching the exercise."""
    cfg = config or DEFAULT_PROGRESSION_CONFIG
    if was_easy and actual_amount >= exercise.current_reps:
        step = cfg.timed_increment_seconds if exercise.is_timed else cfg.rep_increment
        return exercise.current_reps + step
    return exercise.current_reps


def complete_session(exercise: Exercise, actual_amount: int, was_easy: bool, now: datetime.datetime,
                     config: Optional[ProgressionConfig] = None) -> Exercise:
    """Apply one session result and stamp ``last_performed_date``."""
    return exercise.model_copy(update={
        "current_reps": next_target(exercise, actual_amount, was_easy, config),
        "last_performed_date": now,
    })


# ======================================================================
# List-level helpers
# ======================================================================


def find_exercise(exercises: list[Exercise], exercise_id: str) -> Optional[Exercise]:
    """Look up an exercise by id.  Returns ``None`` if not found."""
    return next((e for e in exercises if e.id == exercise_id), None)


def require_exercise(exercises: list[Exercise], exercise_id: str) -> Exercise:
    """Look up an exercise by id.

    Raises :class:`ExerciseNotFoundError` if not found.
    """
    exercise = find_exercise(exercises, exercise_id)
    if exercise is None:
        raise ExerciseNotFoundError(exercise_id)
    return exercise


def replace_exercise(exercises: list[Exercise], updated: Exercise) -> list[Exercise]:
    return [updated if e.id == updated.id else e for e in exercises]


def apply_session_result(exercises: list[Exercise], exercise_id: str, actual_amount: int, was_easy: bool,
                         now: datetime.datetime,
                         config: Optional[ProgressionConfig] = None) -> tuple[list[Exercise], Exercise]:
    """Progress *exercise_id* inside *exercises*.

    An unknown id is fatal: losing a session result silently would lose
    progression state.

    Returns:
        ``(new_exercise_list, updated_exercise)``
    """
    updated = complete_session(require_exercise(exercises, exercise_id), actual_amount, was_easy, now, config)
    return replace_exercise(exercises, updated), updated


def adjust_reps(exercise: Exercise, new_reps: int) -> Exercise:
    """Manual target change.  Values below 1 are clamped to 1."""
    return exercise.model_copy(update={"current_reps": max(new_reps, MIN_REPS)})


def mark_performed(exercise: Exercise, now: datetime.datetime) -> Exercise:
    """Stamp ``last_performed_date`` without progressing."""
    return exercise.model_copy(update={"last_performed_date": now})
