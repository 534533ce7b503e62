"""
Session scheduling: splitting a day's selection into morning and afternoon.

**Split**::

    morning_count   = ceil(snacks_per_day / 2)
    afternoon_count = snacks_per_day - morning_count

The selection is shuffled once; morning slots take the first
``morning_count`` entries and afternoon slots continue the same cyclic
index, so a pool shorter than ``snacks_per_day`` repeats entries instead of
running out.

``schedule_today`` is not pure: every call reshuffles.  Callers guard
against double scheduling with :func:`needs_scheduling_today`.
"""

from __future__ import annotations

import datetime
import math
import random
from collections import Counter
from typing import Optional

from app.primal.random_source import resolve, shuffled, take_cyclic
from app.schemas.app_settings import AppSettings
from app.schemas.exercise import Exercise
from app.schemas.history import ExerciseHistoryEntry
from app.schemas.scheduled_exercise import ScheduledExercise, SessionReminder, SessionSlot

# Reminder keys for the two session-level reminders, clear of snoozed keys (id + 100).
MORNING_REMINDER_ID = 1000
AFTERNOON_REMINDER_ID = 1001


def split_counts(snacks_per_day: int) -> tuple[int, int]:
    """Return ``(morning_count, afternoon_count)``.  Odd totals favour the morning."""
    morning = math.ceil(snacks_per_day / 2)
    return morning, snacks_per_day - morning


def session_time(day: datetime.date, at: datetime.time) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time(at.hour, at.minute))


# ======================================================================
# Scheduling
# ======================================================================


def schedule_today(
    available: list[Exercise],
    settings: AppSettings,
    now: datetime.datetime,
    rng: Optional[random.Random] = None,
) -> list[ScheduledExercise]:
    """Assign today's exercises to the morning and afternoon sessions.

    Args:
        available: Output of :func:`app.primal.selection.available_today`.
        settings: Snack count and reminder times.
        now: Current local time; schedule is built for its calendar day.
        rng: Optional random source.

    Returns:
        Morning entries first, then afternoon.  ``notification_id`` runs
        ``0..total-1`` within the batch.  Empty when *available* is empty.
    """
    if not available:
        return []

    morning_count, afternoon_count = split_counts(settings.snacks_per_day)
    pool = shuffled(available, resolve(rng))
    today = now.date()

    buckets = [
        (SessionSlot.MORNING, session_time(today, settings.morning_reminder_time),
         take_cyclic(pool, morning_count)),
        (SessionSlot.AFTERNOON, session_time(today, settings.afternoon_reminder_time),
         take_cyclic(pool, afternoon_count, start=morning_count)),
    ]

    scheduled: list[ScheduledExercise] = []
    for slot, at, picks in buckets:
        for exercise in picks:
            scheduled.append(ScheduledExercise(
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                scheduled_time=at,
                notification_id=len(scheduled),
                session=slot,
            ))
    return scheduled


def needs_scheduling_today(existing: Optional[list[ScheduledExercise]], today: datetime.date) -> bool:
    """Whether today's schedule still has to be built.

    ``True`` when nothing is stored, when the stored batch belongs to
    another day, or when any entry lacks a session (legacy record).
    """
    if not existing:
        return True
    if existing[0].scheduled_time.date() != today:
        return True
    return any(s.session is None for s in existing)


def session_reminders(
    settings: AppSettings,
    morning_count: int,
    afternoon_count: int,
    now: datetime.datetime,
) -> list[SessionReminder]:
    """Session-level reminders still worth firing today.

    Nothing when notifications are disabled; a session whose start time
    has already passed is skipped.
    """
    if not settings.notifications_enabled:
        return []

    today = now.date()
    candidates = [
        (MORNING_REMINDER_ID, SessionSlot.MORNING, morning_count, settings.morning_reminder_time),
        (AFTERNOON_REMINDER_ID, SessionSlot.AFTERNOON, afternoon_count, settings.afternoon_reminder_time),
    ]
    reminders = []
    for notification_id, slot, count, at in candidates:
        when = session_time(today, at)
        if when > now:
            reminders.append(SessionReminder(notification_id=notification_id, session=slot,
                                             exercise_count=count, scheduled_time=when))
    return reminders


# ======================================================================
# Updates to an existing schedule
# ======================================================================


def replace_scheduled(scheduled: list[ScheduledExercise], updated: ScheduledExercise) -> list[ScheduledExercise]:
    """Replace the entry sharing ``updated.notification_id``.  Unknown keys leave the list as is."""
    return [updated if s.notification_id == updated.notification_id else s for s in scheduled]


def find_pending(scheduled: list[ScheduledExercise], exercise_id: str) -> Optional[ScheduledExercise]:
    """First not-yet-completed entry for *exercise_id*."""
    return next((s for s in scheduled if s.exercise_id == exercise_id and not s.is_completed), None)


def snooze_scheduled(
    scheduled: list[ScheduledExercise],
    exercise_id: str,
    exercise_name: str,
    minutes: int,
    now: datetime.datetime,
) -> tuple[list[ScheduledExercise], ScheduledExercise]:
    """Push the reminder for *exercise_id* back by *minutes*.

    The first entry for that exercise is replaced by its snoozed copy and
    the list is re-sorted by time.  When the exercise is not in today's
    schedule a synthetic entry (reminder key 0) is snoozed and returned,
    but the list is left unchanged.

    Returns:
        ``(new_schedule, snoozed_entry)``
    """
    index = next((i for i, s in enumerate(scheduled) if s.exercise_id == exercise_id), None)
    if index is None:
        original = ScheduledExercise(exercise_id=exercise_id, exercise_name=exercise_name,
                                     scheduled_time=now, notification_id=0)
        return list(scheduled), original.snooze(minutes, now)

    snoozed = scheduled[index].snooze(minutes, now)
    updated = list(scheduled)
    updated[index] = snoozed
    updated.sort(key=lambda s: s.scheduled_time)
    return updated, snoozed


def reconcile_with_history(
    scheduled: list[ScheduledExercise],
    history: list[ExerciseHistoryEntry],
    today: datetime.date,
) -> tuple[list[ScheduledExercise], bool]:
    """Mark entries completed when today's history already records them.

    Covers completions logged while the schedule update was lost.  Each
    history entry closes at most one scheduled entry, so an exercise that
    appears twice in the day needs two completions.

    Returns:
        ``(schedule, changed)``
    """
    unmatched = Counter(h.exercise_id for h in history if h.completed_at.date() == today)
    unmatched.subtract(s.exercise_id for s in scheduled if s.is_completed)
    changed = False
    result = []
    for s in scheduled:
        if not s.is_completed and unmatched[s.exercise_id] > 0:
            unmatched[s.exercise_id] -= 1
            s = s.mark_completed()
            changed = True
        result.append(s)
    return result, changed


def completed_count(scheduled: list[ScheduledExercise], session: Optional[SessionSlot] = None) -> int:
    return sum(1 for s in scheduled if s.is_completed and (session is None or s.session == session))
