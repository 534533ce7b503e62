"""
Exercise selection: which exercises are eligible today.

Day type
--------
Whether today is a **sport day** (mobility focus) or a **rest day**
(strength focus) is an external policy ``is_sport_day(date) -> bool``.
The engine consumes it without owning it; :func:`alternating_weekday_policy`
is the default.

Secondary discipline
--------------------
When the secondary discipline is enabled, a fixed quota of its drills
(2 morning + 2 afternoon) is mixed into the day.  The rest of
``snacks_per_day`` comes from the regular pool.  Both pools are shuffled
independently and cycled with wraparound, so a small pool repeats entries
instead of running short.  The combined list is shuffled again so the two
categories interleave.
"""

from __future__ import annotations

import datetime
import random
from typing import Callable, Optional

from pydantic import BaseModel, Field

from app.primal.random_source import resolve, shuffled, take_cyclic
from app.schemas.app_settings import AppSettings
from app.schemas.exercise import Exercise, ExerciseType

SportDayPolicy = Callable[[datetime.date], bool]


# ======================================================================
# Configuration
# ======================================================================


class SelectionConfig(BaseModel):
    """Quota configuration for the daily selection."""

    secondary_per_session: int = Field(2, ge=0)
    sessions_per_day: int = Field(2, ge=1)

    @property
    def secondary_daily_quota(self) -> int:
        return self.secondary_per_session * self.sessions_per_day


DEFAULT_SELECTION_CONFIG = SelectionConfig()


# ======================================================================
# Day-type policy
# ======================================================================


def alternating_weekday_policy(day: datetime.date) -> bool:
    """Mon / Wed / Fri / Sun are sport days, the rest are rest days."""
    return day.weekday() % 2 == 0


def day_type_filter(day: datetime.date, is_sport_day: SportDayPolicy = alternating_weekday_policy) -> ExerciseType:
    """Regular exercise family for *day*."""
    return ExerciseType.MOBILITY if is_sport_day(day) else ExerciseType.STRENGTH


def _enabled_of_type(exercises: list[Exercise], exercise_type: ExerciseType) -> list[Exercise]:
    return [e for e in exercises if e.is_enabled and e.type == exercise_type]


# ======================================================================
# Public API
# ======================================================================


def available_today(
    exercises: list[Exercise],
    settings: AppSettings,
    now: datetime.datetime,
    rng: Optional[random.Random] = None,
    is_sport_day: SportDayPolicy = alternating_weekday_policy,
    config: Optional[SelectionConfig] = None,
) -> list[Exercise]:
    """Exercises eligible for today.

    Args:
        exercises: Full exercise list.
        settings: User settings (snacks per day, secondary discipline flag).
        now: Current local time; only its calendar day matters.
        rng: Optional random source.  Fresh entropy when ``None``.
        is_sport_day: Day-type policy.
        config: Optional :class:`SelectionConfig` override.

    Returns:
        Possibly empty list.  Never raises.
    """
    cfg = config or DEFAULT_SELECTION_CONFIG
    regular_pool = _enabled_of_type(exercises, day_type_filter(now.date(), is_sport_day))

    if not settings.secondary_discipline_enabled:
        return regular_pool

    r = resolve(rng)
    secondary_pool = _enabled_of_type(exercises, ExerciseType.SECONDARY_DISCIPLINE)

    secondary_count = cfg.secondary_daily_quota
    regular_count = max(settings.snacks_per_day - secondary_count, 0)

    regular_shuffled = shuffled(regular_pool, r)
    secondary_shuffled = shuffled(secondary_pool, r)

    result = take_cyclic(regular_shuffled, regular_count) + take_cyclic(secondary_shuffled, secondary_count)
    r.shuffle(result)
    return result


def exercises_for_day_type(exercises: list[Exercise], sport_day: bool,
                           include_secondary: bool = False) -> list[Exercise]:
    """Preview listing: every enabled exercise of a day type, optionally
    followed by the enabled secondary-discipline drills."""
    regular = _enabled_of_type(exercises, ExerciseType.MOBILITY if sport_day else ExerciseType.STRENGTH)
    if not include_secondary:
        return regular
    return regular + _enabled_of_type(exercises, ExerciseType.SECONDARY_DISCIPLINE)


def select_random_exercise(
    exercises: list[Exercise],
    settings: AppSettings,
    now: datetime.datetime,
    rng: Optional[random.Random] = None,
    is_sport_day: SportDayPolicy = alternating_weekday_policy,
) -> Optional[Exercise]:
    """Pick one exercise for an ad-hoc snack.

    Pools are widened step by step until one is non-empty:

    1. today's selection minus exercises already performed today,
    2. today's whole selection,
    3. every enabled exercise of today's type.

    Returns ``None`` when all three are empty.
    """
    r = resolve(rng)
    today = now.date()
    selection = available_today(exercises, settings, now, rng=r, is_sport_day=is_sport_day)

    not_done_today = [e for e in selection if not e.performed_on(today)]
    for pool in (not_done_today, selection, _enabled_of_type(exercises, day_type_filter(today, is_sport_day))):
        if pool:
            return r.choice(pool)
    return None
