"""
Sprint calendar: biweekly sprint days and their rep-by-rep state machine.

Month generation
----------------
Every calendar month gets exactly two sprint days: one uniform in
``[1, 15]`` and one uniform in ``[16, days_in_month]``.  The default mode
seeds the random source from ``year * 100 + month``, so regenerating a
month always yields the same two dates.  *Randomize* mode uses fresh
entropy and is reserved for explicit rescheduling.

Rolling horizon
---------------
:func:`ensure_sprints_scheduled` keeps the current and the next calendar
month populated.  It only fills months with no session at all, which makes
it idempotent.

State machine
-------------
``hidden`` (no target) → ``revealed`` (target drawn in ``[3, 6]`` the first
time today's sprint is looked at) → ``completed`` (increment reaches the
target, or manual completion).

Every function here is pure: it takes the full session list and returns a
new one.  Persisting the result is the caller's job.
"""

from __future__ import annotations

import calendar
import datetime
import random
from typing import Optional

from pydantic import BaseModel, Field

from app.primal.random_source import random_int_inclusive, resolve, seeded_for_month
from app.schemas.sprint import SprintSession

SPRINTS_PER_MONTH = 2


# ======================================================================
# Configuration
# ======================================================================


class SprintConfig(BaseModel):
    """Sprint calendar parameters."""

    first_half_last_day: int = Field(15, ge=1, le=27)
    min_target_sets: int = Field(3, ge=1)
    max_target_sets: int = Field(6, ge=1)


DEFAULT_SPRINT_CONFIG = SprintConfig()


# ======================================================================
# Calendar helpers
# ======================================================================


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def next_month(year: int, month: int) -> tuple[int, int]:
    return (year + 1, 1) if month == 12 else (year, month + 1)


def _dates(sprints: list[SprintSession]) -> set[datetime.date]:
    return {s.date for s in sprints}


def _sorted(sprints: list[SprintSession]) -> list[SprintSession]:
    return sorted(sprints, key=lambda s: s.date)


# ======================================================================
# Generation
# ======================================================================


def generate_sprint_days_for_month(year: int, month: int, randomize: bool = False,
                                   rng: Optional[random.Random] = None,
                                   config: Optional[SprintConfig] = None) -> list[datetime.date]:
    """Two sprint dates for the month, ascending.

    Args:
        year: Calendar year.
        month: Calendar month (1-12).
        randomize: Use fresh entropy (or *rng*) instead of the month seed.
        rng: Random source for randomize mode.  Ignored otherwise.
        config: Optional :class:`SprintConfig` override.
    """
    cfg = config or DEFAULT_SPRINT_CONFIG
    r = resolve(rng) if randomize else seeded_for_month(year, month)
    last_day = days_in_month(year, month)

    first = random_int_inclusive(r, 1, cfg.first_half_last_day)
    second = random_int_inclusive(r, cfg.first_half_last_day + 1, last_day)
    return sorted([datetime.date(year, month, first), datetime.date(year, month, second)])


def needs_scheduling_for_month(sprints: list[SprintSession], year: int, month: int) -> bool:
    """``True`` iff no session falls in (year, month)."""
    return not any(s.is_in_month(year, month) for s in sprints)


def ensure_sprints_scheduled(sprints: list[SprintSession], today: datetime.date,
                             config: Optional[SprintConfig] = None) -> tuple[list[SprintSession], bool]:
    """Populate the current and next calendar months if they are empty.

    New sessions are created hidden.  Calling this twice is a no-op the
    second time.

    Returns:
        ``(sessions, changed)``
    """
    result = list(sprints)
    existing = _dates(result)
    changed = False

    for year, month in ((today.year, today.month), next_month(today.year, today.month)):
        if not needs_scheduling_for_month(result, year, month):
            continue
        for day in generate_sprint_days_for_month(year, month, config=config):
            if day not in existing:
                result.append(SprintSession(date=day))
                existing.add(day)
                changed = True

    return (_sorted(result), True) if changed else (result, False)


def reschedule_for_month(sprints: list[SprintSession], today: datetime.date,
                         rng: Optional[random.Random] = None,
                         config: Optional[SprintConfig] = None) -> list[SprintSession]:
    """Reshuffle the rest of the current month's sprints.

    Incomplete sessions of the current month are dropped; completed ones
    stay.  ``SPRINTS_PER_MONTH - completed_this_month`` new dates are drawn
    in randomize mode, accepting only today-or-later dates not already
    taken.  If that falls short (late in the month), remaining slots are
    filled from the days strictly after today, uniformly at random, until
    the quota is met or no free day is left.

    Returns:
        All sessions, ascending by date.
    """
    r = resolve(rng)
    year, month = today.year, today.month

    kept = [s for s in sprints if not (s.is_in_month(year, month) and not s.completed)]
    completed_this_month = sum(1 for s in kept if s.is_in_month(year, month))
    to_schedule = SPRINTS_PER_MONTH - completed_this_month

    taken = _dates(kept)
    added: list[datetime.date] = []

    if to_schedule > 0:
        for day in generate_sprint_days_for_month(year, month, randomize=True, rng=r, config=config):
            if len(added) >= to_schedule:
                break
            if day >= today and day not in taken:
                added.append(day)
                taken.add(day)

    if len(added) < to_schedule:
        remaining = [
            datetime.date(year, month, d)
            for d in range(today.day + 1, days_in_month(year, month) + 1)
            if datetime.date(year, month, d) not in taken
        ]
        r.shuffle(remaining)
        added.extend(remaining[:to_schedule - len(added)])

    return _sorted(kept + [SprintSession(date=day) for day in added])


def add_ad_hoc_sprint(sprints: list[SprintSession], day: datetime.date, target_sets: int) -> list[SprintSession]:
    """Schedule a revealed session on *day*, replacing any session already there."""
    session = SprintSession(date=day, target_sets=max(target_sets, 1))
    return _sorted([s for s in sprints if s.date != day] + [session])


# ======================================================================
# Queries
# ======================================================================


def todays_sprint(sprints: list[SprintSession], today: datetime.date) -> Optional[SprintSession]:
    return next((s for s in sprints if s.is_on(today)), None)


def upcoming_sprints(sprints: list[SprintSession], today: datetime.date) -> list[SprintSession]:
    """Sessions today or later, soonest first."""
    return _sorted([s for s in sprints if s.date >= today])


def past_sprints(sprints: list[SprintSession], today: datetime.date) -> list[SprintSession]:
    """Sessions strictly before today, most recent first."""
    return sorted((s for s in sprints if s.date < today), key=lambda s: s.date, reverse=True)


def next_sprint(sprints: list[SprintSession], today: datetime.date) -> Optional[SprintSession]:
    """First session strictly after today."""
    return next((s for s in upcoming_sprints(sprints, today) if s.date > today), None)


# ======================================================================
# State transitions on today's session
# ======================================================================


def _replace_on(sprints: list[SprintSession], updated: SprintSession) -> list[SprintSession]:
    return [updated if s.date == updated.date else s for s in sprints]


def reveal_todays_sprint(sprints: list[SprintSession], today: datetime.date,
                         rng: Optional[random.Random] = None,
                         config: Optional[SprintConfig] = None,
                         ) -> tuple[list[SprintSession], Optional[SprintSession], bool]:
    """Look up today's session, revealing its target if still hidden.

    Returns:
        ``(sessions, todays_session_or_None, changed)``
    """
    session = todays_sprint(sprints, today)
    if session is None or session.target_sets is not None or session.completed:
        return sprints, session, False

    cfg = config or DEFAULT_SPRINT_CONFIG
    target = random_int_inclusive(resolve(rng), cfg.min_target_sets, cfg.max_target_sets)
    revealed = session.model_copy(update={"target_sets": target})
    return _replace_on(sprints, revealed), revealed, True


def increment_todays_rep(sprints: list[SprintSession], today: datetime.date, now: datetime.datetime,
                         rng: Optional[random.Random] = None,
                         config: Optional[SprintConfig] = None,
                         ) -> tuple[list[SprintSession], Optional[SprintSession]]:
    """Count one finished sprint for today.

    A hidden session is revealed first.  Returns ``(sprints, None)`` when
    there is no session today.
    """
    sprints, session, _ = reveal_todays_sprint(sprints, today, rng=rng, config=config)
    if session is None:
        return sprints, None
    updated = session.increment_sets(now)
    return _replace_on(sprints, updated), updated


def complete_todays_sprint(sprints: list[SprintSession], today: datetime.date, now: datetime.datetime,
                           ) -> tuple[list[SprintSession], Optional[SprintSession]]:
    """Manually complete today's session.  ``(sprints, None)`` when there is none."""
    session = todays_sprint(sprints, today)
    if session is None:
        return sprints, None
    updated = session.mark_completed(now)
    return _replace_on(sprints, updated), updated
