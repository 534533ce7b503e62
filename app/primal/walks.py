"""
Daily walk accumulation and reporting ranges.

Each timed walk adds its seconds and distance to the single record for its
calendar day.  Statistics live on
:meth:`app.schemas.walk.WalkStatistics.from_walks`.
"""

from __future__ import annotations

import datetime
from typing import Optional

from app.schemas.walk import DailyWalk, WalkStatistics

METERS_PER_MILE = 1609.344


def todays_walk(walks: list[DailyWalk], today: datetime.date) -> Optional[DailyWalk]:
    return next((w for w in walks if w.date == today), None)


def add_seconds_to_todays_walk(walks: list[DailyWalk], today: datetime.date, seconds: int,
                               extra_distance: float = 0.0) -> tuple[list[DailyWalk], DailyWalk]:
    """Accumulate a finished walk into today's record, creating it if needed.

    Returns:
        ``(walks, todays_record)``
    """
    existing = todays_walk(walks, today)
    if existing is None:
        updated = DailyWalk(date=today).add_seconds(seconds, extra_distance)
        return list(walks) + [updated], updated

    updated = existing.add_seconds(seconds, extra_distance)
    return [updated if w.date == today else w for w in walks], updated


def log_todays_walk(walks: list[DailyWalk], today: datetime.date, total_seconds: int = 0,
                    distance_meters: float = 0.0, notes: Optional[str] = None) -> list[DailyWalk]:
    """Overwrite today's record with explicit totals."""
    record = DailyWalk(date=today, total_seconds=max(total_seconds, 0),
                       distance_meters=max(distance_meters, 0.0), notes=notes)
    return [w for w in walks if w.date != today] + [record]


# ======================================================================
# Ranges
# ======================================================================


def walks_in_range(walks: list[DailyWalk], start: datetime.date, end: datetime.date) -> list[DailyWalk]:
    """Walks with ``start <= date <= end``."""
    return [w for w in walks if start <= w.date <= end]


def this_week_range(today: datetime.date) -> tuple[datetime.date, datetime.date]:
    """Monday to Sunday of the week containing *today*."""
    monday = today - datetime.timedelta(days=today.weekday())
    return monday, monday + datetime.timedelta(days=6)


def this_month_range(today: datetime.date) -> tuple[datetime.date, datetime.date]:
    first = today.replace(day=1)
    following = (first + datetime.timedelta(days=32)).replace(day=1)
    return first, following - datetime.timedelta(days=1)


def this_year_range(today: datetime.date) -> tuple[datetime.date, datetime.date]:
    return datetime.date(today.year, 1, 1), datetime.date(today.year, 12, 31)


def statistics_for_range(walks: list[DailyWalk], today: datetime.date, start: datetime.date,
                         end: datetime.date) -> WalkStatistics:
    return WalkStatistics.from_walks(walks_in_range(walks, start, end), today, period_start=start, period_end=end)


# ======================================================================
# Formatting
# ======================================================================


def format_duration(total_seconds: int) -> str:
    """``MM:SS``, or ``HH:MM:SS`` from one hour up."""
    hours, rest = divmod(max(int(total_seconds), 0), 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def distance_in_units(meters: float, imperial: bool) -> tuple[float, str]:
    """Distance converted for display: ``(value, 'mi')`` or ``(value, 'km')``."""
    if imperial:
        return meters / METERS_PER_MILE, "mi"
    return meters / 1000.0, "km"
