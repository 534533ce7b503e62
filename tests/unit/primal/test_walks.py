"""Tests for daily walk accumulation, ranges and walk statistics."""

import datetime

import pytest

from app.primal.walks import (
    METERS_PER_MILE,
    add_seconds_to_todays_walk,
    distance_in_units,
    format_duration,
    log_todays_walk,
    statistics_for_range,
    this_month_range,
    this_week_range,
    this_year_range,
    todays_walk,
    walks_in_range,
)
from app.schemas.walk import DailyWalk, WalkStatistics

TODAY = datetime.date(2026, 10, 21)  # Wednesday


def _make_walk(days_ago: int, seconds: int = 1200, distance: float = 0.0) -> DailyWalk:
    return DailyWalk(date=TODAY - datetime.timedelta(days=days_ago), total_seconds=seconds,
                     distance_meters=distance)


# ======================================================================
# Accumulation
# ======================================================================


class TestAccumulation:
    def test_first_walk_creates_record(self):
        walks, record = add_seconds_to_todays_walk([], TODAY, 600, 800.0)
        assert record == DailyWalk(date=TODAY, total_seconds=600, distance_meters=800.0)
        assert walks == [record]

    def test_second_walk_accumulates(self):
        walks, _ = add_seconds_to_todays_walk([_make_walk(1)], TODAY, 600, 500.0)
        walks, record = add_seconds_to_todays_walk(walks, TODAY, 300, 250.0)
        assert record.total_seconds == 900
        assert record.distance_meters == pytest.approx(750.0)
        assert len(walks) == 2

    def test_negative_seconds_ignored(self):
        _, record = add_seconds_to_todays_walk([_make_walk(0, seconds=100)], TODAY, -50)
        assert record.total_seconds == 100

    def test_log_overwrites(self):
        walks = log_todays_walk([_make_walk(0, seconds=100), _make_walk(1)], TODAY, total_seconds=1800,
                                notes="Park loop")
        assert len(walks) == 2
        assert todays_walk(walks, TODAY).total_seconds == 1800
        assert todays_walk(walks, TODAY).notes == "Park loop"

    def test_todays_walk_missing(self):
        assert todays_walk([_make_walk(1)], TODAY) is None


# ======================================================================
# Statistics
# ======================================================================


class TestWalkStatistics:
    def test_two_day_streak(self):
        stats = WalkStatistics.from_walks([_make_walk(0), _make_walk(1)], TODAY)
        assert stats.current_streak == 2

    def test_incomplete_gap_beyond_run(self):
        walks = [_make_walk(0), _make_walk(1), _make_walk(2, seconds=0)]
        stats = WalkStatistics.from_walks(walks, TODAY)
        assert stats.current_streak == 2
        assert stats.total_days == 3
        assert stats.completed_days == 2

    def test_no_walk_today_breaks_streak(self):
        stats = WalkStatistics.from_walks([_make_walk(1), _make_walk(2)], TODAY)
        assert stats.current_streak == 0
        assert stats.longest_streak == 2

    def test_longest_streak_across_gap(self):
        walks = [_make_walk(d) for d in (0, 4, 5, 6, 9)]
        stats = WalkStatistics.from_walks(walks, TODAY)
        assert stats.longest_streak == 3
        assert stats.current_streak == 1

    def test_totals_and_rates(self):
        walks = [_make_walk(0, 600, 1000.0), _make_walk(1, 1200, 2000.0), _make_walk(2, 0)]
        stats = WalkStatistics.from_walks(walks, TODAY)
        assert stats.total_seconds == 1800
        assert stats.total_distance_meters == pytest.approx(3000.0)
        assert stats.average_duration_seconds == pytest.approx(900.0)
        assert stats.average_duration_minutes == pytest.approx(15.0)
        assert stats.completion_rate == pytest.approx(200 / 3)
        assert stats.total_minutes == 30

    def test_empty(self):
        stats = WalkStatistics.from_walks([], TODAY)
        assert stats.total_days == 0
        assert stats.completion_rate == 0.0
        assert stats.average_duration_seconds == 0.0

    def test_period_bounds_recorded_not_applied(self):
        start, end = TODAY, TODAY
        stats = WalkStatistics.from_walks([_make_walk(0), _make_walk(30)], TODAY, start, end)
        assert stats.total_days == 2
        assert (stats.period_start, stats.period_end) == (start, end)

    def test_statistics_for_range_filters(self):
        stats = statistics_for_range([_make_walk(0), _make_walk(30)], TODAY, *this_week_range(TODAY))
        assert stats.total_days == 1
        assert stats.period_start == datetime.date(2026, 10, 19)


# ======================================================================
# Ranges and formatting
# ======================================================================


class TestRanges:
    def test_week_is_monday_to_sunday(self):
        assert this_week_range(TODAY) == (datetime.date(2026, 10, 19), datetime.date(2026, 10, 25))

    def test_week_on_sunday(self):
        assert this_week_range(datetime.date(2026, 10, 25))[0] == datetime.date(2026, 10, 19)

    @pytest.mark.parametrize("today, last", [
        (datetime.date(2026, 10, 21), datetime.date(2026, 10, 31)),
        (datetime.date(2028, 2, 10), datetime.date(2028, 2, 29)),
        (datetime.date(2026, 12, 31), datetime.date(2026, 12, 31)),
    ])
    def test_month(self, today, last):
        assert this_month_range(today) == (today.replace(day=1), last)

    def test_year(self):
        assert this_year_range(TODAY) == (datetime.date(2026, 1, 1), datetime.date(2026, 12, 31))

    def test_walks_in_range_inclusive(self):
        walks = [_make_walk(d) for d in range(5)]
        selected = walks_in_range(walks, TODAY - datetime.timedelta(days=3), TODAY - datetime.timedelta(days=1))
        assert len(selected) == 3


class TestFormatting:
    @pytest.mark.parametrize("seconds, expected", [
        (0, "00:00"),
        (65, "01:05"),
        (3599, "59:59"),
        (3600, "01:00:00"),
        (3725, "01:02:05"),
    ])
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_metric(self):
        assert distance_in_units(2500.0, imperial=False) == (pytest.approx(2.5), "km")

    def test_imperial(self):
        value, unit = distance_in_units(METERS_PER_MILE * 2, imperial=True)
        assert unit == "mi"
        assert value == pytest.approx(2.0)
