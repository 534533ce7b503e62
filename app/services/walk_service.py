"""
Walk service.

Accumulates timed walks into one record per day and reports statistics
over the week, month, year or the whole log.
"""

import datetime
from typing import Optional

from loguru import logger

from app.core.clock import Clock
from app.primal.walks import (
    add_seconds_to_todays_walk,
    log_todays_walk,
    statistics_for_range,
    this_month_range,
    this_week_range,
    this_year_range,
    todays_walk,
    walks_in_range,
)
from app.schemas.walk import DailyWalk, WalkStatistics
from app.services.storage_service import StorageKey, StorageService


class WalkService:
    """Service for daily walks."""

    def __init__(self, storage: StorageService, clock: Clock):
        self.storage = storage
        self.clock = clock

    def walks(self) -> list[DailyWalk]:
        return self.storage.load_daily_walks()

    def today(self) -> Optional[DailyWalk]:
        return todays_walk(self.walks(), self.clock.today())

    def add_walk(self, seconds: int, distance_meters: float = 0.0) -> DailyWalk:
        """Add a finished walk to today's total."""
        with self.storage.locked(StorageKey.DAILY_WALKS):
            walks, record = add_seconds_to_todays_walk(self.walks(), self.clock.today(), seconds, distance_meters)
            self.storage.save_daily_walks(walks)
        logger.info(f"Walk logged: +{seconds}s, today {record.total_seconds}s")
        return record

    def log_today(self, total_seconds: int = 0, distance_meters: float = 0.0,
                  notes: Optional[str] = None) -> list[DailyWalk]:
        """Overwrite today's totals."""
        with self.storage.locked(StorageKey.DAILY_WALKS):
            walks = log_todays_walk(self.walks(), self.clock.today(), total_seconds, distance_meters, notes)
            self.storage.save_daily_walks(walks)
            return walks

    # ======================================================================
    # Statistics
    # ======================================================================

    def in_range(self, start: datetime.date, end: datetime.date) -> list[DailyWalk]:
        return walks_in_range(self.walks(), start, end)

    def statistics(self, start: datetime.date, end: datetime.date) -> WalkStatistics:
        return statistics_for_range(self.walks(), self.clock.today(), start, end)

    def this_week(self) -> WalkStatistics:
        return self.statistics(*this_week_range(self.clock.today()))

    def this_month(self) -> WalkStatistics:
        return self.statistics(*this_month_range(self.clock.today()))

    def this_year(self) -> WalkStatistics:
        return self.statistics(*this_year_range(self.clock.today()))

    def all_time(self) -> WalkStatistics:
        return WalkStatistics.from_walks(self.walks(), self.clock.today())
