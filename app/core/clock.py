"""
Clock collaborator.

Every "today" comparison in the engine truncates :meth:`Clock.now` to the
local calendar day.  No timezone offset is assumed beyond that.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod


class Clock(ABC):
    """Source of the current local time."""

    @abstractmethod
    def now(self) -> datetime.datetime:
        ...

    def today(self) -> datetime.date:
        """Calendar-day truncation of :meth:`now`."""
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time of the host, naive local."""

    def now(self) -> datetime.datetime:
        return datetime.datetime.now()


class FixedClock(Clock):
    """A clock frozen at a given instant.  :meth:`advance` moves it forward."""

    def __init__(self, instant: datetime.datetime):
        self._instant = instant

    def now(self) -> datetime.datetime:
        return self._instant

    def set(self, instant: datetime.datetime) -> None:
        self._instant = instant

    def advance(self, **delta: float) -> datetime.datetime:
        self._instant = self._instant + datetime.timedelta(**delta)
        return self._instant
