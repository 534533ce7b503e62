"""
User-facing application settings.

Not to be confused with :mod:`app.core.config`, which holds deployment
configuration read from the environment.
"""

from __future__ import annotations

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppSettings(BaseModel):
    """Persisted user preferences."""

    model_config = ConfigDict(frozen=True)

    snacks_per_day: int = Field(6, description="Exercise snacks per day (>= 1)")
    morning_reminder_time: datetime.time = datetime.time(9, 0)
    afternoon_reminder_time: datetime.time = datetime.time(15, 0)
    active_window_start: datetime.time = datetime.time(8, 0)
    active_window_end: datetime.time = datetime.time(20, 0)
    secondary_discipline_enabled: bool = False
    notifications_enabled: bool = True
    has_seen_onboarding: bool = False
    use_imperial_units: bool = False

    @field_validator("snacks_per_day", mode="before")
    @classmethod
    def _clamp_snacks(cls, value: Any) -> Any:
        if isinstance(value, int) and value < 1:
            return 1
        return value

    def is_within_active_window(self, moment: datetime.datetime) -> bool:
        """Whether *moment* falls inside the active window (inclusive)."""
        return self.active_window_start <= moment.time() <= self.active_window_end
