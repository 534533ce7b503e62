"""
Exercise schemas.

An :class:`Exercise` is a single "exercise snack" the user can be reminded
to perform.  ``current_reps`` is the current difficulty target: a rep count
for regular exercises, a hold duration in seconds when ``is_timed`` is set.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExerciseType(str, Enum):
    """Exercise family.  Drives day-type filtering in the selection engine."""
    STRENGTH = "strength"
    MOBILITY = "mobility"
    SECONDARY_DISCIPLINE = "secondary_discipline"


class Exercise(BaseModel):
    """Catalog entry plus the user's progression state for it."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable slug, e.g. 'push_up'")
    name: str = Field(..., description="Human-readable name")
    type: ExerciseType
    is_enabled: bool = True
    current_reps: int = Field(10, description="Current target: reps, or seconds when timed")
    is_timed: bool = False
    last_performed_date: Optional[datetime.datetime] = None
    description: str = ""
    related_stretch: str = Field(default="", description="Stretch cue shown in the reminder body")

    @field_validator("current_reps", mode="before")
    @classmethod
    def _clamp_reps(cls, value: Any) -> Any:
        # Range violations are clamped, never rejected.
        if isinstance(value, int) and value < 1:
            return 1
        return value

    @property
    def unit_label(self) -> str:
        return "sec" if self.is_timed else "reps"

    def performed_on(self, day: datetime.date) -> bool:
        """``True`` if ``last_performed_date`` falls on *day*."""
        return self.last_performed_date is not None and self.last_performed_date.date() == day
