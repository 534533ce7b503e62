"""
Application factory.

Wires the storage, reminder and clock collaborators into the services and
runs the start-of-day checks.
"""

import random
from dataclasses import dataclass
from typing import Optional

from loguru import logger
from sqlmodel import Session

from app.core.clock import Clock, SystemClock
from app.core.config import settings
from app.core.logger import setup_logger
from app.primal.selection import SportDayPolicy, alternating_weekday_policy
from app.services.exercise_service import ExerciseService
from app.services.reminders import LoggingReminderDispatcher, ReminderDispatcher
from app.services.schedule_service import ScheduleService
from app.services.settings_service import SettingsService
from app.services.sprint_service import SprintService
from app.services.storage_service import StorageService
from app.services.walk_service import WalkService


@dataclass
class PrimalPal:
    """The assembled application."""

    storage: StorageService
    reminders: ReminderDispatcher
    clock: Clock
    settings: SettingsService
    exercises: ExerciseService
    schedule: ScheduleService
    sprints: SprintService
    walks: WalkService

    def startup(self) -> None:
        """Start-of-day checks: seed exercises, build today's schedule, extend the sprint calendar."""
        self.exercises.initialize()
        self.schedule.ensure_today_scheduled()
        self.sprints.ensure_scheduled()
        logger.info(f"{settings.PROJECT_NAME} ready for {self.clock.today()}")


def build_app(
    session: Session,
    clock: Optional[Clock] = None,
    reminders: Optional[ReminderDispatcher] = None,
    rng: Optional[random.Random] = None,
    is_sport_day: SportDayPolicy = alternating_weekday_policy,
) -> PrimalPal:
    """
    Create the application around a database session.

    Args:
        session: SQLModel session backing the storage service
        clock: Defaults to the system clock
        reminders: Defaults to the in-process logging dispatcher
        rng: Optional random source shared by every service
        is_sport_day: Day-type policy for exercise selection
    """
    clock = clock or SystemClock()
    reminders = reminders or LoggingReminderDispatcher()
    storage = StorageService(session)
    exercises = ExerciseService(storage, clock, rng=rng, is_sport_day=is_sport_day)

    return PrimalPal(
        storage=storage,
        reminders=reminders,
        clock=clock,
        settings=SettingsService(storage),
        exercises=exercises,
        schedule=ScheduleService(storage, exercises, reminders, clock, rng=rng, is_sport_day=is_sport_day),
        sprints=SprintService(storage, reminders, clock, rng=rng),
        walks=WalkService(storage, clock),
    )


def main() -> None:
    from app.db.init_db import init_db
    from app.db.session import engine

    setup_logger(settings)
    init_db(engine)
    with Session(engine) as session:
        build_app(session).startup()


if __name__ == "__main__":
    main()
