"""Shared fixtures: an in-memory database per test and a frozen clock."""

import datetime

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.core.clock import FixedClock
from app.db.init_db import init_db
from app.services.reminders import LoggingReminderDispatcher
from app.services.storage_service import StorageService

# Monday, a sport day under the default policy.
START = datetime.datetime(2026, 10, 19, 7, 0)


@pytest.fixture
def session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()


@pytest.fixture
def storage(session) -> StorageService:
    return StorageService(session)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(START)


@pytest.fixture
def reminders() -> LoggingReminderDispatcher:
    return LoggingReminderDispatcher()
