"""
Database session management.

Provides SQLModel engine and session creation.
"""

from typing import Generator

from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from app.core.config import settings


def make_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for *url*.

    SQLite connections are shared across threads, so the same-thread check
    is turned off for them.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


# Create database engine
engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG)  # Log SQL queries in debug mode


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session bound to the configured engine.

    Example:
        with contextlib.contextmanager(get_db)() as session:
            storage = StorageService(session)
    """
    with Session(engine) as session:
        yield session
