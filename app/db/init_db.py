"""
Database initialization.

Creates the key-value table backing every stored collection.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Initialize database schema.

    Args:
        bind: Engine to create tables on.  Defaults to the configured engine.
    """
    # Import all models so SQLModel.metadata has them
    from app.models.stored_record import StoredRecord  # noqa: F401

    if bind is None:
        from app.db.session import engine as bind

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(bind)
    logger.info("Database initialization complete")


if __name__ == "__main__":
    init_db()
