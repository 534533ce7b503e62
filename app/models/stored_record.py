"""
Stored record database model.

Every persisted collection (exercises, settings, today's schedule, sprint
sessions, daily walks, history) lives in one row as a JSON document keyed
by collection name.
"""

from datetime import datetime

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class StoredRecord(SQLModel, table=True):
    """One JSON document per storage key."""
    __tablename__ = "stored_records"

    key: str = Field(primary_key=True, max_length=64)
    payload: str = Field(sa_column=Column(Text, nullable=False))

    updated_at: datetime = Field(default_factory=datetime.now)
