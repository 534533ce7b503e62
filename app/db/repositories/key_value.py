"""
Key-value repository.

Handles database operations for the StoredRecord model.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel import Session, select

from app.models.stored_record import StoredRecord


class KeyValueRepository:
    """Repository for raw JSON documents keyed by collection name."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def get(self, key: str) -> Optional[str]:
        """
        Get the payload stored under *key*.

        Returns:
            JSON text if found, None otherwise
        """
        record = self.session.get(StoredRecord, key)
        return record.payload if record is not None else None

    def set(self, key: str, payload: str) -> StoredRecord:
        """
        Insert or overwrite the payload stored under *key*.

        Returns:
            The stored record
        """
        record = self.session.get(StoredRecord, key)
        if record is None:
            record = StoredRecord(key=key, payload=payload)
        else:
            record.payload = payload
            record.updated_at = datetime.now()
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def delete(self, key: str) -> bool:
        """
        Delete the record stored under *key*.

        Returns:
            True if a record was deleted, False if none existed
        """
        record = self.session.get(StoredRecord, key)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True

    def keys(self) -> list[str]:
        statement = select(StoredRecord.key).order_by(StoredRecord.key)
        return list(self.session.exec(statement).all())

    def clear(self) -> None:
        """Delete every stored record."""
        self.session.execute(delete(StoredRecord))
        self.session.commit()
        self.session.expunge_all()
