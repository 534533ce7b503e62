"""SQLModel database models."""

from app.models.stored_record import StoredRecord

__all__ = [
    "StoredRecord",
]
