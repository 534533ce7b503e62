"""
Settings service.

Loads the user's preferences, falling back to defaults until the first save.
"""

from typing import Any

from loguru import logger

from app.schemas.app_settings import AppSettings
from app.services.storage_service import StorageKey, StorageService


class SettingsService:
    """Service for user preferences."""

    def __init__(self, storage: StorageService):
        self.storage = storage

    def load(self) -> AppSettings:
        """Stored settings, or defaults when nothing is stored yet."""
        return self.storage.load_settings() or AppSettings()

    def save(self, settings: AppSettings) -> AppSettings:
        self.storage.save_settings(settings)
        return settings

    def update(self, **changes: Any) -> AppSettings:
        """
        Apply field changes and persist the result.

        Values are validated, so out-of-range counts are clamped the same way
        as on load.

        Raises:
            pydantic.ValidationError: If a value has the wrong type
        """
        with self.storage.locked(StorageKey.SETTINGS):
            current = self.load()
            updated = AppSettings.model_validate({**current.model_dump(), **changes})
            logger.info(f"Settings updated: {sorted(changes)}")
            return self.save(updated)

    def complete_onboarding(self) -> AppSettings:
        return self.update(has_seen_onboarding=True)
