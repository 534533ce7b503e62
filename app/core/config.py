"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Primal Pal: exercise snacks, walks and sprints."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["Primal Pal maintainers"]

    DEBUG: bool = False

    # Storage (single key-value table, one JSON document per key)
    DATABASE_URL: str = "sqlite:///./primal_pal.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
