"""
Configuration settings using Pydantic Settings.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

from folio.models.enums import PageTemplate

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    STORAGE_ROOT: str = "data"

    # None keeps deleted items forever
    TRASH_RETENTION_DAYS: Optional[int] = Field(default=30, ge=0)
    TRASH_SWEEP_INTERVAL_SECONDS: float = Field(default=86400.0, gt=0)

    DURABLE_WRITES: bool = True
    DEFAULT_PAGE_TEMPLATE: PageTemplate = PageTemplate.BLANK

    DEBUG: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    @field_validator("TRASH_RETENTION_DAYS", mode="before")
    @classmethod
    def empty_retention_means_forever(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("", "none", "never", "forever"):
            return None
        return value

    @model_validator(mode="after")
    def resolve_relative_paths(self):
        root = Path(self.STORAGE_ROOT)
        if not root.is_absolute():
            self.STORAGE_ROOT = str((BASE_DIR / root).resolve())

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    :return: Cached Settings instance
    :rtype: Settings
    """
    return Settings()
