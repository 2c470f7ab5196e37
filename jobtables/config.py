"""
Pipeline configuration via environment variables.
"""

from datetime import date
from functools import lru_cache
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

from jobtables.models import DEFAULT_CATEGORY, DEFAULT_COUNTRY


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    # Harmonization defaults
    default_country: str = DEFAULT_COUNTRY
    default_category: str = DEFAULT_CATEGORY

    # Extraction behavior
    require_link: bool = True  # Drop rows with no discoverable link
    dedupe: bool = True  # Drop in-batch duplicates by identity

    # Pin "today" for relative dates (reproducible runs); None => current date
    reference_date: Optional[date] = None

    # Logging
    log_level: str = "INFO"

    @field_validator("reference_date", mode="before")
    @classmethod
    def parse_reference_date(cls, v: Any) -> Any:
        """Treat an empty env value as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> str:
        if not v or not isinstance(v, str):
            return "INFO"
        return v.strip().upper()

    class Config:
        env_prefix = "JOBTABLES_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
