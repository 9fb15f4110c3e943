"""
Configuration module for environment variables.
"""
from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from MESSLEDGER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MESSLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    db_path: Optional[str] = Field(
        default=None,
        description="SQLite database file; defaults to ~/.messledger/messledger.db",
    )

    # Bearer tokens
    jwt_secret: str = Field(default="CHANGE_THIS_SECRET")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24 * 30)

    # Member list cache
    member_cache_ttl: float = Field(default=60.0, description="Seconds a cached member list stays fresh")

    # Mess rules
    min_meals_per_month: int = Field(
        default=40, description="Minimum number of meals every member pays for each month"
    )
    guest_meal_prices: dict[str, Decimal] = Field(
        default_factory=lambda: {
            "fish": Decimal("40"),
            "egg": Decimal("40"),
            "veg": Decimal("35"),
            "meat": Decimal("50"),
        }
    )

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
