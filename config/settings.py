"""
Configuration management for the task proxy using Pydantic.
Handles environment variable validation and default values.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation and defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase Configuration
    # Optional at load time so the health endpoint works without secrets;
    # the store refuses to build a client while either is missing.
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None

    # Table Configuration
    tasks_table: str = "Tasks"
    categories_table: str = "Categories"

    # Application Configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None
    environment: str = "development"

    # Health Check Configuration
    health_check_interval_seconds: int = Field(default=30, ge=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment is development, staging, or production."""
        valid_envs = ["development", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        if v:
            return v.rstrip("/")
        return v

    @property
    def has_store_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


@lru_cache
def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


def is_production() -> bool:
    """Check if running in production environment."""
    return get_settings().environment == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return get_settings().environment == "development"
