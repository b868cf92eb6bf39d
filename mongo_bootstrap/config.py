"""
Bootstrap configuration loaded from environment variables.
"""
import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mongo_bootstrap.database.databases import admin_db, test_db
from mongo_bootstrap.models.credential import (
    BootstrapConfig,
    BootstrapStrategy,
    Credential,
)


class Settings(BaseSettings):
    """Bootstrap settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_server_selection_timeout_ms: int = Field(default=5000, gt=0)

    # Root identity, set by the official mongo image's environment
    mongo_initdb_root_username: Optional[str] = None
    mongo_initdb_root_password: Optional[SecretStr] = None

    # Bootstrap behaviour
    bootstrap_strategy: BootstrapStrategy = BootstrapStrategy.ENV
    bootstrap_fallback_enabled: bool = False
    bootstrap_admin_username: str = admin_db.DEFAULT_ADMIN_USERNAME
    bootstrap_admin_password: SecretStr = SecretStr(admin_db.DEFAULT_ADMIN_PASSWORD)
    bootstrap_sample_db: str = test_db.DB_NAME
    bootstrap_sample_collection: str = test_db.Collections.INIT
    bootstrap_profiling_level: int = Field(default=test_db.PROFILING_LEVEL, ge=0, le=2)

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to an upper-case standard logging level name."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_bootstrap_config(settings: Settings) -> BootstrapConfig:
    """Build the run configuration from settings."""
    return BootstrapConfig(
        strategy=settings.bootstrap_strategy,
        root_username=settings.mongo_initdb_root_username,
        root_password=settings.mongo_initdb_root_password,
        admin=Credential(
            username=settings.bootstrap_admin_username,
            password=settings.bootstrap_admin_password,
        ),
        fallback_enabled=settings.bootstrap_fallback_enabled,
        sample_db=settings.bootstrap_sample_db,
        sample_collection=settings.bootstrap_sample_collection,
        profiling_level=settings.bootstrap_profiling_level,
    )
