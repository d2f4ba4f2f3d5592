"""Application configuration."""

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings from CONNECT_DB_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONNECT_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Secrets Settings
    SECRETS_DIR: Path = Path(".vault/secrets")  # Relative to the current working directory

    # Client Settings
    PSQL_BINARY: str = "psql"  # Resolved via PATH at exec time

    @field_validator("PSQL_BINARY", mode="after")
    @classmethod
    def validate_psql_binary(cls, v: str) -> str:
        """Reject blank client binary names."""
        if not v.strip():
            msg = "PSQL_BINARY cannot be empty"
            raise ValueError(msg)
        return v.strip()

    # Logging Settings
    LOG_LEVEL: str = "WARNING"

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        normalized = v.upper()
        valid_levels = logging.getLevelNamesMapping()
        if normalized not in valid_levels:
            msg = f"Invalid LOG_LEVEL '{v}'. Must be one of: {', '.join(sorted(valid_levels.keys()))}"
            raise ValueError(msg)
        return normalized


settings = Settings()
