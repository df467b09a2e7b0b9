"""
Application configuration management using Pydantic Settings.

Settings are read from the environment (and an optional ``.env`` file) once at
startup. Required values have no default, so a missing or malformed value
raises before the application serves a single request.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Application
    PROJECT_NAME: str = "Accounts API"
    VERSION: str = "0.1.0"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # Required process configuration
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_MAXAGE: int = Field(gt=0)  # minutes
    PORT: int = Field(ge=1, le=65535)

    JWT_ALGORITHM: str = "HS256"

    # Status returned when an authenticated user fails a role gate
    PERMISSION_DENIED_STATUS: Literal[401, 403] = 403

    @field_validator("DATABASE_URL", "JWT_SECRET", mode="after")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Treat an empty string the same as a missing value."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def JWT_MAXAGE_SECONDS(self) -> int:
        return self.JWT_MAXAGE * 60


def load_settings() -> Settings:
    """
    Build the settings object from the environment.

    Raises:
        pydantic.ValidationError: If a required value is absent or fails to
            parse as its declared type.
    """
    return Settings()  # type: ignore[call-arg]
