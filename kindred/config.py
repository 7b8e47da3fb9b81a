"""Configuration for Kindred, loaded from the environment and `.env`."""
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Every field can be set with a ``KINDRED_`` prefixed environment variable.
    The database URL additionally honours a plain ``DATABASE_URL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="KINDRED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Shared secret required by every delete endpoint
    delete_pin: str = Field(..., min_length=1)

    database_url: str = Field(
        default="sqlite:///./kindred.db",
        validation_alias=AliasChoices("KINDRED_DATABASE_URL", "DATABASE_URL"),
    )

    host: str = "127.0.0.1"
    port: int = 8000

    log_level: str = "INFO"
    log_file: Optional[str] = None

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
