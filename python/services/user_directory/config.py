"""Configuration for the User Directory service."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings read from ``USER_DIRECTORY_*`` environment variables."""

    app_name: str = "user-directory"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    model_config = SettingsConfigDict(
        env_prefix="USER_DIRECTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"production", "prod"}


def get_settings() -> Settings:
    return Settings()
