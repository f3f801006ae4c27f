"""Configuration management for the User Registry API."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from registry.config import RegistryConfig


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the API project directory (apps/api/.env).

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # apps/api/src/registry_api/config.py -> apps/api/
    api_dir = Path(__file__).parent.parent.parent
    return str(api_dir / ".env")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "user-registry"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 8000

    # User store
    store_backend: Literal["cosmos", "memory"] = "cosmos"
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    cosmos_db: str = "registry"
    cosmos_users_container: str = "users"

    # UI
    ui_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def registry_config(self) -> RegistryConfig:
        """Registry core configuration derived from these settings."""
        return RegistryConfig(
            store_backend=self.store_backend,
            azure_cosmosdb_endpoint=self.azure_cosmosdb_endpoint,
            azure_cosmosdb_key=self.azure_cosmosdb_key,
            cosmos_db=self.cosmos_db,
            cosmos_users_container=self.cosmos_users_container,
            log_level=self.log_level,
        )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
