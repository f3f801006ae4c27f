"""Configuration management for the user registry core."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the registry-py project directory (apps/registry-py/.env).

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # apps/registry-py/src/registry/config/registry_config.py -> apps/registry-py/
    registry_py_dir = Path(__file__).parent.parent.parent.parent
    return str(registry_py_dir / ".env")


class RegistryConfig(BaseSettings):
    """User registry settings from environment variables."""

    # Store selection
    store_backend: Literal["cosmos", "memory"] = "cosmos"

    # Cosmos DB
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    cosmos_db: str = "registry"
    cosmos_users_container: str = "users"

    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_registry_config() -> RegistryConfig:
    """Get user registry configuration.

    Returns:
        RegistryConfig instance
    """
    return RegistryConfig()
