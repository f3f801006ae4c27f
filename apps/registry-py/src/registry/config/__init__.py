"""Configuration package."""

from registry.config.registry_config import RegistryConfig, get_registry_config

__all__ = ["RegistryConfig", "get_registry_config"]
