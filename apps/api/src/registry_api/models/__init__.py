"""API response models."""

from registry_api.models.health import HealthCheckResponse

__all__ = ["HealthCheckResponse"]
