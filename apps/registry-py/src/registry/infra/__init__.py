"""Infrastructure layer for external communication."""

from registry.infra.cosmos.cosmos_base import BaseCosmosClient
from registry.infra.cosmos.cosmos_user_client import CosmosUserClient

__all__ = [
    "BaseCosmosClient",
    "CosmosUserClient",
]
