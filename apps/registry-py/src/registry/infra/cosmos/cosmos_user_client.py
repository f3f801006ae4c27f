"""Cosmos DB client for user records."""

import logging

from registry.config.registry_config import RegistryConfig
from registry.infra.cosmos.cosmos_base import BaseCosmosClient
from registry.models.user import UserRecord

logger = logging.getLogger(__name__)


class CosmosUserClient(BaseCosmosClient[UserRecord]):
    """Infrastructure layer: Cosmos DB client for user records."""

    def __init__(self, config: RegistryConfig | None = None, container_name: str | None = None) -> None:
        """Initialize Cosmos user client.

        Args:
            config: Registry configuration. If None, will load from environment.
            container_name: Container name. If None, uses config.cosmos_users_container.
        """
        if config is None:
            from registry.config.registry_config import get_registry_config

            config = get_registry_config()

        super().__init__(
            container_name=container_name or config.cosmos_users_container,
            partition_key_path="/id",
            config=config,
        )

    def _get_partition_key(self, user_id: str) -> str:
        """Users are partitioned by their own id."""
        return user_id
