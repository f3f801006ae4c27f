"""Generic base class for Cosmos DB client operations."""

import logging
from typing import Any

from azure.cosmos import CosmosClient, PartitionKey
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential
from pydantic import BaseModel

from registry.config.registry_config import RegistryConfig

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


class BaseCosmosClient[T: BaseModel]:
    """Infrastructure layer: Generic base class for Cosmos DB client operations."""

    @staticmethod
    def _strip_system_fields(item: dict[str, Any]) -> dict[str, Any]:
        """Drop Cosmos DB system fields that aren't part of any model."""
        return {k: v for k, v in item.items() if k not in COSMOS_SYSTEM_FIELDS}

    def __init__(
        self,
        container_name: str,
        partition_key_path: str = "/id",
        config: RegistryConfig | None = None,
        database_name: str | None = None,
    ) -> None:
        """Initialize Cosmos DB client.

        Args:
            container_name: Container name
            partition_key_path: Partition key path (default: "/id")
            config: Registry configuration. If None, will load from environment.
            database_name: Database name. If None, uses config.cosmos_db.
        """
        if config is None:
            from registry.config.registry_config import get_registry_config

            config = get_registry_config()

        self.config = config
        self.container_name = container_name
        self.partition_key_path = partition_key_path

        if not config.azure_cosmosdb_endpoint:
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

        if config.azure_cosmosdb_key:
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=config.azure_cosmosdb_key)
        else:
            # Managed identity
            credential = DefaultAzureCredential()
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=credential)

        db_name = database_name or config.cosmos_db
        self.database = self.client.create_database_if_not_exists(id=db_name)

        self._ensure_container_exists(container_name, partition_key_path)

        self.container = self.database.get_container_client(container_name)

    def _ensure_container_exists(self, container_name: str, partition_key_path: str) -> None:
        """Ensure container exists, create if it doesn't.

        Args:
            container_name: Container name
            partition_key_path: Partition key path
        """
        try:
            self.database.get_container_client(container_name).read()
            logger.debug("Container '%s' already exists", container_name)
        except CosmosResourceNotFoundError:
            try:
                # The emulator requires provisioned throughput
                is_emulator = "localhost" in (self.config.azure_cosmosdb_endpoint or "").lower()
                pk = PartitionKey(path=partition_key_path)

                if is_emulator:
                    self.database.create_container(id=container_name, partition_key=pk, offer_throughput=400)
                else:
                    self.database.create_container(id=container_name, partition_key=pk)

                logger.info(
                    "Created container '%s' with partition key '%s'",
                    container_name,
                    partition_key_path,
                )
            except Exception as e:
                logger.warning(
                    "Failed to create container '%s': %s. It may already exist or you may not have permissions.",
                    container_name,
                    e,
                )

    def create_item(self, item: T, partition_key: str) -> dict:
        """Create an item in Cosmos DB.

        Args:
            item: Pydantic model instance to create
            partition_key: Partition key value

        Returns:
            Created item as dictionary (with Cosmos system fields removed)
        """
        try:
            item_dict = item.model_dump(mode="json", by_alias=True)
            created = self.container.create_item(body=item_dict)
            logger.info("Created item %s in container %s", created["id"], self.container_name)
            return self._strip_system_fields(created)
        except Exception as e:
            logger.error("Failed to create item in %s (partition %s): %s", self.container_name, partition_key, e)
            raise

    def query_items(self, query: str, parameters: list[dict[str, Any]] | None = None) -> list[dict]:
        """Run a cross-partition query.

        Args:
            query: SQL query string
            parameters: Query parameters as ``{"name": "@x", "value": ...}`` dicts

        Returns:
            List of items as dictionaries, in the order Cosmos DB returns them
        """
        try:
            items = list(
                self.container.query_items(
                    query=query,
                    parameters=parameters or [],
                    enable_cross_partition_query=True,
                )
            )
            logger.debug("Queried %d items from container %s", len(items), self.container_name)
            return [self._strip_system_fields(item) for item in items]
        except Exception as e:
            logger.error("Failed to query items from %s: %s", self.container_name, e)
            raise

    def patch_item(self, item_id: str, partition_key: str, operations: list[dict[str, Any]]) -> dict:
        """Apply patch operations to a single item.

        Args:
            item_id: Item ID
            partition_key: Partition key value
            operations: Cosmos DB patch operations

        Returns:
            Patched item as dictionary (with Cosmos system fields removed)
        """
        try:
            patched = self.container.patch_item(
                item=item_id,
                partition_key=partition_key,
                patch_operations=operations,
            )
            logger.info("Patched item %s in container %s", item_id, self.container_name)
            return self._strip_system_fields(patched)
        except CosmosResourceNotFoundError:
            logger.error("Item %s not found for patch in %s", item_id, self.container_name)
            raise
        except Exception as e:
            logger.error("Failed to patch item %s in %s: %s", item_id, self.container_name, e)
            raise

    def delete_item(self, item_id: str, partition_key: str) -> None:
        """Delete an item from Cosmos DB.

        Args:
            item_id: Item ID
            partition_key: Partition key value
        """
        try:
            self.container.delete_item(item=item_id, partition_key=partition_key)
            logger.info("Deleted item %s from container %s", item_id, self.container_name)
        except CosmosResourceNotFoundError:
            logger.warning("Item %s not found for deletion in %s", item_id, self.container_name)
        except Exception as e:
            logger.error("Failed to delete item %s from %s: %s", item_id, self.container_name, e)
            raise
