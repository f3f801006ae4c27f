"""Cosmos DB initialization service."""

import logging

from azure.cosmos import CosmosClient, PartitionKey
from registry_api.config import Settings

logger = logging.getLogger(__name__)


class CosmosDbInitializer:
    """Create the registry database and users container if they don't exist."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: CosmosClient | None = None
        self.database = None

    def connect(self) -> None:
        """Create connection to Cosmos DB."""
        if not self.settings.azure_cosmosdb_endpoint or not self.settings.azure_cosmosdb_key:
            logger.warning("Cosmos DB credentials not configured. Skipping initialization.")
            return

        self.client = CosmosClient(
            url=self.settings.azure_cosmosdb_endpoint,
            credential=self.settings.azure_cosmosdb_key,
        )
        logger.info("Connected to Cosmos DB at %s", self.settings.azure_cosmosdb_endpoint)

    def initialize_database(self) -> None:
        """Create database if it doesn't exist."""
        if not self.client:
            return
        self.database = self.client.create_database_if_not_exists(id=self.settings.cosmos_db)
        logger.info("Database '%s' initialized", self.settings.cosmos_db)

    def initialize_users_container(self) -> None:
        """Create the users container, partitioned by user id."""
        if not self.database:
            return

        # Emulator requires provisioned throughput
        is_emulator = "localhost" in (self.settings.azure_cosmosdb_endpoint or "").lower()
        options = {"offer_throughput": 400} if is_emulator else {}

        self.database.create_container_if_not_exists(
            id=self.settings.cosmos_users_container,
            partition_key=PartitionKey(path="/id"),
            **options,
        )
        logger.info("Container '%s' initialized with partition key '/id'", self.settings.cosmos_users_container)

    def initialize(self) -> None:
        """Run full initialization: connect, create database and container."""
        self.connect()
        self.initialize_database()
        self.initialize_users_container()


async def initialize_cosmos_db(settings: Settings) -> None:
    """Initialize Cosmos DB during application startup.

    Args:
        settings: Application settings
    """
    if settings.store_backend != "cosmos":
        logger.info("Store backend is '%s'; skipping Cosmos DB initialization", settings.store_backend)
        return

    try:
        CosmosDbInitializer(settings).initialize()
    except Exception as e:
        logger.error("Failed to initialize Cosmos DB: %s", e)
        if settings.environment == "production":
            raise
        logger.warning("Continuing without Cosmos DB initialization (development mode)")
