"""User store with Cosmos DB and in-memory implementations."""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime

from registry.config.registry_config import RegistryConfig
from registry.infra.cosmos.cosmos_user_client import CosmosUserClient
from registry.models.user import UserRecord

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class UserStore(ABC):
    """Abstract interface for the user document store."""

    @abstractmethod
    def add_user(self, name: str, email: str) -> UserRecord:
        """Insert a user, stamping ``createdAt`` and assigning an id at write time."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> list[UserRecord]:
        """Find users whose name equals ``name`` exactly.

        Args:
            name: Name to match (case-sensitive, no normalization)

        Returns:
            All matching users in store-defined order
        """
        pass

    def find_first_by_name(self, name: str) -> UserRecord | None:
        """Return the first user in query order with this name, if any.

        Several users may share a name; callers acting on a single user
        get whichever one the store lists first.
        """
        users = self.find_by_name(name)
        return users[0] if users else None

    @abstractmethod
    def update_email(self, user_id: str, email: str) -> None:
        """Overwrite the email of one user."""
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> None:
        """Delete one user."""
        pass


class CosmosUserStore(UserStore):
    """Cosmos DB implementation of UserStore."""

    NAME_QUERY = "SELECT * FROM c WHERE c.name = @name"

    def __init__(self, client: CosmosUserClient | None = None, clock: Callable[[], datetime] = utc_now) -> None:
        """Initialize Cosmos DB user store.

        Args:
            client: Cosmos user client. If None, creates a new one from the environment.
            clock: Source of creation timestamps
        """
        self.client = client or CosmosUserClient()
        self._clock = clock

    def add_user(self, name: str, email: str) -> UserRecord:
        record = UserRecord(id=str(uuid.uuid4()), name=name, email=email, created_at=self._clock())
        created = self.client.create_item(item=record, partition_key=self.client._get_partition_key(record.id))
        logger.info("Created user %s", record.id)
        return UserRecord.model_validate(created)

    def find_by_name(self, name: str) -> list[UserRecord]:
        items = self.client.query_items(
            query=self.NAME_QUERY,
            parameters=[{"name": "@name", "value": name}],
        )
        return [UserRecord.model_validate(item) for item in items]

    def update_email(self, user_id: str, email: str) -> None:
        self.client.patch_item(
            item_id=user_id,
            partition_key=self.client._get_partition_key(user_id),
            operations=[{"op": "set", "path": "/email", "value": email}],
        )
        logger.info("Updated email of user %s", user_id)

    def delete_user(self, user_id: str) -> None:
        self.client.delete_item(item_id=user_id, partition_key=self.client._get_partition_key(user_id))
        logger.info("Deleted user %s", user_id)


class InMemoryUserStore(UserStore):
    """In-memory user store for local development and tests.

    Query order is insertion order. Safe to share between the worker
    threads of one host process.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._users: dict[str, UserRecord] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def add_user(self, name: str, email: str) -> UserRecord:
        record = UserRecord(id=str(uuid.uuid4()), name=name, email=email, created_at=self._clock())
        with self._lock:
            self._users[record.id] = record
        return record.model_copy()

    def find_by_name(self, name: str) -> list[UserRecord]:
        with self._lock:
            return [user.model_copy() for user in self._users.values() if user.name == name]

    def update_email(self, user_id: str, email: str) -> None:
        with self._lock:
            if user_id not in self._users:
                raise LookupError(f"User {user_id} does not exist")
            self._users[user_id] = self._users[user_id].model_copy(update={"email": email})

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            self._users.pop(user_id, None)


def create_user_store(config: RegistryConfig) -> UserStore:
    """Build the user store selected by ``config.store_backend``.

    Args:
        config: Registry configuration

    Returns:
        UserStore instance
    """
    if config.store_backend == "memory":
        logger.warning("Using in-memory user store; users are lost on restart")
        return InMemoryUserStore()
    return CosmosUserStore(client=CosmosUserClient(config=config))
