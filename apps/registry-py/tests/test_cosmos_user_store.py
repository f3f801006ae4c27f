"""Tests for the Cosmos DB user store against a mocked container."""

from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from registry.config import RegistryConfig
from registry.infra.cosmos import CosmosUserClient
from registry.services import CosmosUserStore, InMemoryUserStore, create_user_store

CREATED_AT = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def config() -> RegistryConfig:
    return RegistryConfig(
        store_backend="cosmos",
        azure_cosmosdb_endpoint="https://registry.documents.azure.com:443/",
        azure_cosmosdb_key="secret",
        cosmos_db="registry",
        cosmos_users_container="users",
    )


@pytest.fixture
def cosmos_client_cls():
    with patch("registry.infra.cosmos.cosmos_base.CosmosClient") as cls:
        yield cls


@pytest.fixture
def container(cosmos_client_cls) -> MagicMock:
    database = cosmos_client_cls.return_value.create_database_if_not_exists.return_value
    return database.get_container_client.return_value


@pytest.fixture
def cosmos_store(config, cosmos_client_cls) -> CosmosUserStore:
    return CosmosUserStore(client=CosmosUserClient(config=config), clock=lambda: CREATED_AT)


@pytest.mark.unit
def test_client_requires_endpoint() -> None:
    with pytest.raises(ValueError, match="AZURE_COSMOSDB_ENDPOINT is required"):
        CosmosUserClient(config=RegistryConfig(azure_cosmosdb_endpoint=None))


@pytest.mark.unit
def test_client_connects_with_key(config, cosmos_client_cls, container) -> None:
    client = CosmosUserClient(config=config)

    cosmos_client_cls.assert_called_once_with(url=config.azure_cosmosdb_endpoint, credential="secret")
    cosmos_client_cls.return_value.create_database_if_not_exists.assert_called_once_with(id="registry")
    assert client.container is container
    assert client.partition_key_path == "/id"


@pytest.mark.unit
def test_missing_container_is_created(config, cosmos_client_cls) -> None:
    database = cosmos_client_cls.return_value.create_database_if_not_exists.return_value
    database.get_container_client.return_value.read.side_effect = CosmosResourceNotFoundError(message="missing")

    CosmosUserClient(config=config)

    database.create_container.assert_called_once()
    assert database.create_container.call_args.kwargs["id"] == "users"


@pytest.mark.unit
def test_add_user_writes_server_side_timestamp(cosmos_store, container) -> None:
    container.create_item.side_effect = lambda body: {**body, "_rid": "x", "_etag": "y", "_ts": 1}

    user = cosmos_store.add_user("Alice", "alice@example.com")

    body = container.create_item.call_args.kwargs["body"]
    assert body["name"] == "Alice"
    assert body["email"] == "alice@example.com"
    assert body["createdAt"] == "2025-01-01T12:00:00Z"
    assert body["id"] == user.id
    assert user.created_at == CREATED_AT


@pytest.mark.unit
def test_find_by_name_uses_parameterized_exact_match(cosmos_store, container) -> None:
    container.query_items.return_value = iter(
        [
            {"id": "1", "name": "Alice", "email": "a@example.com", "createdAt": "2025-01-01T12:00:00Z", "_ts": 1},
            {"id": "2", "name": "Alice", "email": "b@example.com", "createdAt": "2025-01-01T12:01:00Z", "_ts": 2},
        ]
    )

    users = cosmos_store.find_by_name("Alice")

    container.query_items.assert_called_once_with(
        query="SELECT * FROM c WHERE c.name = @name",
        parameters=[{"name": "@name", "value": "Alice"}],
        enable_cross_partition_query=True,
    )
    assert [u.id for u in users] == ["1", "2"]


@pytest.mark.unit
def test_find_first_by_name_returns_none_when_empty(cosmos_store, container) -> None:
    container.query_items.return_value = iter([])

    assert cosmos_store.find_first_by_name("Nobody") is None


@pytest.mark.unit
def test_update_email_patches_single_field(cosmos_store, container) -> None:
    container.patch_item.return_value = {"id": "1"}

    cosmos_store.update_email("1", "new@example.com")

    container.patch_item.assert_called_once_with(
        item="1",
        partition_key="1",
        patch_operations=[{"op": "set", "path": "/email", "value": "new@example.com"}],
    )


@pytest.mark.unit
def test_update_email_of_missing_user_raises(cosmos_store, container) -> None:
    container.patch_item.side_effect = CosmosResourceNotFoundError(message="gone")

    with pytest.raises(CosmosResourceNotFoundError):
        cosmos_store.update_email("1", "new@example.com")


@pytest.mark.unit
def test_delete_user(cosmos_store, container) -> None:
    cosmos_store.delete_user("1")

    container.delete_item.assert_called_once_with(item="1", partition_key="1")


@pytest.mark.unit
def test_delete_of_missing_user_is_ignored(cosmos_store, container) -> None:
    container.delete_item.side_effect = CosmosResourceNotFoundError(message="gone")

    cosmos_store.delete_user("1")


@pytest.mark.unit
def test_create_user_store_selects_backend(config, cosmos_client_cls) -> None:
    assert isinstance(create_user_store(config.model_copy(update={"store_backend": "memory"})), InMemoryUserStore)
    assert isinstance(create_user_store(config), CosmosUserStore)
