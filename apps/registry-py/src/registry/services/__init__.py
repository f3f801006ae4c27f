"""User registry services package."""

from registry.services.request_handlers import HandlerResponse, UserRequestHandlers
from registry.services.user_registry import UserRegistryService
from registry.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore, create_user_store

__all__ = [
    "CosmosUserStore",
    "HandlerResponse",
    "InMemoryUserStore",
    "UserRegistryService",
    "UserRequestHandlers",
    "UserStore",
    "create_user_store",
]
