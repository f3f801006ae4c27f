"""Service initialization and dependency injection."""

import logging

from fastapi import Depends
from registry.services import UserRegistryService, UserRequestHandlers, UserStore, create_user_store
from registry_api.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Service instances cache
_services_cache = {}


def get_request_handlers(settings: Settings = Depends(get_settings)) -> UserRequestHandlers:
    """Get user registry request handlers.

    The user store is built by the first request that needs it, inside the
    handlers' error mapping. A store that cannot be reached is reported as a
    500 JSON error while method and input checks still answer normally.

    Args:
        settings: Application settings

    Returns:
        UserRequestHandlers instance
    """
    if "request_handlers" not in _services_cache:

        def build_store() -> UserStore:
            store = create_user_store(settings.registry_config())
            logger.info("Initialized %s user store", settings.store_backend)
            return store

        _services_cache["request_handlers"] = UserRequestHandlers(UserRegistryService(store_factory=build_store))
    return _services_cache["request_handlers"]
