"""Pytest fixtures for the Azure Functions app."""

from collections.abc import Iterator

import function_app
import pytest
from registry.services import UserRequestHandlers


@pytest.fixture(autouse=True)
def in_memory_handlers(handlers: UserRequestHandlers) -> Iterator[UserRequestHandlers]:
    """Point every function at the in-memory registry."""
    function_app._services_cache["handlers"] = handlers
    yield handlers
    function_app._services_cache.clear()
