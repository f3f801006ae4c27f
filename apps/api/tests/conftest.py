"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from registry.services import UserRequestHandlers
from registry_api.main import app
from registry_api.services import get_request_handlers


@pytest.fixture
def client(handlers: UserRequestHandlers, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Create a FastAPI test client backed by an in-memory user store."""
    monkeypatch.setenv("STORE_BACKEND", "memory")
    app.dependency_overrides[get_request_handlers] = lambda: handlers
    yield TestClient(app)
    app.dependency_overrides.clear()
