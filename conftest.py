"""Shared pytest fixtures for the user registry."""

from datetime import UTC, datetime, timedelta

import pytest
from registry.services import InMemoryUserStore, UserRegistryService, UserRequestHandlers


class FakeClock:
    """Controllable clock shared by the store and the registry service."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def store(clock: FakeClock) -> InMemoryUserStore:
    return InMemoryUserStore(clock=clock)


@pytest.fixture
def registry(store: InMemoryUserStore, clock: FakeClock) -> UserRegistryService:
    return UserRegistryService(store, clock=clock)


@pytest.fixture
def handlers(registry: UserRegistryService) -> UserRequestHandlers:
    return UserRequestHandlers(registry)
