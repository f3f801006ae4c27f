"""Service layer: user registration, lookup, email update and time-gated delete."""

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta

from registry.errors import (
    DeleteGracePeriodError,
    RegistryError,
    StoreFailureError,
    UserNotFoundError,
    UserValidationError,
)
from registry.models.user import UserRecord
from registry.services.user_store import UserStore, utc_now
from registry.validation import is_valid_email, is_valid_name

logger = logging.getLogger(__name__)

DELETE_GRACE_PERIOD = timedelta(seconds=60)

MISSING_NAME_OR_EMAIL = "Both name and email are required."
MISSING_NAME_OR_NEW_EMAIL = "Both name and newEmail are required."
INVALID_NAME = "Name must not contain Korean (Hangul) characters."
INVALID_EMAIL = "Invalid email format."


class UserRegistryService:
    """Service layer: business rules for the user registry.

    Operations raise ``RegistryError`` subclasses. Any other exception coming
    out of the store, including a failure to build it, is re-raised as
    ``StoreFailureError`` carrying the original message.
    """

    def __init__(
        self,
        store: UserStore | None = None,
        clock: Callable[[], datetime] = utc_now,
        grace_period: timedelta = DELETE_GRACE_PERIOD,
        store_factory: Callable[[], UserStore] | None = None,
    ) -> None:
        """Initialize the registry service.

        Args:
            store: User store the service reads and writes
            clock: Source of the current time for the delete grace period
            grace_period: Minimum age a user must reach before it can be deleted
            store_factory: Builds the store on first use when ``store`` is not given.
                A failed build is retried on the next call.
        """
        if store is None and store_factory is None:
            raise ValueError("Either store or store_factory is required")
        self._store = store
        self._store_factory = store_factory
        self._store_lock = threading.Lock()
        self._clock = clock
        self.grace_period = grace_period

    @property
    def store(self) -> UserStore:
        """The user store, built on first access if a factory was given."""
        if self._store is None:
            with self._store_lock:
                if self._store is None:
                    self._store = self._store_factory()
        return self._store

    @contextmanager
    def _store_call(self, operation: str) -> Iterator[None]:
        try:
            yield
        except RegistryError:
            raise
        except Exception as e:
            logger.error("Store failure during %s: %s", operation, e, exc_info=True)
            raise StoreFailureError(str(e)) from e

    def create_user(self, name: str | None, email: str | None) -> UserRecord:
        """Register a new user.

        Duplicate names are allowed; no lookup happens before the insert.

        Raises:
            UserValidationError: a field is missing or malformed
            StoreFailureError: the store rejected the insert
        """
        if not name or not email:
            raise UserValidationError(MISSING_NAME_OR_EMAIL)
        if not is_valid_name(name):
            raise UserValidationError(INVALID_NAME)
        if not is_valid_email(email):
            raise UserValidationError(INVALID_EMAIL)

        with self._store_call("create_user"):
            user = self.store.add_user(name, email)
        logger.info("Registered user %s", user.id)
        return user

    def get_users_by_name(self, name: str) -> list[UserRecord]:
        """Return every user whose name matches exactly.

        Raises:
            UserNotFoundError: nobody has this name
            StoreFailureError: the query failed
        """
        with self._store_call("get_users_by_name"):
            users = self.store.find_by_name(name)
        if not users:
            raise UserNotFoundError()
        return users

    def update_email(self, name: str | None, new_email: str | None) -> UserRecord:
        """Change the email of the first user with this name.

        Other users sharing the name are left unchanged.

        Returns:
            The user as it was before the update
        """
        if not name or not new_email:
            raise UserValidationError(MISSING_NAME_OR_NEW_EMAIL)
        if not is_valid_email(new_email):
            raise UserValidationError(INVALID_EMAIL)

        with self._store_call("update_email"):
            user = self.store.find_first_by_name(name)
            if user is None:
                raise UserNotFoundError()
            self.store.update_email(user.id, new_email)
        logger.info("Updated email of user %s", user.id)
        return user

    def delete_user(self, name: str) -> UserRecord:
        """Delete the first user with this name once it is old enough.

        Raises:
            UserNotFoundError: nobody has this name
            DeleteGracePeriodError: the user was created less than ``grace_period`` ago
            StoreFailureError: the query or delete failed
        """
        with self._store_call("delete_user"):
            user = self.store.find_first_by_name(name)
            if user is None:
                raise UserNotFoundError()

            age = self._clock() - user.created_at
            if age < self.grace_period:
                logger.info("Refused to delete user %s aged %.1fs", user.id, age.total_seconds())
                raise DeleteGracePeriodError()

            self.store.delete_user(user.id)
        logger.info("Deleted user %s", user.id)
        return user
