"""User registry models package."""

from registry.models.user import CreateUserRequest, UpdateEmailRequest, UserRecord

__all__ = [
    "CreateUserRequest",
    "UpdateEmailRequest",
    "UserRecord",
]
