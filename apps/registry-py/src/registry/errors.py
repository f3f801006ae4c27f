"""Error taxonomy for the user registry.

Every error carries the HTTP status it maps to and a human-readable message
that is sent back to the caller as-is.
"""


class RegistryError(Exception):
    """Base class for all user registry errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MethodNotAllowedError(RegistryError):
    """Wrong HTTP verb for the operation."""

    status_code = 405

    def __init__(self, message: str = "Method Not Allowed") -> None:
        super().__init__(message)


class UserValidationError(RegistryError):
    """Missing or malformed request field."""

    status_code = 400


class UserNotFoundError(RegistryError):
    """No user matches the supplied name."""

    status_code = 404

    def __init__(self, message: str = "No user found with that name.") -> None:
        super().__init__(message)


class DeleteGracePeriodError(RegistryError):
    """Delete attempted before the grace period after creation has elapsed."""

    status_code = 403

    def __init__(self, message: str = "cannot delete within 1 minute of creation") -> None:
        super().__init__(message)


class StoreFailureError(RegistryError):
    """Unexpected failure reported by the user store."""

    status_code = 500
