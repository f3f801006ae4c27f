"""Request-handling contract shared by every HTTP host.

Each handler takes the HTTP method plus the parsed body or query parameters
and returns a ``HandlerResponse``. The method is checked before anything
else is looked at, so a wrong verb always yields 405.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from registry.errors import DeleteGracePeriodError, MethodNotAllowedError, RegistryError, StoreFailureError
from registry.models.user import CreateUserRequest, UpdateEmailRequest
from registry.services.user_registry import UserRegistryService

USER_CREATED = "User registered successfully."
EMAIL_UPDATED = "Email updated successfully."
USER_DELETED = "User deleted successfully."
MISSING_LOOKUP_NAME = "Provide the name to look up as a query parameter."
MISSING_DELETE_NAME = "Provide the name to delete as a query parameter."

# These errors are reported as {"error": message}; everything else is plain text.
_JSON_ERRORS = (DeleteGracePeriodError, StoreFailureError)


class HandlerResponse(BaseModel):
    """Status code and body of a handled request.

    A ``str`` body is sent as plain text, anything else as JSON.
    """

    status_code: int
    body: str | list[Any] | dict[str, Any]

    model_config = ConfigDict(frozen=True)

    @property
    def is_json(self) -> bool:
        return not isinstance(self.body, str)


def error_response(error: RegistryError) -> HandlerResponse:
    """Map a registry error to its response."""
    if isinstance(error, _JSON_ERRORS):
        return HandlerResponse(status_code=error.status_code, body={"error": error.message})
    return HandlerResponse(status_code=error.status_code, body=error.message)


def _parse_body[M: BaseModel](model: type[M], body: Any) -> M:
    """Parse a request body, treating anything unusable as an empty body."""
    if not isinstance(body, Mapping):
        return model()
    try:
        return model.model_validate(dict(body))
    except ValidationError:
        # Non-string fields count as missing
        return model()


def _require_method(method: str, expected: str) -> None:
    if method.upper() != expected:
        raise MethodNotAllowedError()


class UserRequestHandlers:
    """HTTP request handlers for the four user registry operations."""

    def __init__(self, registry: UserRegistryService) -> None:
        self.registry = registry

    def create_user(self, method: str, body: Any) -> HandlerResponse:
        """POST: register a user from ``{name, email}``."""
        try:
            _require_method(method, "POST")
            request = _parse_body(CreateUserRequest, body)
            self.registry.create_user(request.name, request.email)
            return HandlerResponse(status_code=201, body=USER_CREATED)
        except RegistryError as e:
            return error_response(e)

    def get_user_by_name(self, method: str, params: Mapping[str, str]) -> HandlerResponse:
        """GET: list every user whose name equals the ``name`` query parameter."""
        try:
            _require_method(method, "GET")
            name = params.get("name")
            if not name:
                return HandlerResponse(status_code=400, body=MISSING_LOOKUP_NAME)
            users = self.registry.get_users_by_name(name)
            return HandlerResponse(status_code=200, body=[user.model_dump(mode="json", by_alias=True) for user in users])
        except RegistryError as e:
            return error_response(e)

    def update_email(self, method: str, body: Any) -> HandlerResponse:
        """PUT: change the email of the first user matching ``{name, newEmail}``."""
        try:
            _require_method(method, "PUT")
            request = _parse_body(UpdateEmailRequest, body)
            self.registry.update_email(request.name, request.new_email)
            return HandlerResponse(status_code=200, body=EMAIL_UPDATED)
        except RegistryError as e:
            return error_response(e)

    def delete_user(self, method: str, params: Mapping[str, str]) -> HandlerResponse:
        """DELETE: remove the first user named by the ``name`` query parameter."""
        try:
            _require_method(method, "DELETE")
            name = params.get("name")
            if not name:
                return HandlerResponse(status_code=400, body=MISSING_DELETE_NAME)
            self.registry.delete_user(name)
            return HandlerResponse(status_code=200, body=USER_DELETED)
        except RegistryError as e:
            return error_response(e)
