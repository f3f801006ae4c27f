"""Azure Functions App - Python v2 Programming Model with Isolated Worker.

Exposes the user registry operations as HTTP functions named ``createUser``,
``getUserByName``, ``updateEmail`` and ``deleteUser``. Each route accepts every
verb so the handler itself answers 405 for the wrong one.
"""

import json
import logging
from datetime import UTC, datetime

import azure.functions as func

from registry.config import get_registry_config
from registry.services import (
    HandlerResponse,
    UserRegistryService,
    UserRequestHandlers,
    UserStore,
    create_user_store,
)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

# Shared by every invocation handled by this worker process
_services_cache: dict[str, UserRequestHandlers] = {}


def _build_user_store() -> UserStore:
    config = get_registry_config()
    store = create_user_store(config)
    logging.info("Initialized user registry with %s store", config.store_backend)
    return store


def get_request_handlers() -> UserRequestHandlers:
    """Get the request handlers.

    The user store is built by the first request that needs it, inside the
    handler's error mapping, so an unreachable database yields a 500 JSON
    error and a wrong verb still yields 405.
    """
    if "handlers" not in _services_cache:
        _services_cache["handlers"] = UserRequestHandlers(UserRegistryService(store_factory=_build_user_store))
    return _services_cache["handlers"]


def _read_json_body(req: func.HttpRequest) -> object:
    try:
        return req.get_json()
    except ValueError:
        return None


def _to_http_response(response: HandlerResponse) -> func.HttpResponse:
    if response.is_json:
        return func.HttpResponse(
            json.dumps(response.body),
            status_code=response.status_code,
            mimetype="application/json",
        )
    return func.HttpResponse(response.body, status_code=response.status_code, mimetype="text/plain")


@app.function_name(name="createUser")
@app.route(route="createUser", methods=ALL_METHODS)
def create_user(req: func.HttpRequest) -> func.HttpResponse:
    """Register a user.

    Example:
        POST /api/createUser with JSON body: {"name": "Alice", "email": "alice@example.com"}
    """
    logging.info("createUser processing a %s request.", req.method)
    return _to_http_response(get_request_handlers().create_user(req.method, _read_json_body(req)))


@app.function_name(name="getUserByName")
@app.route(route="getUserByName", methods=ALL_METHODS)
def get_user_by_name(req: func.HttpRequest) -> func.HttpResponse:
    """List users by exact name.

    Example:
        GET /api/getUserByName?name=Alice
    """
    logging.info("getUserByName processing a %s request.", req.method)
    return _to_http_response(get_request_handlers().get_user_by_name(req.method, req.params))


@app.function_name(name="updateEmail")
@app.route(route="updateEmail", methods=ALL_METHODS)
def update_email(req: func.HttpRequest) -> func.HttpResponse:
    """Change a user's email.

    Example:
        PUT /api/updateEmail with JSON body: {"name": "Alice", "newEmail": "alice@example.org"}
    """
    logging.info("updateEmail processing a %s request.", req.method)
    return _to_http_response(get_request_handlers().update_email(req.method, _read_json_body(req)))


@app.function_name(name="deleteUser")
@app.route(route="deleteUser", methods=ALL_METHODS)
def delete_user(req: func.HttpRequest) -> func.HttpResponse:
    """Delete a user registered at least a minute ago.

    Example:
        DELETE /api/deleteUser?name=Alice
    """
    logging.info("deleteUser processing a %s request.", req.method)
    return _to_http_response(get_request_handlers().delete_user(req.method, req.params))


@app.route(route="health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint.

    Returns:
        HTTP 200 response indicating the function app is healthy
    """
    logging.info("Health check endpoint called.")

    health_data = {
        "status": "healthy",
        "service": "user-registry",
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return func.HttpResponse(json.dumps(health_data), status_code=200, mimetype="application/json")
