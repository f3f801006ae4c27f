"""User registry routes.

Each operation is exposed under its endpoint name and accepts every verb;
the handler answers 405 itself when the verb is wrong.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from registry.services import HandlerResponse, UserRequestHandlers
from registry_api.services import get_request_handlers
from starlette.concurrency import run_in_threadpool

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

router = APIRouter(tags=["users"])


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def _to_response(response: HandlerResponse) -> Response:
    if response.is_json:
        return JSONResponse(content=response.body, status_code=response.status_code)
    return PlainTextResponse(content=response.body, status_code=response.status_code)


@router.api_route("/createUser", methods=ALL_METHODS)
async def create_user(request: Request, handlers: UserRequestHandlers = Depends(get_request_handlers)) -> Response:
    body = await _read_json_body(request)
    return _to_response(await run_in_threadpool(handlers.create_user, request.method, body))


@router.api_route("/getUserByName", methods=ALL_METHODS)
async def get_user_by_name(
    request: Request, handlers: UserRequestHandlers = Depends(get_request_handlers)
) -> Response:
    return _to_response(await run_in_threadpool(handlers.get_user_by_name, request.method, request.query_params))


@router.api_route("/updateEmail", methods=ALL_METHODS)
async def update_email(request: Request, handlers: UserRequestHandlers = Depends(get_request_handlers)) -> Response:
    body = await _read_json_body(request)
    return _to_response(await run_in_threadpool(handlers.update_email, request.method, body))


@router.api_route("/deleteUser", methods=ALL_METHODS)
async def delete_user(request: Request, handlers: UserRequestHandlers = Depends(get_request_handlers)) -> Response:
    return _to_response(await run_in_threadpool(handlers.delete_user, request.method, request.query_params))
