"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from registry_api.config import get_settings
from registry_api.middleware import get_cors_headers, setup_middleware
from registry_api.routes import api_router
from registry_api.services.cosmos_db_init import initialize_cosmos_db

# Initialize settings
settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    logger.info("%s v%s started", settings.app_name, settings.app_version)
    logger.info("Environment: %s, store backend: %s", settings.environment, settings.store_backend)

    await initialize_cosmos_db(settings)

    yield

    logger.info("%s shutting down", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="User registry - FastAPI backend service",
    version=settings.app_version,
    lifespan=lifespan,
    redirect_slashes=False,
)

# Setup middleware (must be before exception handlers)
setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report unhandled errors as 500 with CORS headers attached."""
    if isinstance(exc, HTTPException):
        raise exc

    logger.error("Unhandled exception: %s", exc, exc_info=True)

    origin = request.headers.get("origin")
    cors_headers = get_cors_headers(origin, ui_url=settings.ui_url, environment=settings.environment)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
        headers=cors_headers,
    )


app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "registry_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
