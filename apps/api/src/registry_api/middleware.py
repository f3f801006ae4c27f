"""Middleware setup for the FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

LOCAL_DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def get_allowed_origins(ui_url: str | None = None, environment: str = "development") -> list[str]:
    """Get list of allowed CORS origins.

    Args:
        ui_url: URL of the UI application
        environment: Environment name (development, production, etc.)

    Returns:
        Deduplicated list of allowed origin URLs
    """
    origins = [ui_url.rstrip("/")] if ui_url else []
    if environment.lower() in {"development", "dev", "local"}:
        origins.extend(LOCAL_DEV_ORIGINS)
    return list(dict.fromkeys(origins))


def get_cors_headers(origin: str | None, ui_url: str | None = None, environment: str = "development") -> dict[str, str]:
    """CORS headers for responses built outside the middleware, empty if the origin is not allowed."""
    if not origin or origin not in get_allowed_origins(ui_url, environment):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
    }


def setup_middleware(app: FastAPI, ui_url: str | None = None, environment: str = "development") -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        ui_url: URL of the UI application for CORS
        environment: Environment name (development, production, etc.)
    """
    allowed_origins = get_allowed_origins(ui_url, environment)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("CORS enabled for origins: %s (environment=%s)", allowed_origins, environment)
