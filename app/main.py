# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the UserHub API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main            # honours PORT / HOST from the environment
# =============================================================================

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import API_VERSION, LOG_LEVELS, Settings, env_file_exists, settings
from app.exceptions import (
    UserHubException,
    http_exception_handler,
    userhub_exception_handler,
)
from app.logging_config import setup_logging
from app.middleware import register_middleware
from app.routers import health, users
from core.services.user_store import UserStore

logger = logging.getLogger(__name__)


# =============================================================================
# CORS Policy
# =============================================================================

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Accept", "Authorization", "Content-Type", "X-CSRF-Token"]
CORS_EXPOSE_HEADERS = ["Link"]
CORS_MAX_AGE = 300


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs startup/shutdown. The user store is created eagerly in
    create_app() so it also exists for clients that skip the lifespan.
    """
    logger.info(
        f"Starting UserHub API with {len(app.state.user_store)} users "
        f"(CORS origin: {app.state.settings.FRONTEND_URL})"
    )
    yield
    logger.info("Shutting down UserHub API")


def create_app(
    app_settings: Settings | None = None,
    store: UserStore | None = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the global settings)
        store: User store to serve (defaults to a store with sample users)

    Returns:
        A configured FastAPI application instance
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="UserHub API",
        description="Health check and in-memory user management for the UserHub frontend.",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        # Paths match exactly; only /api/users/ is registered with a slash
        redirect_slashes=False,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Health",
                "description": "API health checks",
            },
            {
                "name": "Users",
                "description": "List, create and fetch users",
            },
        ],
    )

    app.state.settings = app_settings
    app.state.user_store = store if store is not None else UserStore.with_sample_data()

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    # CORS first: it ends up innermost, below logging/recovery/request-id
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        expose_headers=CORS_EXPOSE_HEADERS,
        max_age=CORS_MAX_AGE,
    )
    register_middleware(app)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    app.add_exception_handler(UserHubException, userhub_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(
        health.router,
        prefix="/api",
        tags=["Health"]
    )

    app.include_router(
        users.router,
        prefix="/api/users",
        tags=["Users"]
    )

    return app


# Create the application instance at import time so that uvicorn can
# discover it without calling create_app manually.
app = create_app()


def run() -> None:
    """
    Run the API with uvicorn.

    Exits with status 1 if PORT is not a number, LOG_LEVEL is unknown, or the
    port cannot be bound.
    """
    setup_logging(settings.log_level)

    if not env_file_exists():
        logger.info("No .env file found, using default values")

    try:
        port = int(settings.PORT)
    except ValueError:
        logger.error(f"Invalid PORT {settings.PORT!r}: must be a number")
        sys.exit(1)
    if not 0 <= port <= 65535:
        logger.error(f"Invalid PORT {settings.PORT!r}: out of range")
        sys.exit(1)
    if settings.log_level not in LOG_LEVELS:
        logger.error(
            f"Invalid LOG_LEVEL {settings.LOG_LEVEL!r}: must be one of {', '.join(LOG_LEVELS)}"
        )
        sys.exit(1)

    logger.info(f"Server starting on port {settings.PORT}")
    logger.info(f"Frontend URL: {settings.FRONTEND_URL}")
    logger.info(f"API available at: {settings.api_base_url}")

    # uvicorn logs bind errors (port in use, bad host) and exits with status 1
    uvicorn.run(
        app,
        host=settings.HOST,
        port=port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
