"""FastAPI application factory."""

import asyncio

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shortlink.common.logging_config import get_logger
from shortlink.errors import (
    ShortLinkError,
    InvalidURLError,
    InvalidCodeError,
    DuplicateCodeError,
    RetriesExhaustedError,
    NotFoundError,
)

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware

logger = get_logger("web")

# Registry error -> HTTP status
ERROR_STATUS = {
    InvalidURLError: status.HTTP_400_BAD_REQUEST,
    InvalidCodeError: status.HTTP_400_BAD_REQUEST,
    DuplicateCodeError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    RetriesExhaustedError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for_error(error: ShortLinkError) -> int:
    """Map a registry error to its HTTP status code."""
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_short_link_error(request: Request, exc: ShortLinkError) -> JSONResponse:
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.warning(f"Error in {request.url.path}: {exc.message}")
    return JSONResponse(
        content={"error": exc.message, "details": exc.details},
        status_code=status_code,
    )


async def handle_timeout(request: Request, exc: asyncio.TimeoutError) -> JSONResponse:
    logger.error(f"Storage timed out in {request.method} {request.url.path}")
    return JSONResponse(
        content={"error": "Storage operation timed out"},
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
    )


def create_app(
    store_instance,
    registry_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Link store instance
        registry_instance: LinkRegistry instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortlink",
        description="URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.registry = registry_instance
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(ShortLinkError, handle_short_link_error)
    app.add_exception_handler(asyncio.TimeoutError, handle_timeout)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Redirect"])

    return app
