"""API routes implementation."""

from fastapi import APIRouter, Request, Response, status
from datetime import datetime, timezone

from shortlink.common.logging_config import get_logger
from shortlink.errors import NotFoundError

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkResponse,
    LinkListResponse,
    HealthResponse,
    ErrorResponse,
)

router = APIRouter()

logger = get_logger("web")


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or code"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        503: {"model": ErrorResponse, "description": "Could not allocate a unique code"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a custom short code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    registry = request.app.state.registry

    link = await registry.shorten(body.url, body.custom_code)
    logger.info(f"Created short URL: {link.code} -> {link.long_url}")

    return ShortenResponse(
        code=link.code,
        short_url=registry.short_url(link.code),
        long_url=link.long_url,
        created_at=link.created_at,
    )


@router.get(
    "/links",
    response_model=LinkListResponse,
    summary="List links",
    description="List every link with service-wide totals.",
)
async def list_links(request: Request):
    """List all links."""
    registry = request.app.state.registry

    links = await registry.list_links()
    links.sort(key=lambda link: link.created_at, reverse=True)

    return LinkListResponse(
        total_links=len(links),
        total_hits=sum(link.hit_count for link in links),
        links=[LinkResponse.from_link(link, registry.short_url(link.code)) for link in links],
    )


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get link information",
    description="Get a link and its access statistics without counting a hit.",
)
async def get_link(request: Request, code: str):
    """Get information about a shortened URL."""
    registry = request.app.state.registry

    link, found = await registry.resolve(code)
    if not found:
        raise NotFoundError(f"Short code '{code}' not found", details={"code": code})

    return LinkResponse.from_link(link, registry.short_url(code))


@router.delete(
    "/links/{code}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Delete link",
)
async def delete_link(request: Request, code: str):
    """Delete a shortened URL."""
    registry = request.app.state.registry

    await registry.delete(code)
    logger.info(f"Deleted short URL: {code}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    registry = request.app.state.registry

    healthy = await registry.health_check()

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        storage=registry.store.name,
        timestamp=datetime.now(timezone.utc),
    )
