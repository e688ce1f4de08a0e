"""Redirect routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

router = APIRouter()


@router.get("/healthz", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    registry = request.app.state.registry

    if await registry.health_check():
        return {"status": "ok"}
    return JSONResponse(
        content={"status": "unhealthy"},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@router.get("/readyz", include_in_schema=False)
async def readiness_check(request: Request):
    """Readiness probe: the registry is wired and its storage answers."""
    registry = getattr(request.app.state, "registry", None)

    if registry is not None and await registry.health_check():
        return {"status": "ready"}
    return JSONResponse(
        content={"status": "not ready"},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@router.get("/{code}", include_in_schema=False)
async def redirect_to_url(request: Request, code: str):
    """Count a hit and redirect to the original URL.

    Unknown codes raise NotFoundError, rendered as 404 by the app's error handler.
    """
    registry = request.app.state.registry

    link = await registry.hit(code)

    # 302 so clients keep coming back through the counter
    return RedirectResponse(url=link.long_url, status_code=status.HTTP_302_FOUND)
