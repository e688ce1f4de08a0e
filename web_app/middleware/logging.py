"""Request logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable, Optional

from shortlink.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and one per response with its duration."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web.access")

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"
        self.logger.debug(f"Request: {request.method} {request.url.path} from {client_ip}")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.2f}ms, client={client_ip})"
        )

        return response
