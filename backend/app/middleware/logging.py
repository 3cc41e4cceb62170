import time

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.info(
            "http_request",
            client=request.client.host if request.client else None,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            content_length=request.headers.get("content-length"),
            user_agent=request.headers.get("user-agent"),
            duration_ms=duration_ms,
        )
        return response
