"""
Request timing middleware
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import log

SLOW_REQUEST_MS = 1000.0


class TimingMiddleware(BaseHTTPMiddleware):
    """X-Process-Time in milliseconds; requests over SLOW_REQUEST_MS are logged"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers["X-Process-Time"] = str(elapsed_ms)
        if elapsed_ms > SLOW_REQUEST_MS:
            log.warning(
                "Slow request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=elapsed_ms,
            )
        return response
