"""
Request ID middleware
"""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import log


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an id.

    The id comes from ``X-Request-ID`` when the client sends one, is kept on
    ``request.state``, bound to every log line written while the request
    runs, and echoed back in the response header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        with log.contextualize(request_id=request_id):
            response = await call_next(request)
            log.debug(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
            )

        response.headers["X-Request-ID"] = request_id
        return response
