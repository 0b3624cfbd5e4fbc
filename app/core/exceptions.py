"""
API errors and the handlers that render them
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from slowapi.errors import RateLimitExceeded
from starlette_context import context

from app.core.config import settings
from app.core.logging import log


class BaseAPIException(HTTPException):
    """Raised by services; rendered as the shared error body with `status_code`"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None, **kwargs):
        super().__init__(status_code=self.status_code, detail=detail or self.detail, headers=headers or self.headers)
        self.context = kwargs


class NotFoundError(BaseAPIException):
    """Missing row, or a row outside the caller's brand scope"""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"


class ConflictError(BaseAPIException):
    """Unique violation, e.g. an already subscribed email"""

    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"


class UnauthorizedError(BaseAPIException):
    """No usable session token"""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication required"
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(BaseAPIException):
    """Role or brand ownership check failed"""

    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied"


class BadRequestError(BaseAPIException):
    """Payload failed a business rule"""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"


class DatabaseError(BaseAPIException):
    """Backend query failed"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Database error"


class MissingTableError(DatabaseError):
    """Table not present in this Supabase project"""

    detail = "Table not found"


class ExternalServiceError(BaseAPIException):
    """Supabase storage or auth rejected the call"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "External service unavailable"


class RateLimitError(BaseAPIException):
    """Per-IP limit from slowapi"""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    detail = "Rate limit exceeded"


# Documented on every versioned route
class ErrorResponse(BaseModel):
    """Body of every error response"""

    error: str
    type: str
    details: Optional[Dict[str, Any]] = None
    correlation_id: Optional[str] = None
    timestamp: str


def _correlation_id() -> str:
    if context.exists():
        return context.get("X-Correlation-ID") or context.get("request_id", "no-context")
    return "no-context"


def error_body(message: str, error_type: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "error": message,
        "type": error_type,
        "details": details or {},
        "correlation_id": _correlation_id(),
        "timestamp": datetime.utcnow().isoformat(),
    }


async def handle_api_exception(request: Request, exc: BaseAPIException) -> JSONResponse:
    """Render a BaseAPIException; extra kwargs become `details`"""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.__class__.__name__, getattr(exc, "context", {})),
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed payloads as 400 with the first problem spelled out"""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        detail = str(first.get("msg", message)).removeprefix("Value error, ")
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{location}: {detail}" if location else detail

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, "ValidationError", {"errors": len(errors)}),
    )


async def handle_rate_limit_exception(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """slowapi rejections in the shared error shape"""
    log.warning("Rate limit exceeded", path=request.url.path, limit=str(exc.detail))
    return await handle_api_exception(request, RateLimitError(f"Rate limit exceeded: {exc.detail}"))


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Anything unhandled is a 500; the message is hidden outside DEBUG"""
    log.opt(exception=exc).error("Unexpected error", path=request.url.path)

    detail = str(exc) if settings.DEBUG else "Internal server error"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(detail, "InternalServerError"),
    )
