"""
Security headers middleware
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}
JSON_CSP = "default-src 'none'; frame-ancestors 'none';"
HSTS = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Hardening headers on every response"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(BASE_HEADERS)

        # Docs pages are HTML with scripts, so the strict policy is JSON only
        if response.headers.get("content-type", "").startswith("application/json"):
            response.headers["Content-Security-Policy"] = JSON_CSP
        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = HSTS
        return response
