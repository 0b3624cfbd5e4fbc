"""
Middleware components for FastAPI
"""

from .request_id import RequestIDMiddleware
from .security import SecurityHeadersMiddleware
from .timing import TimingMiddleware

__all__ = ["RequestIDMiddleware", "TimingMiddleware", "SecurityHeadersMiddleware"]
