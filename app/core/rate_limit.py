"""
Rate limiting for public form endpoints
"""

from slowapi import Limiter

from app.core.config import settings
from app.core.security import get_client_ip

limiter = Limiter(key_func=get_client_ip, enabled=settings.RATE_LIMIT_ENABLED)
