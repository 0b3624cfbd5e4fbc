"""
Liveness and readiness checks
"""
from typing import Any, Dict

from fastapi import APIRouter

from app.api.deps import SupabaseDep
from app.core.cache import get_cache
from app.core.config import settings
from app.core.supabase import check_supabase_health
from app.schemas.common import HealthCheckResponse
from app.utils.timestamps import utc_now_iso

router = APIRouter()

CACHE_CHECK_KEY = "health:check"


@router.get("/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Process is up; dependencies are not touched"""
    return HealthCheckResponse(timestamp=utc_now_iso(), version=settings.VERSION)


@router.get("/health/live")
async def liveness() -> Dict[str, Any]:
    return {"status": "ok", "timestamp": utc_now_iso()}


@router.get("/health/ready")
async def readiness(client: SupabaseDep) -> Dict[str, Any]:
    """
    Supabase answers a one-row read and the cache round-trips a value.

    Always 200; a failing dependency only marks the body "degraded".
    """
    supabase = await check_supabase_health(client)

    cache = get_cache()
    await cache.set(CACHE_CHECK_KEY, "ok", ttl=10)
    cache_ok = await cache.get(CACHE_CHECK_KEY) == "ok"

    checks = {"supabase": supabase["status"] == "healthy", "cache": cache_ok}
    return {
        "status": "ok" if all(checks.values()) else "degraded",
        "timestamp": utc_now_iso(),
        "checks": checks,
    }
