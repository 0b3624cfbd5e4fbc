"""
Supabase client lifecycle.

A single service-role client is shared by the whole process. Row access is
scoped explicitly by the repositories and services, since the service role
bypasses row-level security.
"""

from typing import Any, Dict, Optional

from supabase import AsyncClient, acreate_client

from app.core.config import settings
from app.core.logging import log


class SupabaseManager:
    """Owns the shared Supabase client"""

    def __init__(self):
        self._client: Optional[AsyncClient] = None

    async def init(self) -> AsyncClient:
        """Create the service-role client if it doesn't exist yet"""
        if self._client is not None:
            return self._client

        key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY
        if not key:
            log.error("Neither SUPABASE_SERVICE_ROLE_KEY nor SUPABASE_ANON_KEY is configured")
            raise RuntimeError("Supabase credentials not configured")

        if not settings.SUPABASE_SERVICE_ROLE_KEY:
            log.warning("Using anon key; row-level security will restrict admin operations")

        self._client = await acreate_client(settings.SUPABASE_URL, key)
        log.info("Supabase client initialized", url=settings.SUPABASE_URL)
        return self._client

    async def close(self):
        """Drop the shared client"""
        if self._client is None:
            return
        self._client = None
        log.info("Supabase client released")

    async def client(self) -> AsyncClient:
        if self._client is None:
            return await self.init()
        return self._client


# Global manager instance
supabase_manager = SupabaseManager()


async def get_supabase() -> AsyncClient:
    """Dependency returning the shared Supabase client"""
    return await supabase_manager.client()


async def check_supabase_health(client: Any) -> Dict[str, Any]:
    """Check the REST API with a one-row read"""
    try:
        await client.table("brands").select("id").limit(1).execute()
        return {"status": "healthy"}
    except Exception as e:
        log.error(f"Supabase health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}


def public_storage_url(bucket: str, path: str) -> str:
    """Public URL of an object in a public bucket"""
    return f"{settings.storage_public_base}/{bucket}/{path.lstrip('/')}"
