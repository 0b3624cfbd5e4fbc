"""
Health and root endpoints
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient):
    """Liveness never touches Supabase"""
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "timestamp" in data
    assert "version" in data


@pytest.mark.asyncio
async def test_readiness_checks_supabase_and_cache(client: AsyncClient):
    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["checks"] == {"supabase": True, "cache": True}
    assert data["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_degraded_when_supabase_fails(client: AsyncClient, fake_supabase):
    fake_supabase.fail("brands", "select")

    response = await client.get("/api/v1/health/ready")

    assert response.json()["status"] == "degraded"
    assert response.json()["checks"]["supabase"] is False


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "version" in data


@pytest.mark.asyncio
async def test_security_headers(client: AsyncClient):
    response = await client.get("/api/v1/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers
    assert "X-Process-Time" in response.headers
