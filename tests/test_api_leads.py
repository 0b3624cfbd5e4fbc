"""
Lead capture and the studio lead pipeline
"""

import pytest
from httpx import AsyncClient

from tests.conftest import BRAND_OWNER_ID, EMPTY_OWNER_ID, SUPER_ADMIN_ID, auth_headers


@pytest.fixture
def leads(fake_supabase):
    fake_supabase.seed(
        "leads",
        {"id": "l1", "brand_id": "adire-lagos", "customer_name": "Ada", "customer_email": "ada@example.com", "status": "new", "source": "website", "priority": "normal", "estimated_value": 500},
        {"id": "l2", "brand_id": "adire-lagos", "customer_name": "Bisi", "customer_email": "bisi@example.com", "status": "qualified", "source": "instagram", "priority": "high", "estimated_value": 1000},
        {"id": "l3", "brand_id": "adire-lagos", "customer_name": "Chi", "customer_email": "chi@example.com", "status": "converted", "source": "website", "priority": "normal", "estimated_value": 2000},
        {"id": "l4", "brand_id": "adire-lagos", "customer_name": "Dayo", "customer_email": "dayo@example.com", "status": "converted", "source": "website", "priority": "low", "estimated_value": None},
        {"id": "l5", "brand_id": "kente-couture", "customer_name": "Efua", "customer_email": "efua@example.com", "status": "converted", "source": "website", "priority": "urgent", "estimated_value": 5000},
    )
    fake_supabase.seed("lead_interactions", {"lead_id": "l1", "interaction_type": "email", "description": "Hi"})
    return fake_supabase


@pytest.mark.asyncio
async def test_capture_lead(client: AsyncClient, fake_supabase):
    response = await client.post(
        "/api/v1/leads",
        json={"brandId": "adire-lagos", "name": "Ada", "email": "ada@example.com", "source": "instagram", "leadType": "inquiry"},
    )

    assert response.status_code == 201
    [lead] = fake_supabase.rows("leads")
    assert lead["customer_name"] == "Ada"
    assert lead["status"] == "new"
    assert lead["priority"] == "normal"


@pytest.mark.asyncio
async def test_capture_lead_unknown_brand(client: AsyncClient):
    response = await client.post(
        "/api/v1/leads",
        json={"brandId": "nope", "name": "Ada", "email": "ada@example.com", "source": "web", "leadType": "inquiry"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid brand ID"


@pytest.mark.asyncio
async def test_capture_lead_requires_source(client: AsyncClient):
    response = await client.post(
        "/api/v1/leads",
        json={"brandId": "adire-lagos", "name": "Ada", "email": "ada@example.com", "leadType": "inquiry"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_owner_lists_only_own_leads(client: AsyncClient, leads):
    response = await client.get("/api/v1/leads", params={"status": "all"}, headers=auth_headers(BRAND_OWNER_ID))

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    assert {lead["brand_id"] for lead in data["items"]} == {"adire-lagos"}


@pytest.mark.asyncio
async def test_list_leads_filters_and_search(client: AsyncClient, leads):
    headers = auth_headers(SUPER_ADMIN_ID)

    converted = await client.get("/api/v1/leads", params={"status": "converted"}, headers=headers)
    searched = await client.get("/api/v1/leads", params={"search": "bisi"}, headers=headers)

    assert converted.json()["total"] == 3
    assert [lead["id"] for lead in searched.json()["items"]] == ["l2"]


@pytest.mark.asyncio
async def test_owner_without_brands_is_forbidden(client: AsyncClient, leads):
    response = await client.get("/api/v1/leads", headers=auth_headers(EMPTY_OWNER_ID))

    assert response.status_code == 403
    assert response.json()["error"] == "No accessible brands"


@pytest.mark.asyncio
async def test_lead_analytics_for_owner(client: AsyncClient, leads):
    response = await client.get("/api/v1/leads", params={"action": "analytics"}, headers=auth_headers(BRAND_OWNER_ID))

    data = response.json()
    assert data["total_leads"] == 4
    assert data["qualified_leads"] == 1
    assert data["converted_leads"] == 2
    assert data["conversion_rate"] == 50.0
    assert data["total_value"] == 3500
    assert data["total_bookings"] == 2
    assert data["leads_by_status"] == {
        "new": 1,
        "contacted": 0,
        "qualified": 1,
        "converted": 2,
        "lost": 0,
        "closed": 0,
    }


@pytest.mark.asyncio
async def test_lead_analytics_empty_scope(client: AsyncClient, leads):
    response = await client.get("/api/v1/leads", params={"action": "analytics"}, headers=auth_headers(EMPTY_OWNER_ID))

    assert response.json()["total_leads"] == 0
    assert response.json()["conversion_rate"] == 0


@pytest.mark.asyncio
async def test_commission_report(client: AsyncClient, leads):
    response = await client.get("/api/v1/leads", params={"action": "commission"}, headers=auth_headers(SUPER_ADMIN_ID))

    data = response.json()
    by_lead = {entry["lead_id"]: entry for entry in data["earnings"]}
    assert by_lead["l3"]["commission_amount"] == 200
    assert by_lead["l4"]["commission_amount"] == 0
    assert by_lead["l5"]["commission_amount"] == 750
    assert by_lead["l5"]["brand_name"] == "Kente Couture"
    assert data["total_commission"] == 950
    assert data["summary"]["total_leads"] == 3
    assert data["summary"]["total_value"] == 7000
    assert data["summary"]["average_commission_rate"] == pytest.approx(35 / 3)


@pytest.mark.asyncio
async def test_update_lead(client: AsyncClient, leads):
    response = await client.put(
        "/api/v1/leads",
        json={"id": "l1", "data": {"status": "contacted", "notes": "Called back"}},
        headers=auth_headers(BRAND_OWNER_ID),
    )

    assert response.status_code == 200
    lead = response.json()["lead"]
    assert lead["status"] == "contacted"
    assert lead["notes"] == "Called back"
    assert lead["updated_at"]


@pytest.mark.asyncio
async def test_update_lead_outside_scope(client: AsyncClient, leads):
    response = await client.put(
        "/api/v1/leads", json={"id": "l5", "data": {"status": "lost"}}, headers=auth_headers(BRAND_OWNER_ID)
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_lead_rejects_unknown_status(client: AsyncClient, leads):
    response = await client.put(
        "/api/v1/leads", json={"id": "l1", "data": {"status": "maybe"}}, headers=auth_headers(BRAND_OWNER_ID)
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_lead_removes_interactions(client: AsyncClient, leads):
    response = await client.delete("/api/v1/leads", params={"id": "l1"}, headers=auth_headers(BRAND_OWNER_ID))

    assert response.status_code == 200
    assert "l1" not in {lead["id"] for lead in leads.rows("leads")}
    assert leads.rows("lead_interactions") == []
