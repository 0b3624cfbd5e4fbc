"""
Admin endpoints: moderation, users, applications and maintenance jobs
"""

import pytest
from httpx import AsyncClient

from tests.conftest import BRAND_OWNER_ID, CUSTOMER_ID, EMPTY_OWNER_ID, SUPER_ADMIN_ID, auth_headers

SECOND_ADMIN_ID = "55555555-5555-5555-5555-555555555555"


@pytest.fixture
def reviews(fake_supabase):
    fake_supabase.seed(
        "reviews_with_details",
        {"id": "rv1", "brand_id": "adire-lagos", "brand_name": "Adire Lagos", "rating": 5, "comment": "Lovely"},
        {"id": "rv2", "brand_id": "kente-couture", "brand_name": "Kente Couture", "rating": 3, "comment": "Slow"},
    )
    fake_supabase.seed(
        "reviews",
        {"id": "rv1", "brand_id": "adire-lagos", "rating": 5},
        {"id": "rv2", "brand_id": "kente-couture", "rating": 3},
    )
    return fake_supabase


@pytest.mark.asyncio
async def test_owner_sees_own_brand_reviews(client: AsyncClient, reviews):
    response = await client.get("/api/v1/admin/reviews", headers=auth_headers(BRAND_OWNER_ID))

    assert response.status_code == 200
    assert [review["id"] for review in response.json()["items"]] == ["rv1"]


@pytest.mark.asyncio
async def test_owner_cannot_filter_other_brand(client: AsyncClient, reviews):
    response = await client.get(
        "/api/v1/admin/reviews", params={"brand_id": "kente-couture"}, headers=auth_headers(BRAND_OWNER_ID)
    )

    assert response.status_code == 403
    assert response.json()["error"] == "Access denied to this brand"


@pytest.mark.asyncio
async def test_owner_without_brands_gets_empty_page(client: AsyncClient, reviews):
    response = await client.get("/api/v1/admin/reviews", headers=auth_headers(EMPTY_OWNER_ID))

    assert response.json()["items"] == []
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_delete_review_checks_scope(client: AsyncClient, reviews):
    denied = await client.delete("/api/v1/admin/reviews", params={"id": "rv2"}, headers=auth_headers(BRAND_OWNER_ID))
    missing = await client.delete("/api/v1/admin/reviews", params={"id": "nope"}, headers=auth_headers(BRAND_OWNER_ID))
    allowed = await client.delete("/api/v1/admin/reviews", params={"id": "rv1"}, headers=auth_headers(BRAND_OWNER_ID))

    assert denied.status_code == 403
    assert missing.status_code == 404
    assert allowed.status_code == 200
    assert [row["id"] for row in reviews.rows("reviews")] == ["rv2"]


@pytest.mark.asyncio
async def test_users_require_super_admin(client: AsyncClient):
    response = await client.get("/api/v1/admin/users", headers=auth_headers(BRAND_OWNER_ID))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_upsert_user_updates_existing_profile(client: AsyncClient, fake_supabase):
    response = await client.post(
        "/api/v1/admin/users",
        json={"email": "New@Brand-example.com", "role": "brand_admin", "ownedBrands": ["kente-couture"]},
        headers=auth_headers(SUPER_ADMIN_ID),
    )

    assert response.status_code == 200
    assert response.json()["action"] == "updated"
    profile = next(row for row in fake_supabase.rows("profiles") if row["id"] == EMPTY_OWNER_ID)
    assert profile["owned_brands"] == ["kente-couture"]


@pytest.mark.asyncio
async def test_upsert_user_creates_profile(client: AsyncClient, fake_supabase):
    response = await client.post(
        "/api/v1/admin/users",
        json={"email": "stylist@example.com", "role": "admin"},
        headers=auth_headers(SUPER_ADMIN_ID),
    )

    assert response.json()["action"] == "created"
    assert response.json()["user"]["role"] == "admin"
    assert len(fake_supabase.rows("profiles")) == 5


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, fake_supabase):
    headers = auth_headers(SUPER_ADMIN_ID)

    own = await client.delete("/api/v1/admin/users", params={"id": SUPER_ADMIN_ID}, headers=headers)
    missing = await client.delete("/api/v1/admin/users", params={"id": "nope"}, headers=headers)
    deleted = await client.delete("/api/v1/admin/users", params={"id": CUSTOMER_ID}, headers=headers)

    assert own.status_code == 400
    assert missing.status_code == 404
    assert deleted.status_code == 200
    assert CUSTOMER_ID not in {row["id"] for row in fake_supabase.rows("profiles")}


@pytest.mark.asyncio
async def test_sync_super_admin_brands(client: AsyncClient, fake_supabase):
    response = await client.post("/api/v1/admin/sync-super-admin-brands", headers=auth_headers(SUPER_ADMIN_ID))

    assert response.status_code == 200
    summary = response.json()
    assert summary["total_super_admins"] == 1
    assert summary["total_brands"] == 2
    assert summary["successful"] == 1
    assert summary["total_brands_added"] == 2
    admin = next(row for row in fake_supabase.rows("profiles") if row["id"] == SUPER_ADMIN_ID)
    assert admin["owned_brands"] == ["adire-lagos", "kente-couture"]


@pytest.mark.asyncio
async def test_sync_super_admin_brands_keeps_going_after_a_failure(client: AsyncClient, fake_supabase):
    fake_supabase.seed(
        "profiles",
        {"id": SECOND_ADMIN_ID, "email": "ops@omahub-example.com", "role": "super_admin", "owned_brands": ["kente-couture"]},
    )
    fake_supabase.fail_row("profiles", "update", id=SUPER_ADMIN_ID)

    response = await client.post("/api/v1/admin/sync-super-admin-brands", headers=auth_headers(SUPER_ADMIN_ID))

    assert response.status_code == 200
    summary = response.json()
    assert summary["total_super_admins"] == 2
    assert summary["successful"] == 1
    assert summary["failed"] == 1
    assert summary["total_brands_added"] == 1
    failed = next(entry for entry in summary["details"] if entry["user_id"] == SUPER_ADMIN_ID)
    assert failed["success"] is False
    assert failed["brands_added"] == 0

    rows = {row["id"]: row for row in fake_supabase.rows("profiles")}
    assert rows[SECOND_ADMIN_ID]["owned_brands"] == ["kente-couture", "adire-lagos"]
    assert rows[SUPER_ADMIN_ID]["owned_brands"] == []


@pytest.mark.asyncio
async def test_sync_super_admin_brands_skips_admins_already_in_sync(client: AsyncClient, fake_supabase):
    admin = next(row for row in fake_supabase.rows("profiles") if row["id"] == SUPER_ADMIN_ID)
    admin["owned_brands"] = ["kente-couture", "adire-lagos"]

    response = await client.post("/api/v1/admin/sync-super-admin-brands", headers=auth_headers(SUPER_ADMIN_ID))

    summary = response.json()
    assert summary["successful"] == 1
    assert summary["total_brands_added"] == 0
    assert ("profiles", "update") not in fake_supabase.calls
    assert admin["owned_brands"] == ["kente-couture", "adire-lagos"]


@pytest.mark.asyncio
async def test_repair_images(client: AsyncClient, fake_supabase):
    fake_supabase.seed(
        "collections",
        {"id": "c1", "image": "https://old.example.com/lovable-uploads/robe.png?v=2"},
        {"id": "c2", "image": "https://cdn.example.com/fine.png"},
    )
    headers = auth_headers(SUPER_ADMIN_ID)

    dry = await client.post("/api/v1/admin/repair-images", params={"dry_run": True}, headers=headers)
    assert dry.json()["results"]["collections"] == 1
    assert fake_supabase.rows("collections")[0]["image"].startswith("https://old.example.com")

    response = await client.post("/api/v1/admin/repair-images", headers=headers)

    assert response.json()["results"]["total"] == 1
    assert fake_supabase.rows("collections")[0]["image"] == (
        "http://localhost:54321/storage/v1/object/public/brand-assets/collections/robe.png"
    )


@pytest.mark.asyncio
async def test_applications_newest_first(client: AsyncClient, fake_supabase):
    fake_supabase.seed(
        "designer_applications",
        {"id": "a1", "brand_name": "Old", "status": "new", "created_at": "2024-03-01T09:00:00Z", "updated_at": None},
        {"id": "a2", "brand_name": "New", "status": "new", "created_at": "2024-05-01T09:00:00+00:00"},
    )

    response = await client.get("/api/v1/studio/applications", headers=auth_headers(SUPER_ADMIN_ID))

    data = response.json()
    assert data["count"] == 2
    assert [row["id"] for row in data["applications"]] == ["a2", "a1"]
    assert data["applications"][1]["updated_at"] == "2024-03-01T09:00:00Z"


@pytest.mark.asyncio
async def test_review_application(client: AsyncClient, fake_supabase):
    fake_supabase.seed("designer_applications", {"id": "a1", "brand_name": "Old", "status": "new"})

    response = await client.patch(
        "/api/v1/studio/applications/a1", json={"status": "approved"}, headers=auth_headers(SUPER_ADMIN_ID)
    )
    forbidden = await client.get("/api/v1/studio/applications", headers=auth_headers(BRAND_OWNER_ID))

    assert response.json()["status"] == "approved"
    assert response.json()["reviewed_by"] == SUPER_ADMIN_ID
    assert forbidden.status_code == 403


@pytest.fixture
def replies(reviews):
    owner = next(row for row in reviews.rows("profiles") if row["id"] == BRAND_OWNER_ID)
    owner.update({"first_name": "Bisi", "last_name": "Adeyemi"})
    reviews.seed(
        "review_replies",
        {"id": "rp1", "review_id": "rv1", "admin_id": BRAND_OWNER_ID, "reply_text": "Thank you!"},
        {"id": "rp2", "review_id": "rv1", "admin_id": SUPER_ADMIN_ID, "reply_text": "Glad you liked it"},
    )
    return reviews


@pytest.mark.asyncio
async def test_owner_replies_to_own_brand_review(client: AsyncClient, replies):
    response = await client.post(
        "/api/v1/admin/reviews/replies",
        json={"reviewId": "rv1", "replyText": "  We appreciate it  "},
        headers=auth_headers(BRAND_OWNER_ID),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["reply_text"] == "We appreciate it"
    assert data["admin_id"] == BRAND_OWNER_ID
    assert data["admin_name"] == "Bisi Adeyemi"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, status_code",
    [
        ({"review_id": "rv2", "reply_text": "Sorry"}, 403),
        ({"review_id": "nope", "reply_text": "Sorry"}, 404),
        ({"review_id": "rv1", "reply_text": "   "}, 400),
    ],
)
async def test_reply_rejections(client: AsyncClient, replies, body, status_code):
    response = await client.post("/api/v1/admin/reviews/replies", json=body, headers=auth_headers(BRAND_OWNER_ID))

    assert response.status_code == status_code
    assert len(replies.rows("review_replies")) == 2


@pytest.mark.asyncio
async def test_customers_cannot_reply(client: AsyncClient, replies):
    response = await client.post(
        "/api/v1/admin/reviews/replies",
        json={"review_id": "rv1", "reply_text": "Hi"},
        headers=auth_headers(CUSTOMER_ID),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_replies_with_author_names(client: AsyncClient, replies):
    response = await client.get(
        "/api/v1/admin/reviews/replies", params={"review_id": "rv1"}, headers=auth_headers(BRAND_OWNER_ID)
    )

    assert response.status_code == 200
    assert [(reply["id"], reply["admin_name"]) for reply in response.json()] == [
        ("rp1", "Bisi Adeyemi"),
        ("rp2", "admin@omahub-example.com"),
    ]


@pytest.mark.asyncio
async def test_only_author_or_admin_edits_reply(client: AsyncClient, replies):
    denied = await client.put(
        "/api/v1/admin/reviews/replies",
        json={"replyId": "rp2", "replyText": "Edited"},
        headers=auth_headers(BRAND_OWNER_ID),
    )
    own = await client.put(
        "/api/v1/admin/reviews/replies",
        json={"replyId": "rp1", "replyText": "Edited"},
        headers=auth_headers(BRAND_OWNER_ID),
    )
    admin = await client.put(
        "/api/v1/admin/reviews/replies",
        json={"replyId": "rp1", "replyText": "Moderated"},
        headers=auth_headers(SUPER_ADMIN_ID),
    )

    assert denied.status_code == 403
    assert denied.json()["error"] == "You can only update your own replies"
    assert own.status_code == 200
    assert admin.status_code == 200
    texts = {reply["id"]: reply["reply_text"] for reply in replies.rows("review_replies")}
    assert texts == {"rp1": "Moderated", "rp2": "Glad you liked it"}


@pytest.mark.asyncio
async def test_delete_reply(client: AsyncClient, replies):
    denied = await client.delete(
        "/api/v1/admin/reviews/replies", params={"id": "rp2"}, headers=auth_headers(BRAND_OWNER_ID)
    )
    missing = await client.delete(
        "/api/v1/admin/reviews/replies", params={"id": "nope"}, headers=auth_headers(BRAND_OWNER_ID)
    )
    own = await client.delete("/api/v1/admin/reviews/replies", params={"id": "rp1"}, headers=auth_headers(BRAND_OWNER_ID))

    assert denied.status_code == 403
    assert denied.json()["error"] == "You can only delete your own replies"
    assert missing.status_code == 404
    assert own.status_code == 200
    assert [reply["id"] for reply in replies.rows("review_replies")] == ["rp2"]
