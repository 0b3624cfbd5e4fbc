"""
Collections, products, reviews and favourites
"""

import random

import pytest
from httpx import AsyncClient

from app.services.collection_service import CollectionService
from tests.conftest import CUSTOMER_ID, auth_headers


@pytest.fixture
def catalogue(fake_supabase):
    fake_supabase.seed(
        "collections",
        {"id": "c1", "brand_id": "adire-lagos", "title": "Indigo Season", "image": "/img/c1.png"},
        {"id": "c2", "brand_id": "kente-couture", "title": "Royal Brides", "image": "/img/c2.png"},
    )
    fake_supabase.seed(
        "products",
        *[
            {"id": f"a{i}", "brand_id": "adire-lagos", "collection_id": "c1", "title": f"Adire piece {i}", "price": 100 + i, "in_stock": True}
            for i in range(6)
        ],
        {"id": "a-out", "brand_id": "adire-lagos", "collection_id": "c1", "title": "Gone", "price": 90, "in_stock": False},
        {"id": "k1", "brand_id": "kente-couture", "collection_id": "c2", "title": "Kente gown", "price": 2500, "sale_price": 2200, "in_stock": True, "category": "Bridal"},
        {"id": "k2", "brand_id": "kente-couture", "collection_id": "c2", "title": "Kente veil", "price": 400, "in_stock": True},
    )
    return fake_supabase


@pytest.mark.asyncio
async def test_list_collections_by_brand(client: AsyncClient, catalogue):
    response = await client.get("/api/v1/collections", params={"brand_id": "kente-couture"})

    assert response.status_code == 200
    assert [collection["id"] for collection in response.json()["items"]] == ["c2"]


@pytest.mark.asyncio
async def test_get_collection_with_products(client: AsyncClient, catalogue):
    response = await client.get("/api/v1/collections/c2")

    assert response.status_code == 200
    assert {product["id"] for product in response.json()["products"]} == {"k1", "k2"}


@pytest.mark.asyncio
async def test_recommendations_anonymous(client: AsyncClient, catalogue):
    response = await client.get("/api/v1/collections/c1/recommendations")

    assert response.status_code == 200
    products = response.json()
    assert len(products) == 4
    assert all(product["collection_id"] == "c1" and product["in_stock"] for product in products)
    assert len({product["id"] for product in products}) == 4


@pytest.mark.asyncio
async def test_recommendations_mix_in_favourite_brands(catalogue):
    catalogue.seed("favourites", {"user_id": CUSTOMER_ID, "item_id": "kente-couture", "item_type": "brand"})
    service = CollectionService(catalogue, rng=random.Random(7))

    products = await service.recommendations("c1", CUSTOMER_ID)

    ids = [product["id"] for product in products]
    assert len(ids) == 4
    assert set(ids[:2]) == {"k1", "k2"}
    assert all(product_id.startswith("a") for product_id in ids[2:])


@pytest.mark.asyncio
async def test_recommendations_unknown_collection(client: AsyncClient, catalogue):
    response = await client.get("/api/v1/collections/missing/recommendations")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_products_search(client: AsyncClient, catalogue):
    response = await client.get("/api/v1/products", params={"q": "kente", "limit": 1})

    data = response.json()
    assert data["total"] == 2
    assert len(data["items"]) == 1
    assert data["has_more"] is True


@pytest.mark.asyncio
async def test_get_product_not_found(client: AsyncClient, catalogue):
    response = await client.get("/api/v1/products/nope")

    assert response.status_code == 404
    assert response.json()["error"] == "Product not found"


@pytest.mark.asyncio
async def test_review_updates_brand_rating(client: AsyncClient, fake_supabase):
    fake_supabase.seed("reviews", {"brand_id": "adire-lagos", "author": "Tolu", "comment": "Lovely", "rating": 4})

    response = await client.post(
        "/api/v1/reviews",
        json={"brandId": "adire-lagos", "author": "Ngozi", "comment": "Beautiful fabric", "rating": 4.5},
    )

    assert response.status_code == 201
    assert response.json()["date"]
    brand = next(row for row in fake_supabase.rows("brands") if row["id"] == "adire-lagos")
    # (4 + 4.5) / 2 = 4.25, rounded half up
    assert brand["rating"] == 4.3


@pytest.mark.asyncio
async def test_review_rating_failure_is_not_fatal(client: AsyncClient, fake_supabase):
    fake_supabase.fail("brands", "update")

    response = await client.post(
        "/api/v1/reviews",
        json={"brand_id": "adire-lagos", "author": "Ngozi", "comment": "Great", "rating": 5},
    )

    assert response.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"author": "Ngozi", "comment": "Great", "rating": 5},
        {"brand_id": "adire-lagos", "comment": "Great", "rating": 5},
        {"brand_id": "adire-lagos", "author": "Ngozi", "comment": "Great", "rating": 0},
        {"brand_id": "adire-lagos", "author": "Ngozi", "comment": "Great", "rating": 6},
    ],
)
async def test_review_validation(client: AsyncClient, payload):
    response = await client.post("/api/v1/reviews", json=payload)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_reviews_requires_brand(client: AsyncClient):
    response = await client.get("/api/v1/reviews")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_reviews_newest_first(client: AsyncClient, fake_supabase):
    fake_supabase.seed(
        "reviews",
        {"id": "r-old", "brand_id": "adire-lagos", "author": "A", "comment": "ok", "rating": 3, "created_at": "2024-02-01T00:00:00+00:00"},
        {"id": "r-new", "brand_id": "adire-lagos", "author": "B", "comment": "great", "rating": 5, "created_at": "2024-03-01T00:00:00+00:00"},
        {"id": "r-other", "brand_id": "kente-couture", "author": "C", "comment": "fine", "rating": 4},
    )

    response = await client.get("/api/v1/reviews", params={"brand_id": "adire-lagos"})

    assert [review["id"] for review in response.json()] == ["r-new", "r-old"]


@pytest.mark.asyncio
async def test_favourites_flow(client: AsyncClient, catalogue):
    headers = auth_headers(CUSTOMER_ID)

    for item_id, item_type in [("adire-lagos", "brand"), ("c2", "catalogue"), ("k1", "product")]:
        response = await client.post(
            "/api/v1/favourites", json={"itemId": item_id, "itemType": item_type}, headers=headers
        )
        assert response.status_code == 201

    duplicate = await client.post(
        "/api/v1/favourites", json={"item_id": "k1", "item_type": "product"}, headers=headers
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "Item already in favourites"

    listed = await client.get("/api/v1/favourites", headers=headers)
    items = {item["item_type"]: item for item in listed.json()}
    assert items["brand"]["name"] == "Adire Lagos"
    assert items["catalogue"]["title"] == "Royal Brides"
    assert items["product"]["price"] == 2200
    assert items["product"]["brand"]["name"] == "Kente Couture"

    removed = await client.delete(
        "/api/v1/favourites", params={"item_id": "k1", "item_type": "product"}, headers=headers
    )
    assert removed.status_code == 200
    assert len(catalogue.rows("favourites")) == 2


@pytest.mark.asyncio
async def test_favourites_skip_deleted_items(client: AsyncClient, catalogue):
    catalogue.seed("favourites", {"user_id": CUSTOMER_ID, "item_id": "gone", "item_type": "product"})

    response = await client.get("/api/v1/favourites", headers=auth_headers(CUSTOMER_ID))

    assert response.json() == []


@pytest.mark.asyncio
async def test_favourite_requires_valid_type(client: AsyncClient):
    response = await client.post(
        "/api/v1/favourites", json={"item_id": "x", "item_type": "wishlist"}, headers=auth_headers(CUSTOMER_ID)
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_remove_favourite_requires_params(client: AsyncClient):
    response = await client.delete("/api/v1/favourites", params={"item_id": "x"}, headers=auth_headers(CUSTOMER_ID))

    assert response.status_code == 400
