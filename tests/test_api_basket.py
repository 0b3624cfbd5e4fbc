"""
Basket lines, clearing and checkout into per-brand orders
"""

import pytest
from httpx import AsyncClient

from tests.conftest import BRAND_OWNER_ID, CUSTOMER_ID, auth_headers

CUSTOMER = auth_headers(CUSTOMER_ID, "ada@example.com")
OWNER = auth_headers(BRAND_OWNER_ID, "owner@adire-example.com")


@pytest.fixture
def products(fake_supabase):
    fake_supabase.seed(
        "products",
        {"id": "p1", "brand_id": "adire-lagos", "title": "Indigo wrap", "price": 120, "sale_price": 100},
        {"id": "p2", "brand_id": "kente-couture", "title": "Kente gown", "price": 2500},
    )
    return fake_supabase


@pytest.fixture
def filled(products):
    """Ada has two wraps from Adire Lagos and one gown from Kente Couture"""
    products.seed(
        "baskets",
        {"id": "b1", "user_id": CUSTOMER_ID, "brand_id": "adire-lagos"},
        {"id": "b2", "user_id": CUSTOMER_ID, "brand_id": "kente-couture"},
        {"id": "b3", "user_id": BRAND_OWNER_ID, "brand_id": "adire-lagos"},
    )
    products.seed(
        "basket_items",
        {"id": "i1", "basket_id": "b1", "product_id": "p1", "quantity": 2, "size": "M", "color": "Indigo"},
        {"id": "i2", "basket_id": "b2", "product_id": "p2", "quantity": 1, "size": None, "color": None},
        {"id": "i3", "basket_id": "b3", "product_id": "p1", "quantity": 1, "size": None, "color": None},
    )
    return products


@pytest.mark.asyncio
async def test_basket_requires_login(client: AsyncClient, products):
    response = await client.get("/api/v1/basket")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_add_same_variant_merges_quantity(client: AsyncClient, products):
    body = {"productId": "p1", "quantity": 1, "size": "M", "colour": "Indigo"}

    first = await client.post("/api/v1/basket", json=body, headers=CUSTOMER)
    second = await client.post("/api/v1/basket", json={**body, "quantity": 2}, headers=CUSTOMER)

    assert first.status_code == second.status_code == 201
    assert len(products.rows("baskets")) == 1
    assert products.rows("baskets")[0]["brand_id"] == "adire-lagos"
    [item] = products.rows("basket_items")
    assert item["quantity"] == 3
    assert item["color"] == "Indigo"


@pytest.mark.asyncio
async def test_other_size_is_a_new_line(client: AsyncClient, products):
    await client.post("/api/v1/basket", json={"product_id": "p1", "size": "M"}, headers=CUSTOMER)
    await client.post("/api/v1/basket", json={"product_id": "p1", "size": "L"}, headers=CUSTOMER)

    assert sorted(item["size"] for item in products.rows("basket_items")) == ["L", "M"]
    assert len(products.rows("baskets")) == 1


@pytest.mark.asyncio
async def test_add_unknown_product(client: AsyncClient, products):
    response = await client.post("/api/v1/basket", json={"product_id": "missing"}, headers=CUSTOMER)

    assert response.status_code == 404
    assert products.rows("baskets") == []


@pytest.mark.asyncio
async def test_get_basket_totals(client: AsyncClient, filled):
    response = await client.get("/api/v1/basket", headers=CUSTOMER)

    assert response.status_code == 200
    data = response.json()
    assert {basket["id"] for basket in data["baskets"]} == {"b1", "b2"}
    assert data["total_items"] == 3
    # two wraps at the sale price plus one gown
    assert data["total_price"] == 2700
    lines = {item["id"]: item for basket in data["baskets"] for item in basket["basket_items"]}
    assert lines["i1"]["product"]["title"] == "Indigo wrap"


@pytest.mark.asyncio
async def test_update_quantity_only_on_own_items(client: AsyncClient, filled):
    foreign = await client.patch("/api/v1/basket/items/i3", json={"quantity": 5}, headers=CUSTOMER)
    own = await client.patch("/api/v1/basket/items/i1", json={"quantity": 5}, headers=CUSTOMER)
    zero = await client.patch("/api/v1/basket/items/i1", json={"quantity": 0}, headers=CUSTOMER)

    assert foreign.status_code == 404
    assert own.status_code == 200
    assert own.json()["quantity"] == 5
    assert zero.status_code == 400


@pytest.mark.asyncio
async def test_remove_item(client: AsyncClient, filled):
    response = await client.delete("/api/v1/basket/items/i2", headers=CUSTOMER)

    assert response.status_code == 200
    assert {item["id"] for item in filled.rows("basket_items")} == {"i1", "i3"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params, status_code",
    [
        ({}, 400),
        ({"basketId": "nope"}, 404),
        ({"basketId": "b3"}, 403),
    ],
)
async def test_clear_basket_rejections(client: AsyncClient, filled, params, status_code):
    response = await client.delete("/api/v1/basket/clear", params=params, headers=CUSTOMER)

    assert response.status_code == status_code
    assert len(filled.rows("baskets")) == 3


@pytest.mark.asyncio
async def test_clear_basket(client: AsyncClient, filled):
    response = await client.delete("/api/v1/basket/clear", params={"basketId": "b1"}, headers=CUSTOMER)

    assert response.status_code == 200
    assert response.json()["message"] == "Basket cleared successfully"
    assert {basket["id"] for basket in filled.rows("baskets")} == {"b2", "b3"}
    assert {item["id"] for item in filled.rows("basket_items")} == {"i2", "i3"}


@pytest.mark.asyncio
async def test_submit_creates_one_order_per_brand(client: AsyncClient, filled):
    filled.rows("brands")[0]["user_id"] = BRAND_OWNER_ID

    response = await client.post("/api/v1/basket/submit", headers=CUSTOMER)

    assert response.status_code == 200
    data = response.json()
    assert data["notifications_sent"] == 1
    assert {(order["brand_name"], order["total"]) for order in data["orders"]} == {
        ("Adire Lagos", 200),
        ("Kente Couture", 2500),
    }

    orders = filled.rows("orders")
    assert len(orders) == 2
    assert {order["currency"] for order in orders} == {"GBP"}
    assert {order["status"] for order in orders} == {"pending"}
    adire_order = next(order for order in orders if order["brand_id"] == "adire-lagos")
    [line] = [item for item in filled.rows("order_items") if item["order_id"] == adire_order["id"]]
    assert (line["quantity"], line["price"], line["size"], line["color"]) == (2, 100, "M", "Indigo")

    [notification] = filled.rows("notifications")
    assert notification["user_id"] == BRAND_OWNER_ID
    assert notification["type"] == "new_order"
    assert notification["message"] == "You have received a new order for £200.00 from ada"

    # only the customer's baskets are emptied
    assert [basket["id"] for basket in filled.rows("baskets")] == ["b3"]
    assert [item["id"] for item in filled.rows("basket_items")] == ["i3"]


@pytest.mark.asyncio
async def test_submit_empty_basket(client: AsyncClient, products):
    response = await client.post("/api/v1/basket/submit", headers=CUSTOMER)

    assert response.status_code == 400
    assert response.json()["error"] == "Basket is empty"


@pytest.mark.asyncio
async def test_submit_keeps_basket_when_no_order_is_created(client: AsyncClient, filled):
    filled.fail("orders", "insert")

    response = await client.post("/api/v1/basket/submit", headers=CUSTOMER)

    assert response.status_code == 500
    assert response.json()["error"] == "No valid orders could be created"
    assert len(filled.rows("baskets")) == 3
    assert len(filled.rows("basket_items")) == 3


@pytest.mark.asyncio
async def test_owner_only_sees_own_basket(client: AsyncClient, filled):
    response = await client.get("/api/v1/basket", headers=OWNER)

    assert [basket["id"] for basket in response.json()["baskets"]] == ["b3"]
