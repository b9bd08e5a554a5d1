"""End-to-end flow through the real ProductService and SQLite."""

from decimal import Decimal

import pytest


BASE = "/api/products"


async def create(client, name, price, category, description=None):
    response = await client.post(
        BASE,
        json={"name": name, "description": description, "price": price, "category": category},
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_product_lifecycle(db_client):
    chair = await create(db_client, "Chair", 49.99, "furniture", "oak")
    lamp = await create(db_client, "Lamp", 24.5, "lighting")

    response = await db_client.get(f"{BASE}/{chair['id']}")
    assert response.status_code == 200
    assert response.json()["description"] == "oak"

    response = await db_client.get(f"{BASE}/total-count")
    assert response.json() == 2

    response = await db_client.put(
        f"{BASE}/{chair['id']}",
        json={"name": "Armchair", "description": None, "price": 150, "category": "living"},
    )
    assert response.status_code == 204

    response = await db_client.get(f"{BASE}/{chair['id']}")
    updated = response.json()
    assert updated["name"] == "Armchair"
    assert updated["description"] is None
    assert Decimal(str(updated["price"])) == Decimal("150")

    response = await db_client.get(f"{BASE}/sort", params={"criteria": "price", "order": "desc"})
    assert [p["id"] for p in response.json()] == [chair["id"], lamp["id"]]

    response = await db_client.get(f"{BASE}/category/living")
    assert [p["name"] for p in response.json()] == ["Armchair"]

    response = await db_client.get(f"{BASE}/search", params={"name": "arm"})
    assert response.status_code == 200

    response = await db_client.delete(f"{BASE}/{lamp['id']}")
    assert response.status_code == 204

    response = await db_client.delete(f"{BASE}/{lamp['id']}")
    assert response.status_code == 404

    response = await db_client.delete(BASE)
    assert response.status_code == 204

    response = await db_client.get(BASE)
    assert response.json() == []


@pytest.mark.asyncio
async def test_update_missing_product_is_404(db_client):
    response = await db_client.put(
        f"{BASE}/999",
        json={"name": "Ghost", "description": None, "price": 1, "category": "none"},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_empty_results(db_client):
    await create(db_client, "Chair", 49.99, "furniture")

    assert (await db_client.get(f"{BASE}/search", params={"name": "sofa"})).status_code == 400
    assert (await db_client.get(f"{BASE}/category/garden")).status_code == 404


@pytest.mark.asyncio
async def test_responses_carry_request_id(db_client):
    response = await db_client.get(BASE, headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["%", "_", "C%r"])
async def test_search_treats_wildcards_literally(db_client, term):
    await create(db_client, "Chair", 49.99, "furniture")
    await create(db_client, "Lamp", 24.5, "lighting")

    response = await db_client.get(f"{BASE}/search", params={"name": term})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_search_matches_literal_percent(db_client):
    await create(db_client, "100% Wool Rug", 120, "decor")
    await create(db_client, "Wool Blanket", 60, "bedroom")

    response = await db_client.get(f"{BASE}/search", params={"name": "0%"})

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["100% Wool Rug"]


@pytest.mark.asyncio
async def test_extra_price_precision_is_stored_rounded(db_client):
    product = await create(db_client, "Pen", 3.999, "office")

    response = await db_client.get(f"{BASE}/{product['id']}")

    assert response.status_code == 200
    assert Decimal(str(response.json()["price"])) == Decimal("4.00")
