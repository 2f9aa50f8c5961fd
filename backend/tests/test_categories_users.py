"""
Tests for admin user and category management and the public category API.
"""

import pytest
from httpx import AsyncClient

from explorewithme.main_service.services import cache_service
from factories import make_event


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_user(client: AsyncClient):
    response = await client.post("/admin/users", json={"name": "Anna Admin", "email": "anna@example.com"})
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Anna Admin"
    assert data["email"] == "anna@example.com"
    assert "id" in data


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, participant):
    response = await client.post("/admin/users", json={"name": "Someone", "email": participant.email})
    assert response.status_code == 409
    assert response.json()["reason"] == "Integrity constraint has been violated."


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"name": "A", "email": "short@example.com"},
    {"name": "Valid Name", "email": "not-an-email"},
    {"name": "Valid Name"},
])
async def test_create_user_invalid(client: AsyncClient, body):
    response = await client.post("/admin/users", json=body)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_users(client: AsyncClient, initiator, participant, other_user):
    response = await client.get("/admin/users")
    assert [u["id"] for u in response.json()] == [initiator.id, participant.id, other_user.id]

    response = await client.get("/admin/users", params={"ids": [other_user.id, initiator.id]})
    assert [u["id"] for u in response.json()] == [initiator.id, other_user.id]

    response = await client.get("/admin/users", params={"ids": f"{other_user.id},{initiator.id}"})
    assert [u["id"] for u in response.json()] == [initiator.id, other_user.id]

    response = await client.get("/admin/users", params={"from": 1, "size": 1})
    assert [u["id"] for u in response.json()] == [participant.id]


@pytest.mark.asyncio
async def test_update_user(client: AsyncClient, participant, other_user):
    response = await client.patch(f"/admin/users/{participant.id}", json={"name": "Paul Renamed"})
    assert response.status_code == 200
    assert response.json()["name"] == "Paul Renamed"
    assert response.json()["email"] == participant.email

    response = await client.patch(f"/admin/users/{participant.id}", json={"email": other_user.email})
    assert response.status_code == 409

    response = await client.patch("/admin/users/9999", json={"name": "Nobody"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, participant):
    response = await client.delete(f"/admin/users/{participant.id}")
    assert response.status_code == 204

    response = await client.get("/admin/users", params={"ids": [participant.id]})
    assert response.json() == []

    response = await client.delete(f"/admin/users/{participant.id}")
    assert response.status_code == 404


# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_category(client: AsyncClient):
    response = await client.post("/admin/categories", json={"name": "Theatre"})
    assert response.status_code == 201
    category_id = response.json()["id"]

    response = await client.get(f"/categories/{category_id}")
    assert response.json() == {"id": category_id, "name": "Theatre"}


@pytest.mark.asyncio
async def test_category_name_unique_ignoring_case(client: AsyncClient, category):
    response = await client.post("/admin/categories", json={"name": "MUSIC"})
    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "x" * 51])
async def test_create_category_invalid(client: AsyncClient, name):
    response = await client.post("/admin/categories", json={"name": name})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_category(client: AsyncClient, category):
    # renaming to its own name in another case is not a conflict
    response = await client.patch(f"/admin/categories/{category.id}", json={"name": "music"})
    assert response.status_code == 200
    assert response.json()["name"] == "music"

    other = (await client.post("/admin/categories", json={"name": "Sports"})).json()
    response = await client.patch(f"/admin/categories/{other['id']}", json={"name": "Music"})
    assert response.status_code == 409

    response = await client.patch("/admin/categories/9999", json={"name": "Nothing"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_category(client: AsyncClient, category):
    response = await client.delete(f"/admin/categories/{category.id}")
    assert response.status_code == 204

    response = await client.get(f"/categories/{category.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_category_in_use(client: AsyncClient, db_session, initiator, category):
    await make_event(db_session, initiator, category)
    response = await client.delete(f"/admin/categories/{category.id}")
    assert response.status_code == 409
    assert "not empty" in response.json()["message"]


@pytest.mark.asyncio
async def test_list_categories(client: AsyncClient):
    for name in ["Music", "Sports", "Theatre"]:
        await client.post("/admin/categories", json={"name": name})

    response = await client.get("/categories")
    assert [c["name"] for c in response.json()] == ["Music", "Sports", "Theatre"]

    response = await client.get("/categories", params={"from": 2, "size": 5})
    assert [c["name"] for c in response.json()] == ["Theatre"]


@pytest.mark.asyncio
async def test_list_categories_served_from_cache(client: AsyncClient, monkeypatch):
    """A cached page is returned without touching the database."""
    cached_page = [{"id": 42, "name": "Cached"}]

    async def fake_get(from_, size):
        return cached_page if (from_, size) == (0, 10) else None

    monkeypatch.setattr(
        "explorewithme.main_service.services.category_service.get_cached_categories", fake_get
    )
    response = await client.get("/categories")
    assert response.json() == cached_page


@pytest.mark.asyncio
async def test_cache_disabled_is_noop():
    assert await cache_service.get_redis() is None
    assert await cache_service.get_cached_categories(0, 10) is None
    await cache_service.set_cached_categories(0, 10, [])
    await cache_service.invalidate_category_cache()
    assert await cache_service.get_cache_stats() == {"status": "disabled"}


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["cache"] == {"status": "disabled"}
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_metrics(client: AsyncClient):
    await client.post("/admin/categories", json={"name": "Music"})
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "ewm_events_created_total" in response.text
