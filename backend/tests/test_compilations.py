"""
Tests for compilations: whole-set event replacement, title uniqueness and
the public listing.
"""

import pytest
from httpx import AsyncClient

from factories import make_event


@pytest.mark.asyncio
async def test_save_compilation(client: AsyncClient, db_session, initiator, category):
    first = await make_event(db_session, initiator, category)
    second = await make_event(db_session, initiator, category)

    response = await client.post(
        "/admin/compilations",
        json={"title": "Summer nights", "pinned": True, "events": [second.id, first.id]},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Summer nights"
    assert data["pinned"] is True
    assert [e["id"] for e in data["events"]] == [first.id, second.id]
    assert data["events"][0]["confirmedRequests"] == 0
    assert data["events"][0]["views"] == 0


@pytest.mark.asyncio
async def test_save_compilation_defaults(client: AsyncClient):
    response = await client.post("/admin/compilations", json={"title": "Empty"})
    assert response.status_code == 201
    assert response.json()["pinned"] is False
    assert response.json()["events"] == []


@pytest.mark.asyncio
async def test_compilation_title_unique(client: AsyncClient):
    await client.post("/admin/compilations", json={"title": "Best of"})
    response = await client.post("/admin/compilations", json={"title": "  best OF "})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_compilation_unknown_event(client: AsyncClient):
    response = await client.post("/admin/compilations", json={"title": "Broken", "events": [9999]})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_compilation_replaces_events(client: AsyncClient, db_session, initiator, category):
    first = await make_event(db_session, initiator, category)
    second = await make_event(db_session, initiator, category)
    compilation = (await client.post(
        "/admin/compilations", json={"title": "Weekend", "events": [first.id]},
    )).json()

    response = await client.patch(f"/admin/compilations/{compilation['id']}", json={"events": [second.id]})
    assert response.status_code == 200
    assert [e["id"] for e in response.json()["events"]] == [second.id]
    assert response.json()["title"] == "Weekend"

    response = await client.patch(f"/admin/compilations/{compilation['id']}", json={"pinned": True})
    assert response.json()["pinned"] is True
    assert [e["id"] for e in response.json()["events"]] == [second.id]

    response = await client.patch(f"/admin/compilations/{compilation['id']}", json={"events": []})
    assert response.json()["events"] == []


@pytest.mark.asyncio
async def test_update_compilation_title(client: AsyncClient):
    first = (await client.post("/admin/compilations", json={"title": "First"})).json()
    await client.post("/admin/compilations", json={"title": "Second"})

    response = await client.patch(f"/admin/compilations/{first['id']}", json={"title": "first"})
    assert response.status_code == 200

    response = await client.patch(f"/admin/compilations/{first['id']}", json={"title": "SECOND"})
    assert response.status_code == 409

    response = await client.patch("/admin/compilations/9999", json={"title": "Nothing"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_compilation(client: AsyncClient, published_event):
    compilation = (await client.post(
        "/admin/compilations", json={"title": "Gone soon", "events": [published_event.id]},
    )).json()

    response = await client.delete(f"/admin/compilations/{compilation['id']}")
    assert response.status_code == 204

    response = await client.get(f"/compilations/{compilation['id']}")
    assert response.status_code == 404

    # the events themselves are untouched
    response = await client.get(f"/events/{published_event.id}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_public_compilations(client: AsyncClient, published_event):
    pinned = (await client.post(
        "/admin/compilations", json={"title": "Pinned", "pinned": True, "events": [published_event.id]},
    )).json()
    unpinned = (await client.post("/admin/compilations", json={"title": "Unpinned"})).json()

    response = await client.get("/compilations")
    assert [c["id"] for c in response.json()] == [pinned["id"], unpinned["id"]]

    response = await client.get("/compilations", params={"pinned": "true"})
    assert [c["id"] for c in response.json()] == [pinned["id"]]

    response = await client.get("/compilations", params={"pinned": "false", "size": 1})
    assert [c["id"] for c in response.json()] == [unpinned["id"]]

    await client.get(f"/events/{published_event.id}")
    response = await client.get(f"/compilations/{pinned['id']}")
    assert response.json()["events"][0]["views"] == 1
