"""
Tests for comment moderation: who may comment, the edit window, soft delete
and admin restore.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from explorewithme.core.dates import now
from explorewithme.main_service.models import Comment
from factories import make_event


async def _comment(client: AsyncClient, user_id: int, event_id: int, text: str = "Great lineup this year!"):
    return await client.post(f"/users/{user_id}/events/{event_id}/comments", json={"text": text})


@pytest.mark.asyncio
async def test_add_comment(client: AsyncClient, published_event, participant):
    response = await _comment(client, participant.id, published_event.id)
    assert response.status_code == 201
    data = response.json()
    assert data["text"] == "Great lineup this year!"
    assert data["author"] == {"id": participant.id, "name": participant.name}
    assert data["eventId"] == published_event.id
    assert data["edited"] is False
    assert data["isDeleted"] is False
    assert data["updatedOn"] is None


@pytest.mark.asyncio
async def test_comment_requires_published_event(client: AsyncClient, pending_event, participant):
    response = await _comment(client, participant.id, pending_event.id)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_comment_disabled(client: AsyncClient, db_session, initiator, participant, category):
    event = await make_event(db_session, initiator, category, comments_enabled=False)
    response = await _comment(client, participant.id, event.id)
    assert response.status_code == 409

    response = await client.get(f"/events/{event.id}/comments")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_comment_blank_text(client: AsyncClient, published_event, participant):
    response = await _comment(client, participant.id, published_event.id, text="   ")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_comment_unknown_user_or_event(client: AsyncClient, published_event, participant):
    assert (await _comment(client, 9999, published_event.id)).status_code == 404
    assert (await _comment(client, participant.id, 9999)).status_code == 404


@pytest.mark.asyncio
async def test_edit_comment(client: AsyncClient, published_event, participant):
    comment_id = (await _comment(client, participant.id, published_event.id)).json()["id"]

    response = await client.patch(
        f"/users/{participant.id}/comments/{comment_id}",
        json={"text": "Great lineup, see you there"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["text"] == "Great lineup, see you there"
    assert data["edited"] is True
    assert data["updatedOn"] is not None


@pytest.mark.asyncio
async def test_edit_window_expired(client: AsyncClient, db_session, published_event, participant):
    comment = Comment(
        text="Old comment",
        author_id=participant.id,
        event_id=published_event.id,
        created_on=now() - timedelta(hours=7),
    )
    db_session.add(comment)
    await db_session.commit()

    response = await client.patch(f"/users/{participant.id}/comments/{comment.id}", json={"text": "Too late"})
    assert response.status_code == 409
    assert "edit window" in response.json()["message"]


@pytest.mark.asyncio
async def test_edit_foreign_comment(client: AsyncClient, published_event, participant, other_user):
    comment_id = (await _comment(client, participant.id, published_event.id)).json()["id"]
    response = await client.patch(f"/users/{other_user.id}/comments/{comment_id}", json={"text": "Hijacked"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_edit_deleted_comment(client: AsyncClient, published_event, participant):
    comment_id = (await _comment(client, participant.id, published_event.id)).json()["id"]
    await client.delete(f"/users/{participant.id}/comments/{comment_id}")

    response = await client.patch(f"/users/{participant.id}/comments/{comment_id}", json={"text": "Back again"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_is_soft(client: AsyncClient, db_session, published_event, participant):
    comment_id = (await _comment(client, participant.id, published_event.id)).json()["id"]

    response = await client.delete(f"/users/{participant.id}/comments/{comment_id}")
    assert response.status_code == 204

    response = await client.get(f"/events/{published_event.id}/comments")
    assert response.json() == []

    result = await db_session.execute(
        select(Comment).where(Comment.id == comment_id).execution_options(populate_existing=True)
    )
    assert result.scalar_one().is_deleted is True

    # deleting twice is harmless
    response = await client.delete(f"/users/{participant.id}/comments/{comment_id}")
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_delete_foreign_comment(client: AsyncClient, published_event, participant, other_user):
    comment_id = (await _comment(client, participant.id, published_event.id)).json()["id"]
    response = await client.delete(f"/users/{other_user.id}/comments/{comment_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_admin_delete_and_restore(client: AsyncClient, published_event, participant):
    comment_id = (await _comment(client, participant.id, published_event.id)).json()["id"]

    response = await client.delete(f"/admin/comments/{comment_id}")
    assert response.status_code == 204

    response = await client.patch(f"/admin/comments/{comment_id}/restore")
    assert response.status_code == 200
    assert response.json()["isDeleted"] is False

    response = await client.get(f"/events/{published_event.id}/comments")
    assert [c["id"] for c in response.json()] == [comment_id]


@pytest.mark.asyncio
async def test_restore_is_idempotent(client: AsyncClient, published_event, participant):
    comment_id = (await _comment(client, participant.id, published_event.id)).json()["id"]

    for _ in range(2):
        response = await client.patch(f"/admin/comments/{comment_id}/restore")
        assert response.status_code == 200
        assert response.json()["isDeleted"] is False


@pytest.mark.asyncio
async def test_admin_comment_unknown(client: AsyncClient):
    assert (await client.delete("/admin/comments/9999")).status_code == 404
    assert (await client.patch("/admin/comments/9999/restore")).status_code == 404


@pytest.mark.asyncio
async def test_event_comments_sorted(client: AsyncClient, db_session, published_event, participant):
    for hours, text in [(3, "first"), (2, "second"), (1, "third")]:
        db_session.add(Comment(
            text=text,
            author_id=participant.id,
            event_id=published_event.id,
            created_on=now() - timedelta(hours=hours),
        ))
    await db_session.commit()

    response = await client.get(f"/events/{published_event.id}/comments")
    assert [c["text"] for c in response.json()] == ["third", "second", "first"]

    response = await client.get(f"/events/{published_event.id}/comments", params={"sort": "createdOn,ASC"})
    assert [c["text"] for c in response.json()] == ["first", "second", "third"]

    response = await client.get(f"/events/{published_event.id}/comments", params={"size": 1, "from": 1})
    assert [c["text"] for c in response.json()] == ["second"]

    response = await client.get(f"/events/{published_event.id}/comments", params={"sort": "author"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_event_comments_unknown_event(client: AsyncClient):
    response = await client.get("/events/9999/comments")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_user_comments(client: AsyncClient, published_event, participant, other_user):
    mine = (await _comment(client, participant.id, published_event.id)).json()["id"]
    await _comment(client, other_user.id, published_event.id)

    response = await client.get(f"/users/{participant.id}/comments")
    assert [c["id"] for c in response.json()] == [mine]

    assert (await client.get("/users/9999/comments")).status_code == 404


@pytest.mark.asyncio
async def test_comment_publish_scenario(client: AsyncClient, pending_event, participant, other_user):
    """Comment on an unpublished event fails, succeeds once published, survives a foreign delete."""
    response = await _comment(client, participant.id, pending_event.id)
    assert response.status_code == 409

    response = await client.patch(f"/admin/events/{pending_event.id}", json={"stateAction": "PUBLISH_EVENT"})
    assert response.json()["state"] == "PUBLISHED"

    response = await _comment(client, participant.id, pending_event.id)
    assert response.status_code == 201
    comment_id = response.json()["id"]

    response = await client.delete(f"/users/{other_user.id}/comments/{comment_id}")
    assert response.status_code == 404
