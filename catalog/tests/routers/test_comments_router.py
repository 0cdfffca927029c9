import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from catalog.domain.models.comment import Comment, CommentStatus


def _comment(**overrides):
    body = {"author": "Sarah Johnson", "email": "sarah@example.com", "text": "Breathtaking!"}
    body.update(overrides)
    return body

async def _count(db: AsyncSession) -> int:
    res = await db.execute(select(func.count()).select_from(Comment))
    return int(res.scalar_one())


@pytest.fixture
def pending_by_default(monkeypatch):
    # Given: a deployment that moderates comments before they are listed
    monkeypatch.setattr(settings, "comment_default_status", "pending")


# ==============================================================================
# Create
# ==============================================================================

@pytest.mark.asyncio
async def test_should_create_and_list_comment_when_fields_present(client: AsyncClient):
    # WHEN
    r = await client.post("/api/comments", json=_comment())

    # THEN
    assert r.status_code == 200
    body = r.json()
    assert body["author"] == "Sarah Johnson"
    assert body["status"] == "approved"                  # -> default deployment policy
    assert body["documentary_id"] is None

    listed = (await client.get("/api/comments")).json()
    assert [c["id"] for c in listed] == [body["id"]]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["author", "email", "text"])
async def test_should_reject_comment_missing_field(client: AsyncClient, db_session: AsyncSession, missing):
    # GIVEN
    payload = _comment()
    payload.pop(missing)

    # WHEN
    r = await client.post("/api/comments", json=payload)

    # THEN
    assert r.status_code == 400
    assert await _count(db_session) == 0


@pytest.mark.asyncio
async def test_should_reject_comment_on_unknown_documentary(client: AsyncClient, db_session: AsyncSession):
    # WHEN
    r = await client.post("/api/comments", json=_comment(documentary_id=9999))

    # THEN
    assert r.status_code == 400
    assert "documentary_id" in r.json()["detail"]
    assert await _count(db_session) == 0                 # -> no dangling reference stored


@pytest.mark.asyncio
async def test_should_reject_malformed_email(client: AsyncClient, db_session: AsyncSession):
    r = await client.post("/api/comments", json=_comment(email="not-an-email"))
    assert r.status_code == 400
    assert await _count(db_session) == 0


# ==============================================================================
# Listing and moderation
# ==============================================================================

@pytest.mark.asyncio
async def test_should_list_newest_first(client: AsyncClient):
    first = (await client.post("/api/comments", json=_comment(text="one"))).json()
    second = (await client.post("/api/comments", json=_comment(text="two"))).json()

    listed = (await client.get("/api/comments")).json()

    assert [c["id"] for c in listed] == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_should_hide_pending_comment_until_it_qualifies(client: AsyncClient, pending_by_default, admin_headers):
    # WHEN
    created = (await client.post("/api/comments", json=_comment())).json()

    # THEN
    assert created["status"] == "pending"
    assert (await client.get("/api/comments")).json() == []                   # -> default filter is approved
    queue = (await client.get("/api/comments", params={"status": "pending"}, headers=admin_headers)).json()
    assert [c["id"] for c in queue] == [created["id"]]


@pytest.mark.asyncio
async def test_should_require_token_for_pending_listing(client: AsyncClient, user_headers):
    anonymous = await client.get("/api/comments", params={"status": "pending"})
    as_user = await client.get("/api/comments", params={"status": "pending"}, headers=user_headers)

    assert anonymous.status_code == 401
    assert as_user.status_code == 403


@pytest.mark.asyncio
async def test_should_reject_unknown_status_filter(client: AsyncClient):
    r = await client.get("/api/comments", params={"status": "spam"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_should_filter_by_documentary(client: AsyncClient, db_session: AsyncSession):
    # GIVEN
    db_session.add_all([
        Comment(author="A", email="a@example.com", text="x", status=CommentStatus.approved, documentary_id=1),
        Comment(author="B", email="b@example.com", text="y", status=CommentStatus.approved, documentary_id=2),
    ])
    await db_session.commit()

    # WHEN
    r = await client.get("/api/comments", params={"documentary_id": 2})

    # THEN
    assert [c["author"] for c in r.json()] == ["B"]
