from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.entities import DocumentaryCreate
from catalog.domain.repositories import DocumentaryRepository


def _create(**overrides) -> DocumentaryCreate:
    body = {"title": "T", "description": "D", "category": "nature", "image_url": "https://images.unsplash.com/x.jpg"}
    body.update(overrides)
    return DocumentaryCreate(**body)


@pytest.mark.asyncio
async def test_should_update_descriptive_fields(db_session: AsyncSession):
    # GIVEN
    repo = DocumentaryRepository(db_session)
    doc = await repo.insert(_create())

    # WHEN
    updated = await repo.update(doc.id, title="Renamed", rating=2.5, duration="50 min")

    # THEN
    assert updated.title == "Renamed"
    assert updated.rating == 2.5
    assert updated.duration == "50 min"
    assert (await repo.get(doc.id)).title == "Renamed"


@pytest.mark.asyncio
async def test_should_ignore_server_owned_fields_on_update(db_session: AsyncSession):
    # GIVEN
    repo = DocumentaryRepository(db_session)
    doc = await repo.insert(_create())
    await repo.increment_downloads(doc.id)
    original_id, original_added = doc.id, doc.date_added

    # WHEN
    updated = await repo.update(
        doc.id,
        id=original_id + 100,
        downloads=999,
        date_added=datetime(2000, 1, 1, tzinfo=timezone.utc),
        title="Kept counters",
    )

    # THEN
    assert updated.id == original_id
    assert updated.downloads == 1                        # -> only the counter endpoint changes downloads
    assert updated.date_added == original_added
    assert updated.title == "Kept counters"


@pytest.mark.asyncio
async def test_should_return_none_when_updating_missing_id(db_session: AsyncSession):
    repo = DocumentaryRepository(db_session)

    assert await repo.update(4242, title="Nope") is None
    assert await repo.count() == 0
