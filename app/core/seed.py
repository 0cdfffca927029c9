"""
Startup seeding: the admin account, the demo end-user, and the sample catalog.

Every step is idempotent; the sample rows are only written into empty tables.
"""
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from catalog.domain.models.comment import Comment, CommentStatus
from catalog.domain.models.documentary import Documentary
from catalog.domain.repositories import CommentRepository, DocumentaryRepository
from shared.samples import SAMPLE_COMMENTS, SAMPLE_DOCUMENTARIES
from users.repositories import AdminUserRepository, UserRepository
from users.services.user_service import UserService

logger = logging.getLogger(__name__)


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def seed_sample_catalog(db: AsyncSession) -> int:
    """Insert the sample documentaries and comments when their tables are empty. Returns rows written."""
    written = 0
    doc_ids = {}
    if await DocumentaryRepository(db).count() == 0:
        for sample in SAMPLE_DOCUMENTARIES:
            doc = Documentary(
                title=sample["title"],
                description=sample["description"],
                category=sample["category"],
                image_url=sample["image_url"],
                video_url=sample["video_url"],
                rating=sample["rating"],
                downloads=sample["downloads"],
                duration=sample["duration"],
                date_added=_parse_ts(sample["date_added"]),
            )
            db.add(doc)
            await db.flush()
            doc_ids[sample["id"]] = doc.id
            written += 1

    if await CommentRepository(db).count() == 0:
        for sample in SAMPLE_COMMENTS:
            db.add(
                Comment(
                    author=sample["author"],
                    email=sample["email"],
                    text=sample["text"],
                    status=CommentStatus(sample["status"]),
                    # comments only point at samples seeded in this same run
                    documentary_id=doc_ids.get(sample["documentary_id"]),
                    date_added=_parse_ts(sample["date_added"]),
                )
            )
            written += 1

    await db.commit()
    if written:
        logger.info("Seeded %d sample rows", written)
    return written


async def seed_database(db: AsyncSession, settings: Settings) -> None:
    users = UserService(UserRepository(db), AdminUserRepository(db))
    await users.ensure_admin(settings.admin_username, settings.admin_password)
    await users.ensure_user(settings.demo_user_name, settings.demo_user_email, settings.demo_user_password)
    if settings.seed_sample_data:
        await seed_sample_catalog(db)
