from typing import Optional, Sequence

from sqlalchemy import select, delete, func, update as sa_update

from catalog.domain.entities import DocumentaryCreate
from catalog.domain.models.comment import Comment
from catalog.domain.models.documentary import Documentary
from shared.abstracts.abstract_repository import AbstractRepository


class DocumentaryRepository(AbstractRepository):

    async def insert(self, payload: DocumentaryCreate) -> Documentary:
        obj = Documentary(
            title=payload.title,
            description=payload.description,
            category=payload.category.value,
            image_url=payload.image_url,
            video_url=payload.video_url,
            pdf_url=payload.pdf_url,
            duration=payload.duration,
            rating=payload.rating,
            downloads=0,
        )
        self.db.add(obj)
        await self.commit(obj)
        return obj

    async def get(self, documentary_id: int) -> Optional[Documentary]:
        res = await self.db.execute(select(Documentary).where(Documentary.id == documentary_id))
        return res.scalars().first()

    async def update(self, documentary_id: int, **values) -> Optional[Documentary]:
        values = {k: v for k, v in values.items() if k not in ("id", "downloads", "date_added")}
        if values:
            await self.db.execute(
                sa_update(Documentary).where(Documentary.id == documentary_id).values(**values)
            )
            await self.db.commit()
        obj = await self.get(documentary_id)
        if obj is not None:
            await self.db.refresh(obj)
        return obj

    async def delete(self, documentary_id: int) -> bool:
        # detach comments first; SQLite does not enforce ON DELETE unless foreign_keys is on
        await self.db.execute(
            sa_update(Comment).where(Comment.documentary_id == documentary_id).values(documentary_id=None)
        )
        res = await self.db.execute(delete(Documentary).where(Documentary.id == documentary_id))
        await self.db.commit()
        # rowcount can be None on some DBs; coerce safely
        return bool(getattr(res, "rowcount", 0))

    async def increment_downloads(self, documentary_id: int) -> bool:
        """Single UPDATE statement, so concurrent increments never lose a count."""
        res = await self.db.execute(
            sa_update(Documentary)
            .where(Documentary.id == documentary_id)
            .values(downloads=Documentary.downloads + 1)
        )
        await self.db.commit()
        return bool(getattr(res, "rowcount", 0))

    async def list(self, **filters) -> Sequence[Documentary]:
        category = filters.get("category", None)
        limit = filters.get("limit", None)
        offset = filters.get("offset", None)

        stmt = select(Documentary)
        if category:
            stmt = stmt.where(Documentary.category == category)
        stmt = stmt.order_by(Documentary.date_added.desc(), Documentary.id.desc()).limit(limit).offset(offset)

        res = await self.db.execute(stmt)
        return res.scalars().all()

    async def count(self) -> int:
        res = await self.db.execute(select(func.count()).select_from(Documentary))
        return int(res.scalar_one())
