from typing import Optional, Sequence

from sqlalchemy import select, func

from catalog.domain.entities import CommentCreate
from catalog.domain.models.comment import Comment, CommentStatus
from shared.abstracts.abstract_repository import AbstractRepository


class CommentRepository(AbstractRepository):

    async def insert(self, payload: CommentCreate, status: CommentStatus = CommentStatus.approved) -> Comment:
        obj = Comment(
            author=payload.author,
            email=str(payload.email),
            text=payload.text,
            documentary_id=payload.documentary_id,
            status=status,
        )
        self.db.add(obj)
        await self.commit(obj)
        return obj

    async def get(self, comment_id: int) -> Optional[Comment]:
        res = await self.db.execute(select(Comment).where(Comment.id == comment_id))
        return res.scalars().first()

    async def list(self, **filters) -> Sequence[Comment]:
        status = filters.get("status", None)
        documentary_id = filters.get("documentary_id", None)
        limit = filters.get("limit", None)
        offset = filters.get("offset", None)

        stmt = select(Comment)
        if status:
            stmt = stmt.where(Comment.status == CommentStatus(status))
        if documentary_id is not None:
            stmt = stmt.where(Comment.documentary_id == documentary_id)
        stmt = stmt.order_by(Comment.date_added.desc(), Comment.id.desc()).limit(limit).offset(offset)

        res = await self.db.execute(stmt)
        return res.scalars().all()

    async def count(self) -> int:
        res = await self.db.execute(select(func.count()).select_from(Comment))
        return int(res.scalar_one())
