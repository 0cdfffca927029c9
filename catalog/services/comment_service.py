import logging
from typing import Optional, Sequence

from app.core.errors import ValidationError
from catalog.domain.entities import CommentCreate
from catalog.domain.models.comment import CommentStatus
from shared.abstracts.abstract_repository import AbstractRepository
from shared.entities.comment import CommentOut

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(
        self,
        repo: AbstractRepository,
        default_status: str = CommentStatus.approved.value,
        documentaries: Optional[AbstractRepository] = None,
    ):
        self.repo = repo
        self.default_status = CommentStatus(default_status)
        self.documentaries = documentaries

    async def create(self, payload: CommentCreate) -> CommentOut:
        if payload.documentary_id is not None and self.documentaries is not None:
            if await self.documentaries.get(payload.documentary_id) is None:
                raise ValidationError(f"documentary_id: no documentary with id {payload.documentary_id}")
        obj = await self.repo.insert(payload, status=self.default_status)
        logger.info("Comment created id=%s status=%s documentary_id=%s", obj.id, obj.status.value, obj.documentary_id)
        return CommentOut.model_validate(obj)

    async def list(self, status: str | None = CommentStatus.approved.value, documentary_id: int | None = None) -> Sequence[CommentOut]:
        rows = await self.repo.list(status=status, documentary_id=documentary_id)
        return [CommentOut.model_validate(row) for row in rows]
