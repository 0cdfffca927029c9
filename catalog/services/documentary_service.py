import logging
from typing import Optional, Sequence

from app.core.errors import NotFoundError, ValidationError
from catalog.domain.entities import DocumentaryCreate
from shared.abstracts.abstract_repository import AbstractRepository
from shared.entities.documentary import DocumentaryOut
from shared.media_policy import MediaUrlPolicy

logger = logging.getLogger(__name__)


class DocumentaryService:
    """
    Catalog reads and admin writes. No caching: every write is visible to the next read.
    """

    def __init__(self, repo: AbstractRepository, policy: Optional[MediaUrlPolicy] = None):
        self.repo = repo
        self.policy = policy or MediaUrlPolicy()

    # ---------- Mutations ----------

    async def create(self, payload: DocumentaryCreate) -> DocumentaryOut:
        self._check_media(payload)
        obj = await self.repo.insert(payload)
        logger.info("Documentary created id=%s title=%r category=%s", obj.id, obj.title, obj.category)
        return DocumentaryOut.model_validate(obj)

    async def delete(self, documentary_id: int) -> bool:
        ok = await self.repo.delete(documentary_id)
        if ok:
            logger.info("Documentary deleted id=%s", documentary_id)
        else:
            logger.debug("Delete of missing documentary id=%s ignored", documentary_id)
        return ok

    async def track_download(self, documentary_id: int) -> bool:
        return await self.repo.increment_downloads(documentary_id)

    # ---------- Queries ----------

    async def get(self, documentary_id: int) -> DocumentaryOut:
        obj = await self.repo.get(documentary_id)
        if not obj:
            raise NotFoundError()
        return DocumentaryOut.model_validate(obj)

    async def list(self, category: str | None = None) -> Sequence[DocumentaryOut]:
        rows = await self.repo.list(category=category)
        return [DocumentaryOut.model_validate(row) for row in rows]

    # ---------- Internal helpers ----------

    def _check_media(self, payload: DocumentaryCreate) -> None:
        if not self.policy.is_valid_image(payload.image_url):
            raise ValidationError("image_url must be an image file URL or a supported image host")
        if not self.policy.is_valid_video(payload.video_url):
            raise ValidationError("video_url must be a YouTube, Vimeo, or direct video URL")
        if not self.policy.is_valid_pdf(payload.pdf_url):
            raise ValidationError("pdf_url must be a PDF file URL or a supported document host")
