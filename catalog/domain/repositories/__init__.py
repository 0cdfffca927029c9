from catalog.domain.repositories.documentary_repository import DocumentaryRepository
from catalog.domain.repositories.comment_repository import CommentRepository

__all__ = ["DocumentaryRepository", "CommentRepository"]
