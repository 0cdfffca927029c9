from catalog.domain.entities.documentary import DocumentaryBase, DocumentaryCreate
from catalog.domain.entities.comment import CommentCreate, CommentStatus

__all__ = ["DocumentaryBase", "DocumentaryCreate", "CommentCreate", "CommentStatus"]
