from catalog.domain.models.documentary import Category, Documentary
from catalog.domain.models.comment import Comment, CommentStatus

__all__ = ["Category", "Documentary", "Comment", "CommentStatus"]
