from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from catalog.domain.models.comment import CommentStatus


class CommentOut(BaseModel):
    id: int
    author: str
    email: str
    text: str
    status: CommentStatus
    documentary_id: Optional[int] = None
    date_added: Optional[datetime] = None

    class Config:
        from_attributes = True
