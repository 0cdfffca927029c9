from __future__ import annotations
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database.base import Base


class CommentStatus(str, Enum):
    pending = "pending"
    approved = "approved"


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[CommentStatus] = mapped_column(
        SAEnum(CommentStatus, name="comment_status", native_enum=False),
        default=CommentStatus.approved,
        nullable=False,
        index=True,
    )
    documentary_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("documentaries.id", ondelete="SET NULL"), nullable=True
    )

    date_added: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
