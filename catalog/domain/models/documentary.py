from __future__ import annotations
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database.base import Base
from shared.categories import Category

__all__ = ["Category", "Documentary"]


class Documentary(Base):
    __tablename__ = "documentaries"
    __table_args__ = (
        CheckConstraint("downloads >= 0", name="ck_documentaries_downloads_non_negative"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_documentaries_rating_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # stored as the plain category value so new tags need no schema change
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    pdf_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=4.0, server_default="4.0")
    downloads: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    duration: Mapped[str | None] = mapped_column(String(64), nullable=True)

    date_added: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
