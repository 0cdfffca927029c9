from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DocumentaryOut(BaseModel):
    id: int
    title: str
    description: str
    category: str
    image_url: str
    video_url: Optional[str] = None
    pdf_url: Optional[str] = None
    rating: float
    downloads: int
    duration: Optional[str] = None
    date_added: Optional[datetime] = None

    class Config:
        from_attributes = True


class MessageOut(BaseModel):
    message: str
