from pydantic import BaseModel, Field, constr, field_validator
from typing import Optional

from shared.categories import Category

NonBlank = constr(strip_whitespace=True, min_length=1)

class DocumentaryBase(BaseModel):
    title: constr(strip_whitespace=True, min_length=1, max_length=255)
    description: NonBlank
    category: Category
    image_url: NonBlank
    video_url: Optional[str] = None
    pdf_url: Optional[str] = None
    duration: Optional[constr(strip_whitespace=True, max_length=64)] = None
    rating: float = Field(default=4.0, ge=0, le=5)

    @field_validator("video_url", "pdf_url", "duration", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

class DocumentaryCreate(DocumentaryBase):
    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Wilderness Untamed",
                "description": "Explore the last remaining wilderness areas on Earth.",
                "category": "nature",
                "image_url": "https://images.unsplash.com/photo-1441974231531-c6227db76b6e",
                "video_url": "https://www.youtube.com/watch?v=7n7bw6luneo",
                "duration": "45 min",
                "rating": 4.5,
            }
        }
    }
