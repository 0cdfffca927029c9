from typing import List, Optional

import pydantic
from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_admin
from app.core.config import settings
from app.core.database.db import get_session
from app.core.errors import ValidationError, summarize_errors
from catalog.domain.entities import DocumentaryCreate
from shared.categories import Category
from catalog.domain.repositories import DocumentaryRepository
from catalog.services.documentary_service import DocumentaryService
from catalog.services.upload_service import UploadService
from shared.entities.documentary import DocumentaryOut, MessageOut
from shared.media_policy import MediaUrlPolicy

router = APIRouter(prefix="/api/documentaries", tags=["documentaries"])

_AUTH_RESPONSES = {
    401: {
        "description": "Missing, invalid, expired, or non-admin token.",
        "content": {"application/json": {"examples": {"invalid": {"value": {"detail": "invalid_token"}}}}},
        "headers": {
            "WWW-Authenticate": {
                "schema": {"type": "string"},
                "description": "Authentication scheme (Bearer).",
            }
        },
    },
}

_EXAMPLE = {
    "id": 4,
    "title": "Wilderness Untamed",
    "description": "Explore the last remaining wilderness areas on Earth.",
    "category": "nature",
    "image_url": "https://images.unsplash.com/photo-1441974231531-c6227db76b6e",
    "video_url": "https://www.youtube.com/watch?v=7n7bw6luneo",
    "pdf_url": None,
    "rating": 4.5,
    "downloads": 0,
    "duration": "45 min",
    "date_added": "2025-08-14T20:12:44Z",
}

def get_media_policy() -> MediaUrlPolicy:
    return MediaUrlPolicy()

def get_upload_service() -> UploadService:
    return UploadService(settings.upload_dir, settings.upload_max_bytes)

async def get_service(
    db: AsyncSession = Depends(get_session),
    policy: MediaUrlPolicy = Depends(get_media_policy),
) -> DocumentaryService:
    return DocumentaryService(DocumentaryRepository(db), policy=policy)


@router.get(
    "",
    summary="List documentaries",
    description=(
        "Returns every documentary, newest first. An empty catalog is an empty list, never an error.\n\n"
        "Optionally filter by `category` (exact match)."
    ),
    response_model=List[DocumentaryOut],
    responses={200: {"content": {"application/json": {"examples": {"list": {"value": [_EXAMPLE]}}}}}},
)
async def list_documentaries(
    category: Optional[Category] = Query(None, description="Filter by category tag."),
    service: DocumentaryService = Depends(get_service),
):
    return await service.list(category.value if category else None)


@router.get(
    "/{documentary_id}",
    summary="Get documentary by ID",
    response_model=DocumentaryOut,
    responses={
        404: {
            "description": "Documentary not found.",
            "content": {"application/json": {"examples": {"not_found": {"value": {"detail": "not found"}}}}},
        },
    },
)
async def get_documentary(
    documentary_id: int = Path(..., description="Documentary ID"),
    service: DocumentaryService = Depends(get_service),
):
    return await service.get(documentary_id)


@router.post(
    "",
    summary="Create documentary (admin only)",
    description=(
        "Creates a catalog entry from linked media.\n\n"
        "**Auth:** admin token.\n\n"
        "**Required:** `title`, `description`, `category`, `image_url`. "
        "`image_url` must be an image file URL or a supported image host; "
        "`video_url` and `pdf_url` are optional but validated when present."
    ),
    response_model=DocumentaryOut,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)],
    responses={
        200: {"content": {"application/json": {"examples": {"created": {"value": _EXAMPLE}}}}},
        400: {"description": "Missing mandatory field or unacceptable media URL."},
        **_AUTH_RESPONSES,
    },
)
async def create_documentary(
    payload: DocumentaryCreate,
    service: DocumentaryService = Depends(get_service),
):
    return await service.create(payload)


@router.post(
    "/upload",
    summary="Create documentary with uploaded media (admin only)",
    description=(
        "Multipart variant of create. Send the text fields as form fields plus an `image` file "
        "(or an `image_url`), and optionally `video` and `pdf` files.\n\n"
        "Files are stored under `/uploads/<generated-name>`; types are restricted to an allow-list "
        "and size is limited by configuration."
    ),
    response_model=DocumentaryOut,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"description": "Missing field, unsupported file type, or unacceptable media URL."},
        413: {"description": "File exceeds the configured size limit."},
        **_AUTH_RESPONSES,
    },
)
async def upload_documentary(
    title: str = Form(...),
    description: str = Form(...),
    category: str = Form(...),
    duration: Optional[str] = Form(None),
    rating: Optional[float] = Form(None),
    image_url: Optional[str] = Form(None),
    video_url: Optional[str] = Form(None),
    pdf_url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None),
    pdf: Optional[UploadFile] = File(None),
    service: DocumentaryService = Depends(get_service),
    uploads: UploadService = Depends(get_upload_service),
):
    has_image = image is not None and bool(image.filename)
    if not has_image and not (image_url and image_url.strip()):
        raise ValidationError("an image file or image_url is required")

    stored: list[str] = []
    try:
        if has_image:
            image_url = await uploads.save(image, settings.upload_allowed_image_types)
            stored.append(image_url)
        if video is not None and video.filename:
            video_url = await uploads.save(video, settings.upload_allowed_video_types)
            stored.append(video_url)
        if pdf is not None and pdf.filename:
            pdf_url = await uploads.save(pdf, settings.upload_allowed_document_types)
            stored.append(pdf_url)

        fields = dict(
            title=title, description=description, category=category, duration=duration,
            image_url=image_url, video_url=video_url, pdf_url=pdf_url,
        )
        if rating is not None:
            fields["rating"] = rating
        try:
            payload = DocumentaryCreate(**fields)
        except pydantic.ValidationError as e:
            raise ValidationError(summarize_errors([{**err, "loc": ("form", *err["loc"])} for err in e.errors()]))
        return await service.create(payload)
    except Exception:
        for url in stored:
            uploads.discard(url)
        raise


@router.delete(
    "/{documentary_id}",
    summary="Delete documentary (admin only)",
    description=(
        "Deletes a documentary by ID. Deleting an ID that does not exist is a successful no-op, "
        "so retries are always safe."
    ),
    response_model=MessageOut,
    dependencies=[Depends(require_admin)],
    responses={
        200: {"content": {"application/json": {"example": {"message": "Documentary deleted successfully"}}}},
        **_AUTH_RESPONSES,
    },
)
async def delete_documentary(
    documentary_id: int = Path(..., description="Documentary ID"),
    service: DocumentaryService = Depends(get_service),
):
    await service.delete(documentary_id)
    return MessageOut(message="Documentary deleted successfully")


@router.post(
    "/{documentary_id}/download",
    summary="Track a download",
    description=(
        "Increments the documentary's download counter by exactly one in a single atomic update. "
        "Unknown IDs are accepted silently."
    ),
    response_model=MessageOut,
    responses={200: {"content": {"application/json": {"example": {"message": "Download tracked successfully"}}}}},
)
async def track_download(
    documentary_id: int = Path(..., description="Documentary ID"),
    service: DocumentaryService = Depends(get_service),
):
    await service.track_download(documentary_id)
    return MessageOut(message="Download tracked successfully")
