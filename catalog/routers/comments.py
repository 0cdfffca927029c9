from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_admin, optional_principal
from app.core.config import settings
from app.core.database.db import get_session
from catalog.domain.entities import CommentCreate
from catalog.domain.repositories import CommentRepository, DocumentaryRepository
from catalog.services.comment_service import CommentService
from shared.entities.comment import CommentOut

router = APIRouter(prefix="/api/comments", tags=["comments"])

_EXAMPLE = {
    "id": 3,
    "author": "Sarah Johnson",
    "email": "sarah@example.com",
    "text": "The cinematography was breathtaking!",
    "status": "approved",
    "documentary_id": 1,
    "date_added": "2025-08-14T20:12:44Z",
}

async def get_service(db: AsyncSession = Depends(get_session)) -> CommentService:
    return CommentService(
        CommentRepository(db),
        default_status=settings.comment_default_status,
        documentaries=DocumentaryRepository(db),
    )


@router.get(
    "",
    summary="List comments",
    description=(
        "Returns comments newest first. Without `status` only approved comments are listed.\n\n"
        "`status=pending` lists the moderation queue and requires an admin token."
    ),
    response_model=List[CommentOut],
    responses={
        200: {"content": {"application/json": {"examples": {"list": {"value": [_EXAMPLE]}}}}},
        401: {"description": "`status=pending` without a valid token."},
        403: {"description": "`status=pending` with a non-admin token."},
    },
)
async def list_comments(
    status: Optional[str] = Query(None, pattern="^(pending|approved)$", description="Filter by moderation status."),
    documentary_id: Optional[int] = Query(None, description="Only comments about this documentary."),
    principal: Optional[Dict[str, Any]] = Depends(optional_principal),
    service: CommentService = Depends(get_service),
):
    if status == "pending":
        ensure_admin(principal)
    return await service.list(status or "approved", documentary_id)


@router.post(
    "",
    summary="Post a comment",
    description=(
        "Creates a comment. `author`, `email` and `text` are mandatory. "
        "The initial moderation status is a deployment setting (`COMMENT_DEFAULT_STATUS`)."
    ),
    response_model=CommentOut,
    responses={
        200: {"content": {"application/json": {"examples": {"created": {"value": _EXAMPLE}}}}},
        400: {"description": "Missing or malformed field, or `documentary_id` names no documentary."},
    },
)
async def create_comment(
    payload: CommentCreate,
    service: CommentService = Depends(get_service),
):
    return await service.create(payload)
