from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_user
from app.core.database.db import get_session
from app.core.errors import AuthError
from users.entities import UserCreate, UserLoginIn, UserOut, UserTokenOut
from users.repositories import AdminUserRepository, UserRepository
from users.routers.auth import get_auth_service
from users.services.auth_service import AuthService
from users.services.user_service import UserService

router = APIRouter(prefix="/api/user", tags=["users"])

def get_user_service(db: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(UserRepository(db), AdminUserRepository(db))

_TOKEN_EXAMPLE = {
    "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "user": {"id": 1, "name": "Demo User", "email": "user@example.com", "created_at": "2025-08-14T20:30:15Z"},
    "message": "Login successful",
}

@router.post(
    "/login",
    summary="End-user login",
    response_model=UserTokenOut,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"content": {"application/json": {"examples": {"success": {"value": _TOKEN_EXAMPLE}}}}},
        400: {"description": "Email or password missing or malformed."},
        401: {
            "description": "Wrong email or password.",
            "content": {"application/json": {"examples": {"invalid": {"value": {"detail": "invalid_credentials"}}}}},
        },
    },
)
async def user_login(payload: UserLoginIn, svc: AuthService = Depends(get_auth_service)):
    return await svc.user_login(str(payload.email), payload.password)


@router.post(
    "/register",
    summary="Register an end-user account",
    description=(
        "Creates an account and signs it in.\n\n"
        "### Notes\n"
        "- Emails are unique (case-insensitive); a second registration returns **409**.\n"
        "- Passwords are stored as bcrypt hashes.\n"
    ),
    response_model=UserTokenOut,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Missing field, malformed email, or password shorter than 6 characters."},
        409: {
            "description": "Email already registered.",
            "content": {"application/json": {"examples": {"conflict": {"value": {"detail": "email_exists"}}}}},
        },
    },
)
async def register(payload: UserCreate, svc: AuthService = Depends(get_auth_service)):
    return await svc.register(payload)


@router.get(
    "/me",
    summary="Get my profile",
    description="Returns the profile of the user the bearer token was issued to.",
    response_model=UserOut,
    responses={401: {"description": "Missing, invalid, or expired user token."}},
)
async def me(
    principal: Dict[str, Any] = Depends(require_user),
    svc: UserService = Depends(get_user_service),
):
    try:
        user_id = int(principal["sub"])
    except (KeyError, ValueError):
        raise AuthError("invalid_token")
    user = await svc.get_by_id(user_id)
    if user is None:
        raise AuthError("invalid_token")
    return user
