from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.db import get_session
from users.entities import AdminLoginIn, AdminTokenOut
from users.repositories import AdminUserRepository, UserRepository
from users.services.auth_service import AuthService

router = APIRouter(
    prefix="/api/admin",
    tags=["auth"],
)

def get_auth_service(db: AsyncSession = Depends(get_session)) -> AuthService:
    return AuthService(AdminUserRepository(db), UserRepository(db))

@router.post(
    "/login",
    summary="Admin login",
    description=(
        "Verifies the admin username and password and returns a signed admin token.\n\n"
        "### Notes\n"
        "- Send the token as `Authorization: Bearer <token>` to create or delete documentaries.\n"
        "- Tokens carry the `admin` role and expire after `ADMIN_TOKEN_EXPIRES_MINUTES`.\n"
    ),
    response_model=AdminTokenOut,
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Authentication succeeded; token returned.",
            "content": {
                "application/json": {
                    "examples": {
                        "success": {
                            "summary": "Successful login",
                            "value": {
                                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                                "user": {"username": "admin", "role": "admin"},
                                "message": "Login successful",
                            },
                        }
                    }
                }
            },
        },
        400: {"description": "Username or password missing."},
        401: {
            "description": "Wrong username or password.",
            "content": {"application/json": {"examples": {"invalid": {"value": {"detail": "invalid_credentials"}}}}},
            "headers": {
                "WWW-Authenticate": {
                    "schema": {"type": "string"},
                    "description": "Authentication scheme required (Bearer).",
                }
            },
        },
    },
)
async def admin_login(
    payload: AdminLoginIn,
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.admin_login(payload.username, payload.password)
