# app/core/auth.py
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import AuthError, ForbiddenError
from app.core.security import ADMIN_ROLE, USER_ROLE, decode_token, roles_of

bearer_scheme = HTTPBearer(auto_error=False)

def _decode(credentials: Optional[HTTPAuthorizationCredentials]) -> Dict[str, Any]:
    if credentials is None or not credentials.credentials:
        raise AuthError("missing_token")
    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise AuthError("token_expired")
    except jwt.PyJWTError:
        raise AuthError("invalid_token")
    if not payload.get("sub"):
        raise AuthError("invalid_token")
    return payload

async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    return _decode(credentials)

def require_role(*roles: str):
    allowed = {r.lower() for r in roles}
    async def dep(payload: Dict[str, Any] = Depends(get_token_payload)) -> Dict[str, Any]:
        if allowed and not (roles_of(payload) & allowed):
            # a token without the needed role is not a valid credential for this endpoint
            raise AuthError("invalid_token")
        return payload
    return dep

# Helpers
require_admin = require_role(ADMIN_ROLE)
require_user = require_role(USER_ROLE)

# ---------- Optional auth (public OR authenticated) ----------
async def optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Dict[str, Any]]:
    """
    Returns the token payload if a valid Bearer token is provided.
    Returns None if no/invalid token is provided (does NOT raise).
    """
    if credentials is None:
        return None
    try:
        return _decode(credentials)
    except AuthError:
        return None

def ensure_admin(principal: Optional[Dict[str, Any]]) -> None:
    """For endpoints that are public in general but admin-only for some parameters."""
    if principal is None:
        raise AuthError("missing_token")
    if ADMIN_ROLE not in roles_of(principal):
        raise ForbiddenError()
