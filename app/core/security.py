from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Set
import jwt
from passlib.context import CryptContext
from app.core.config import settings

ADMIN_ROLE = "admin"
USER_ROLE = "user"
ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def token_lifetime(roles: Iterable[str]) -> timedelta:
    """Admin sessions are short; end-user sessions last a week by default."""
    if ADMIN_ROLE in roles:
        return timedelta(minutes=int(settings.admin_token_expires_minutes))
    return timedelta(minutes=int(settings.user_token_expires_minutes))

def roles_of(claims: Dict[str, Any]) -> Set[str]:
    return {str(r).lower() for r in claims.get("roles") or []}

def create_access_token(
    sub: str,
    roles: list[str],
    expires_minutes: int | None = None,
    extra: Dict[str, Any] | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    lifetime = token_lifetime(roles) if expires_minutes is None else timedelta(minutes=int(expires_minutes))
    claims: Dict[str, Any] = {
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
        "sub": sub,
        "roles": list(roles),
    }
    if extra:
        claims.update(extra)
    return jwt.encode(claims, settings.jwt_secret, algorithm=ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """Verify signature, issuer, audience and expiry; raises ``jwt.PyJWTError`` subclasses."""
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[ALGORITHM],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={"require": ["exp", "sub"]},
    )
