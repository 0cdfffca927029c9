import logging

from app.core.errors import AuthError
from app.core.security import ADMIN_ROLE, USER_ROLE, create_access_token, hash_password, verify_password
from shared.abstracts.abstract_repository import AbstractRepository
from users.entities import AdminOut, AdminTokenOut, UserCreate, UserOut, UserTokenOut

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, admins: AbstractRepository, users: AbstractRepository):
        self.admins = admins
        self.users = users

    async def admin_login(self, username: str, password: str) -> AdminTokenOut:
        admin = await self.admins.get_by_username(username)
        if not admin or not verify_password(password, admin.password_hash):
            logger.warning("Admin login failed for username=%s", username)
            raise AuthError("invalid_credentials")
        logger.info("Admin login succeeded for username=%s", username)
        token = create_access_token(admin.username, [ADMIN_ROLE])
        return AdminTokenOut(token=token, user=AdminOut(username=admin.username), message="Login successful")

    async def user_login(self, email: str, password: str) -> UserTokenOut:
        user = await self.users.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthError("invalid_credentials")
        return UserTokenOut(token=self._user_token(user), user=UserOut.model_validate(user), message="Login successful")

    async def register(self, payload: UserCreate) -> UserTokenOut:
        user = await self.users.insert(payload.name, str(payload.email), hash_password(payload.password))
        logger.info("Registered user id=%s", user.id)
        return UserTokenOut(
            token=self._user_token(user),
            user=UserOut.model_validate(user),
            message="Registration successful",
        )

    @staticmethod
    def _user_token(user) -> str:
        return create_access_token(str(user.id), [USER_ROLE], extra={"email": user.email, "name": user.name})
