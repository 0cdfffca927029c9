import logging
from typing import Optional

from app.core.security import hash_password, verify_password
from shared.abstracts.abstract_repository import AbstractRepository
from users.models.admin_user import AdminUser
from users.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users_repo: AbstractRepository, admins_repo: AbstractRepository | None = None):
        self.users = users_repo
        self.admins = admins_repo

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.users.get_by_email(email)

    async def ensure_admin(self, username: str, password: str) -> AdminUser:
        """
        Keep exactly one admin account, named ``username``. A row left over from a
        previously configured username is renamed; any further rows are removed.
        The hash is rotated when it no longer matches the configured password.
        """
        admins = list(await self.admins.list())
        admin = next((a for a in admins if a.username == username), None)
        stale = [a for a in admins if a is not admin]

        if admin is None and stale:
            admin = stale.pop(0)
            logger.info("Renaming admin user %s to %s", admin.username, username)
            admin.username = username
            admin.password_hash = hash_password(password)
            await self.admins.commit(admin)
        elif admin is None:
            admin = await self.admins.insert(username, hash_password(password))
            logger.info("Seeded admin user %s", username)
        elif not verify_password(password, admin.password_hash):
            admin.password_hash = hash_password(password)
            await self.admins.commit(admin)
            logger.info("Rotated admin password for %s", username)

        for extra in stale:
            logger.info("Removing extra admin user %s", extra.username)
            await self.admins.delete(extra.id)
        return admin

    async def ensure_user(self, name: str, email: str, password: str) -> User:
        user = await self.users.get_by_email(email)
        if user is None:
            user = await self.users.insert(name, email, hash_password(password))
            logger.info("Seeded demo user %s", email)
        return user
