from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError
from shared.abstracts.abstract_repository import AbstractRepository
from users.models.user import User


class UserRepository(AbstractRepository):
    async def insert(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email.lower(), password_hash=password_hash)
        self.db.add(user)
        try:
            await self.commit(user)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("email_exists")
        return user

    async def get(self, user_id: int) -> Optional[User]:
        res = await self.db.execute(select(User).where(User.id == user_id))
        return res.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        res = await self.db.execute(select(User).where(User.email == email.lower()))
        return res.scalars().first()

    async def list(self, **filters) -> Sequence[User]:
        limit = filters.get("limit", None)
        offset = filters.get("offset", None)
        res = await self.db.execute(select(User).order_by(User.id).limit(limit).offset(offset))
        return res.scalars().all()

    async def count(self) -> int:
        res = await self.db.execute(select(func.count()).select_from(User))
        return int(res.scalar_one())
