from typing import Optional, Sequence

from sqlalchemy import delete, select

from shared.abstracts.abstract_repository import AbstractRepository
from users.models.admin_user import AdminUser


class AdminUserRepository(AbstractRepository):
    async def insert(self, username: str, password_hash: str) -> AdminUser:
        obj = AdminUser(username=username, password_hash=password_hash)
        self.db.add(obj)
        await self.commit(obj)
        return obj

    async def get(self, admin_id: int) -> Optional[AdminUser]:
        res = await self.db.execute(select(AdminUser).where(AdminUser.id == admin_id))
        return res.scalars().first()

    async def get_by_username(self, username: str) -> Optional[AdminUser]:
        res = await self.db.execute(select(AdminUser).where(AdminUser.username == username))
        return res.scalars().first()

    async def delete(self, admin_id: int) -> bool:
        res = await self.db.execute(delete(AdminUser).where(AdminUser.id == admin_id))
        await self.db.commit()
        return bool(res.rowcount)

    async def list(self, **filters) -> Sequence[AdminUser]:
        res = await self.db.execute(select(AdminUser).order_by(AdminUser.id))
        return res.scalars().all()
