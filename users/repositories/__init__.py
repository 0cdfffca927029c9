from users.repositories.admin_user_repository import AdminUserRepository
from users.repositories.user_repository import UserRepository

__all__ = ["AdminUserRepository", "UserRepository"]
