from users.models.admin_user import AdminUser
from users.models.user import User

__all__ = ["AdminUser", "User"]
