from users.entities.user import UserCreate, UserOut
from users.entities.auth import AdminLoginIn, AdminOut, AdminTokenOut, UserLoginIn, UserTokenOut

__all__ = [
    "UserCreate",
    "UserOut",
    "AdminLoginIn",
    "AdminOut",
    "AdminTokenOut",
    "UserLoginIn",
    "UserTokenOut",
]
