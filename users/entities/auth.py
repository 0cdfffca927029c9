from typing import Optional

from pydantic import BaseModel, EmailStr, constr

from users.entities.user import UserOut


class AdminLoginIn(BaseModel):
    username: constr(strip_whitespace=True, min_length=1)
    password: constr(min_length=1)


class UserLoginIn(BaseModel):
    email: EmailStr
    password: constr(min_length=1)


class AdminOut(BaseModel):
    username: str
    role: str = "admin"


class AdminTokenOut(BaseModel):
    token: str
    user: AdminOut
    message: Optional[str] = None


class UserTokenOut(BaseModel):
    token: str
    user: UserOut
    message: Optional[str] = None
