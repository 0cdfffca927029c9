from pydantic import BaseModel, EmailStr, constr
from typing import Literal, Optional

CommentStatus = Literal["pending", "approved"]

class CommentCreate(BaseModel):
    author: constr(strip_whitespace=True, min_length=1, max_length=255)
    email: EmailStr
    text: constr(strip_whitespace=True, min_length=1)
    documentary_id: Optional[int] = None
