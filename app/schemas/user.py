from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class UserRead(BaseModel):
    id: int
    email: EmailStr
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
