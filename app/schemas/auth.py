from pydantic import BaseModel, EmailStr, Field

from app.schemas.user import UserRead


class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=2)

class AuthResponse(BaseModel):
    token: str
    user: UserRead
