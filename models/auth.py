# models/auth.py

from pydantic import Field

from models.base import CamelModel
from models.user import UserRead


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserRead


class VerifyResponse(CamelModel):
    user: UserRead
