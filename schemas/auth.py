from typing import Optional

from pydantic import BaseModel

from schemas.base import CamelModel


class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: str


class PasswordUpdateRequest(CamelModel):
    new_password: str
    current_password: Optional[str] = None


class UserResponse(CamelModel):
    id: int
    username: str
    is_admin: bool


class MessageResponse(BaseModel):
    message: str
