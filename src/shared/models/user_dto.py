from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from src.shared.models.common import CamelModel, RequestModel

class CreateUserRequest(RequestModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: Optional[str] = None
    allowed_toasts: Optional[list[str]] = None

class UpdateUserRequest(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    phone: Optional[str] = None
    allowed_toasts: Optional[list[str]] = None

class BlockUserRequest(RequestModel):
    block_reason: str = Field(..., min_length=1)

class BanUserRequest(RequestModel):
    ban_reason: str = Field(..., min_length=1)

class UserDTO(CamelModel):
    """Пользователь. Хэш пароля наружу не отдаётся."""
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    allowed_toasts: Optional[list[str]] = None
    is_blocked: bool = False
    block_reason: Optional[str] = None
    is_banned: bool = False
    ban_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime
