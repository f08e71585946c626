from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .models import UserRole


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    company_id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.WAREHOUSE_STAFF


class UserRead(BaseModel):
    id: int
    name: str
    company_id: str
    email: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    username: str = Field(..., description="Company id or email address.")
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
