# models/user.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from .enums import UserRole


class UserCreate(BaseModel):
    email: EmailStr
    name: str
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.tenant


class ProfileRead(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: UserRole


class CoordinatorAssign(BaseModel):
    user_id: str
