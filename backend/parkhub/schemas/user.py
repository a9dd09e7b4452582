# backend/parkhub/schemas/user.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Any, Dict, Optional
from uuid import UUID
from datetime import datetime

from parkhub.core.constants import UserRole, UserStatus


class UserBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone_number: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.VIEWER
    status: UserStatus = UserStatus.ACTIVE
    # Only honoured for SuperAdmin callers
    tenant_id: Optional[UUID] = None


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    phone_number: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    status: str
    tenant_id: Optional[UUID] = None
    phone_number: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None
    last_active: Optional[datetime] = None
    created_at: datetime
