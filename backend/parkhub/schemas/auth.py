# backend/parkhub/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from parkhub.schemas.tenant import TenantRead, TenantSummary
from parkhub.schemas.user import UserRead


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Self-service signup: a new tenant with its first admin"""
    tenant_name: str = Field(..., min_length=2, max_length=255)
    domain: str = Field(..., min_length=3, max_length=255)
    contact_email: EmailStr
    contact_phone: Optional[str] = None
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    phone_number: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRead


class RegisterResponse(TokenResponse):
    tenant: TenantRead


class ProfileResponse(UserRead):
    tenant: Optional[TenantSummary] = None
