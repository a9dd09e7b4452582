# backend/parkhub/schemas/tenant.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Any, Dict, Optional
from uuid import UUID
from datetime import datetime

from parkhub.core.constants import PlanType, TenantStatus


class TenantBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    domain: str = Field(..., min_length=3, max_length=255)
    contact_email: EmailStr
    contact_phone: Optional[str] = None
    address: Optional[Dict[str, Any]] = None

    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        return v.strip().lower()


class TenantCreate(TenantBase):
    plan: Optional[PlanType] = None
    status: TenantStatus = TenantStatus.ACTIVE
    settings: Optional[Dict[str, Any]] = None


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    domain: Optional[str] = Field(None, min_length=3, max_length=255)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    plan: Optional[PlanType] = None
    status: Optional[TenantStatus] = None
    subscription: Optional[Dict[str, Any]] = None
    settings: Optional[Dict[str, Any]] = None

    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else v


class TenantSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    domain: str
    plan: str


class TenantRead(TenantSummary):
    status: str
    contact_email: str
    contact_phone: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    subscription: Optional[Dict[str, Any]] = None
    settings: Optional[Dict[str, Any]] = None
    api_key: Optional[str] = None
    created_at: datetime
