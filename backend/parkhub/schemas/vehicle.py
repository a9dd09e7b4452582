# backend/parkhub/schemas/vehicle.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import datetime

from parkhub.core.constants import VehicleType


class VehicleEntry(BaseModel):
    plate_number: str = Field(..., min_length=1, max_length=20)
    type: Optional[VehicleType] = None
    slot_id: Optional[UUID] = None


class VehicleExit(BaseModel):
    plate_number: str = Field(..., min_length=1, max_length=20)


class VehicleUpdate(BaseModel):
    """Descriptive fields only; status and slot move through entry/exit"""
    type: Optional[VehicleType] = None
    color: Optional[str] = Field(None, max_length=50)
    make: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    owner_info: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None


class VehicleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    plate_number: str
    type: str
    status: str
    entry_time: datetime
    exit_time: Optional[datetime] = None
    slot_id: Optional[UUID] = None
    color: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    owner_info: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    created_at: datetime


class VehicleDetail(VehicleRead):
    slot_name: Optional[str] = None
    payment_ids: List[UUID] = []
