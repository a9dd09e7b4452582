# backend/parkhub/schemas/parking.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from parkhub.core.constants import SectionStatus, SlotStatus, SlotType


class SectionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    floor: str = Field(..., min_length=1, max_length=50)
    capacity: int = Field(..., ge=1)
    description: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    status: SectionStatus = SectionStatus.ACTIVE


class SectionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    floor: Optional[str] = Field(None, min_length=1, max_length=50)
    capacity: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    status: Optional[SectionStatus] = None


class SlotCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    section_id: UUID
    type: SlotType = SlotType.STANDARD
    reserved: bool = False


class SlotUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[SlotType] = None
    status: Optional[SlotStatus] = None
    reserved: Optional[bool] = None
    section_id: Optional[UUID] = None


class SlotRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    section_id: UUID
    name: str
    type: str
    status: str
    reserved: bool
    current_vehicle_id: Optional[UUID] = None
    created_at: datetime


class SlotDetail(SlotRead):
    current_vehicle_plate: Optional[str] = None


class SectionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    name: str
    floor: str
    capacity: int
    available: int
    status: str
    description: Optional[str] = None
    hourly_rate: Optional[float] = None
    created_at: datetime


class SectionSummary(SectionRead):
    slot_ids: List[UUID] = []
    occupancy_percentage: float = 0.0


class SectionDetail(SectionRead):
    slots: List[SlotDetail] = []
