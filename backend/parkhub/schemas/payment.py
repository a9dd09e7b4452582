# backend/parkhub/schemas/payment.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from parkhub.core.constants import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    vehicle_id: UUID
    amount: float = Field(..., ge=0)
    method: PaymentMethod
    status: PaymentStatus = PaymentStatus.COMPLETED
    receipt_number: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class PaymentStatusUpdate(BaseModel):
    status: PaymentStatus


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    vehicle_id: UUID
    amount: float
    method: str
    status: str
    entry_time: datetime
    exit_time: datetime
    duration: int
    receipt_number: str
    processed_by: Optional[UUID] = None
    notes: Optional[str] = None
    created_at: datetime


class Receipt(BaseModel):
    receipt_number: str
    date: datetime
    plate_number: Optional[str] = None
    entry_time: datetime
    exit_time: datetime
    duration: int
    amount: float
    method: str
    status: str
