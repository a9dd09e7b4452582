# backend/parkhub/schemas/report.py
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import datetime

from parkhub.core.constants import ReportFormat, ReportFrequency, ReportType
from parkhub.core.timeutils import to_naive_utc


class ReportRequest(BaseModel):
    start_date: datetime
    end_date: datetime
    type: Optional[ReportType] = None
    format: Optional[ReportFormat] = None

    @model_validator(mode="after")
    def check_range(self):
        self.start_date = to_naive_utc(self.start_date)
        self.end_date = to_naive_utc(self.end_date)
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ScheduleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: ReportType
    frequency: ReportFrequency = ReportFrequency.WEEKLY
    time: str = Field("08:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    send_email: bool = True
    recipients: List[str] = []


class ScheduleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    frequency: Optional[ReportFrequency] = None
    time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    send_email: Optional[bool] = None
    recipients: Optional[List[str]] = None


class ReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    name: str
    type: str
    start_date: datetime
    end_date: datetime
    data: Optional[Dict[str, Any]] = None
    format: Optional[str] = None
    schedule: Optional[Dict[str, Any]] = None
    status: str
    created_by: Optional[UUID] = None
    created_at: datetime
