# backend/parkhub/schemas/setting.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
from uuid import UUID
from datetime import datetime


class SettingsUpdate(BaseModel):
    """Categories to merge; omitted categories are left alone"""
    general: Optional[Dict[str, Any]] = None
    pricing: Optional[Dict[str, Any]] = None
    api: Optional[Dict[str, Any]] = None
    notifications: Optional[Dict[str, Any]] = None


class SettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    settings: Dict[str, Any]
    updated_at: datetime
