# backend/parkhub/db/models/setting.py
from sqlalchemy import Column, JSON, ForeignKey, Uuid
import uuid
from parkhub.db.base import BaseModel


class Setting(BaseModel):
    """Per-tenant configuration document"""
    __tablename__ = "settings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    # general, pricing, api, notifications
    settings = Column(JSON, nullable=False, default=dict)
