# backend/parkhub/db/models/report.py
from sqlalchemy import Column, String, Text, DateTime, JSON, ForeignKey, Uuid
import uuid
from parkhub.db.base import BaseModel


class Report(BaseModel):
    """Persisted aggregation snapshot or schedule descriptor"""
    __tablename__ = "reports"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    data = Column(JSON, nullable=True)
    filters = Column(JSON, nullable=True)
    format = Column(String(20), nullable=True)

    # is_scheduled, frequency, time, send_email, recipients
    schedule = Column(JSON, nullable=True)
    status = Column(String(50), default="Generated", nullable=False)
    notes = Column(Text, nullable=True)

    created_by = Column(Uuid, nullable=True)
