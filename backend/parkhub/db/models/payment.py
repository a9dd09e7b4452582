# backend/parkhub/db/models/payment.py
from sqlalchemy import Column, String, Integer, Float, Text, DateTime, ForeignKey, Uuid
import uuid
from parkhub.db.base import BaseModel


class Payment(BaseModel):
    """Charge tied to a vehicle and a time span"""
    __tablename__ = "payments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(Uuid, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(Float, nullable=False)
    method = Column(String(50), nullable=False)
    status = Column(String(50), default="Completed", nullable=False, index=True)

    entry_time = Column(DateTime, nullable=False)
    exit_time = Column(DateTime, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes

    # Not guaranteed unique
    receipt_number = Column(String(50), nullable=False, index=True)
    processed_by = Column(Uuid, nullable=True)
    notes = Column(Text, nullable=True)
