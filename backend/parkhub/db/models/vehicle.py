# backend/parkhub/db/models/vehicle.py
from sqlalchemy import Column, String, Integer, Text, DateTime, JSON, ForeignKey, UniqueConstraint, Uuid
import uuid
from parkhub.db.base import BaseModel


class Vehicle(BaseModel):
    """One ledger row per physical vehicle per tenant"""
    __tablename__ = "vehicles"
    __table_args__ = (
        UniqueConstraint("tenant_id", "plate_number", name="uq_vehicles_tenant_plate"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)

    plate_number = Column(String(20), nullable=False, index=True)
    type = Column(String(50), default="Sedan", nullable=False)
    status = Column(String(50), default="Parked", nullable=False, index=True)

    entry_time = Column(DateTime, nullable=False)
    exit_time = Column(DateTime, nullable=True)
    slot_id = Column(Uuid, ForeignKey("parking_slots.id", ondelete="SET NULL"), nullable=True)

    # Descriptive
    color = Column(String(50), nullable=True)
    make = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    year = Column(Integer, nullable=True)
    owner_info = Column(JSON, default=dict)  # name, phone, email
    notes = Column(Text, nullable=True)
