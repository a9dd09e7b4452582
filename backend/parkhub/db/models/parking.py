# backend/parkhub/db/models/parking.py
from sqlalchemy import Column, String, Integer, Float, Boolean, Text, ForeignKey, UniqueConstraint, Uuid
import uuid
from parkhub.db.base import BaseModel


class ParkingSection(BaseModel):
    """Named group of slots on one floor"""
    __tablename__ = "parking_sections"
    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_sections_tenant_name"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    floor = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)
    # Written only by ParkingService.refresh_availability
    available = Column(Integer, nullable=False)

    status = Column(String(50), default="Active", nullable=False)
    description = Column(Text, nullable=True)
    hourly_rate = Column(Float, nullable=True)


class ParkingSlot(BaseModel):
    """Single parking space"""
    __tablename__ = "parking_slots"
    __table_args__ = (
        UniqueConstraint("tenant_id", "section_id", "name", name="uq_slots_tenant_section_name"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    section_id = Column(Uuid, ForeignKey("parking_sections.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    type = Column(String(50), default="Standard", nullable=False)
    status = Column(String(50), default="Available", nullable=False, index=True)
    reserved = Column(Boolean, default=False, nullable=False)

    # Set exactly when status is Occupied
    current_vehicle_id = Column(Uuid, nullable=True, index=True)
