# backend/parkhub/db/models/user.py
from sqlalchemy import Column, String, ForeignKey, DateTime, JSON, UniqueConstraint, Uuid
import uuid
from parkhub.db.base import BaseModel


class User(BaseModel):
    """Tenant staff member, or a platform SuperAdmin when tenant_id is empty"""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    name = Column(String(255), nullable=False)
    phone_number = Column(String(50), nullable=True)
    preferences = Column(JSON, default=dict)

    # Tenant relationship
    tenant_id = Column(Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True, index=True)
    role = Column(String(50), default="Viewer", nullable=False)  # SuperAdmin, Admin, Gatekeeper, Viewer

    # Status
    status = Column(String(50), default="Active", nullable=False)
    last_active = Column(DateTime, nullable=True)
