# backend/parkhub/db/models/tenant.py
from sqlalchemy import Column, String, JSON, Uuid
import uuid
from parkhub.db.base import BaseModel


class Tenant(BaseModel):
    """Tenant model for multi-tenancy"""
    __tablename__ = "tenants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    domain = Column(String(255), unique=True, nullable=False, index=True)

    plan = Column(String(50), default="Basic", nullable=False, index=True)
    status = Column(String(50), default="Active", nullable=False, index=True)

    # Contact
    contact_email = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=True)
    address = Column(JSON, default=dict)  # street, city, state, zip_code, country

    # start_date, end_date, payment_method, auto_renew
    subscription = Column(JSON, default=dict)

    # theme, logo, custom_domain
    settings = Column(JSON, default=dict)

    api_key = Column(String(64), unique=True, nullable=True, index=True)
    created_by = Column(Uuid, nullable=True)
