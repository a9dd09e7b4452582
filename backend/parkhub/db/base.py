# backend/parkhub/db/base.py
from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, DateTime

from parkhub.core.timeutils import utcnow

Base = declarative_base()


class BaseModel(Base):
    """Abstract base model with common fields"""
    __abstract__ = True

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
