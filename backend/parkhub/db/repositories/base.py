# backend/parkhub/db/repositories/base.py
from typing import Any, Generic, TypeVar, Type, Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete
from sqlalchemy.sql import Select

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Repositories only flush; committing is left to the service that owns the
    transaction so several writes land together.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def get(self, id: Any) -> Optional[ModelType]:
        """Get by ID"""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_for_tenant(self, id: Any, tenant_id: Any) -> Optional[ModelType]:
        """Get by ID with tenant verification"""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id)
            .where(self.model.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def paginate(self, query: Select, skip: int, limit: int) -> Tuple[List[ModelType], int]:
        """Run ``query`` for one page and count all matching rows"""
        total = await self.session.scalar(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        result = await self.session.execute(query.offset(skip).limit(limit))
        return list(result.scalars().all()), total or 0

    async def create(self, obj_in: dict) -> ModelType:
        """Create new record"""
        db_obj = self.model(**obj_in)
        self.session.add(db_obj)
        await self.session.flush()
        await self.session.refresh(db_obj)
        return db_obj

    async def update(self, db_obj: ModelType, obj_in: dict) -> ModelType:
        """Apply field changes to a loaded record"""
        for key, value in obj_in.items():
            setattr(db_obj, key, value)
        await self.session.flush()
        await self.session.refresh(db_obj)
        return db_obj

    async def delete(self, id: Any) -> bool:
        """Delete record"""
        result = await self.session.execute(
            delete(self.model).where(self.model.id == id)
        )
        return result.rowcount > 0
