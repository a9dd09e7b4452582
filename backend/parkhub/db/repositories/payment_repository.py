# backend/parkhub/db/repositories/payment_repository.py
from typing import Any, List, Optional, Tuple
from datetime import datetime
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.db.models.payment import Payment
from parkhub.db.repositories.base import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Repository for Payment operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Payment, session)

    async def search(
        self,
        tenant_id: Any,
        status: Optional[str] = None,
        method: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Payment], int]:
        """Filtered, paginated payment listing, newest first"""
        query = select(Payment).where(Payment.tenant_id == tenant_id)
        if status:
            query = query.where(Payment.status == status)
        if method:
            query = query.where(Payment.method == method)
        if start_date:
            query = query.where(Payment.created_at >= start_date)
        if end_date:
            query = query.where(Payment.created_at <= end_date)
        return await self.paginate(query.order_by(Payment.created_at.desc()), skip, limit)

    async def list_by_vehicle(self, vehicle_id: Any) -> List[Payment]:
        result = await self.session.execute(
            select(Payment)
            .where(Payment.vehicle_id == vehicle_id)
            .order_by(Payment.created_at)
        )
        return list(result.scalars().all())

    async def list_completed_between(
        self, tenant_id: Any, status: str, start: datetime, end: datetime
    ) -> List[Payment]:
        result = await self.session.execute(
            select(Payment)
            .where(Payment.tenant_id == tenant_id)
            .where(Payment.status == status)
            .where(Payment.created_at >= start)
            .where(Payment.created_at <= end)
            .order_by(Payment.created_at)
        )
        return list(result.scalars().all())
