# backend/parkhub/db/repositories/report_repository.py
from typing import Any, List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.db.models.report import Report
from parkhub.db.repositories.base import BaseRepository


class ReportRepository(BaseRepository[Report]):
    """Repository for Report operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Report, session)

    async def list_by_tenant(
        self,
        tenant_id: Any,
        type: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Report], int]:
        query = select(Report).where(Report.tenant_id == tenant_id)
        if type:
            query = query.where(Report.type == type)
        return await self.paginate(query.order_by(Report.created_at.desc()), skip, limit)
