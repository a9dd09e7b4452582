# backend/parkhub/db/repositories/setting_repository.py
from typing import Any, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.db.models.setting import Setting
from parkhub.db.repositories.base import BaseRepository


class SettingRepository(BaseRepository[Setting]):
    """Repository for Setting operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Setting, session)

    async def get_by_tenant(self, tenant_id: Any) -> Optional[Setting]:
        result = await self.session.execute(
            select(Setting).where(Setting.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()
