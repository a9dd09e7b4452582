# backend/parkhub/db/repositories/tenant_repository.py
from typing import Optional, List, Tuple, Dict, Any
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import VehicleStatus
from parkhub.db.models.tenant import Tenant
from parkhub.db.models.user import User
from parkhub.db.models.parking import ParkingSection
from parkhub.db.models.vehicle import Vehicle
from parkhub.db.models.setting import Setting
from parkhub.db.models.payment import Payment
from parkhub.db.models.report import Report
from parkhub.db.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Tenant, session)

    async def get_by_domain(self, domain: str) -> Optional[Tenant]:
        """Get tenant by primary domain"""
        result = await self.session.execute(
            select(Tenant).where(Tenant.domain == domain.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_host(self, host: str) -> Optional[Tenant]:
        """Match a request host against primary or custom domain"""
        host = host.lower()
        tenant = await self.get_by_domain(host)
        if tenant:
            return tenant
        result = await self.session.execute(
            select(Tenant).where(Tenant.settings["custom_domain"].as_string() == host)
        )
        return result.scalars().first()

    async def get_by_api_key(self, api_key: str) -> Optional[Tenant]:
        result = await self.session.execute(
            select(Tenant).where(Tenant.api_key == api_key)
        )
        return result.scalar_one_or_none()

    async def list_paginated(self, skip: int = 0, limit: int = 10) -> Tuple[List[Tenant], int]:
        """Tenants newest first"""
        return await self.paginate(
            select(Tenant).order_by(Tenant.created_at.desc()), skip, limit
        )

    async def count_sections(self, tenant_id: Any) -> int:
        result = await self.session.execute(
            select(func.count(ParkingSection.id)).where(ParkingSection.tenant_id == tenant_id)
        )
        return result.scalar() or 0

    async def count_parked_vehicles(self, tenant_id: Any) -> int:
        result = await self.session.execute(
            select(func.count(Vehicle.id))
            .where(Vehicle.tenant_id == tenant_id)
            .where(Vehicle.status == VehicleStatus.PARKED.value)
        )
        return result.scalar() or 0

    async def count_users(self, tenant_id: Any) -> int:
        """Count users in tenant"""
        result = await self.session.execute(
            select(func.count(User.id)).where(User.tenant_id == tenant_id)
        )
        return result.scalar() or 0

    async def get_usage_stats(self, tenant_id: Any) -> Dict[str, Any]:
        """Get usage statistics for tenant"""
        return {
            "users_count": await self.count_users(tenant_id),
            "sections_count": await self.count_sections(tenant_id),
            "parked_vehicles": await self.count_parked_vehicles(tenant_id),
        }

    async def purge(self, tenant_id: Any) -> None:
        """Remove a tenant together with everything it owns"""
        for model in (Payment, Report, Vehicle):
            await self.session.execute(delete(model).where(model.tenant_id == tenant_id))
        await self.session.execute(delete(Setting).where(Setting.tenant_id == tenant_id))
        await self.session.execute(delete(User).where(User.tenant_id == tenant_id))
        await self.delete(tenant_id)
