# backend/parkhub/db/repositories/vehicle_repository.py
from typing import Any, List, Optional, Tuple
from datetime import datetime
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import VehicleStatus
from parkhub.db.models.vehicle import Vehicle
from parkhub.db.repositories.base import BaseRepository


class VehicleRepository(BaseRepository[Vehicle]):
    """Repository for Vehicle operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Vehicle, session)

    async def get_by_plate(self, tenant_id: Any, plate_number: str) -> Optional[Vehicle]:
        result = await self.session.execute(
            select(Vehicle)
            .where(Vehicle.tenant_id == tenant_id)
            .where(Vehicle.plate_number == plate_number)
        )
        return result.scalar_one_or_none()

    async def get_parked_by_plate(self, tenant_id: Any, plate_number: str) -> Optional[Vehicle]:
        result = await self.session.execute(
            select(Vehicle)
            .where(Vehicle.tenant_id == tenant_id)
            .where(Vehicle.plate_number == plate_number)
            .where(Vehicle.status == VehicleStatus.PARKED.value)
        )
        return result.scalar_one_or_none()

    async def list_by_tenant(
        self,
        tenant_id: Any,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Vehicle], int]:
        """Vehicles newest entry first"""
        query = select(Vehicle).where(Vehicle.tenant_id == tenant_id)
        if status:
            query = query.where(Vehicle.status == status)
        return await self.paginate(query.order_by(Vehicle.entry_time.desc()), skip, limit)

    async def list_entered_between(self, tenant_id: Any, start: datetime, end: datetime) -> List[Vehicle]:
        result = await self.session.execute(
            select(Vehicle)
            .where(Vehicle.tenant_id == tenant_id)
            .where(Vehicle.entry_time >= start)
            .where(Vehicle.entry_time <= end)
        )
        return list(result.scalars().all())

    async def reenter(self, vehicle_id: Any, values: dict) -> bool:
        """Flip a non-parked row back to Parked; False if it is already parked"""
        result = await self.session.execute(
            update(Vehicle)
            .where(Vehicle.id == vehicle_id)
            .where(Vehicle.status != VehicleStatus.PARKED.value)
            .values(status=VehicleStatus.PARKED.value, **values)
        )
        return result.rowcount == 1
