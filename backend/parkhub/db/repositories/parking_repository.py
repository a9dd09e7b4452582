# backend/parkhub/db/repositories/parking_repository.py
from typing import Any, Dict, List, Optional
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import SlotStatus
from parkhub.db.models.parking import ParkingSection, ParkingSlot
from parkhub.db.repositories.base import BaseRepository


class SectionRepository(BaseRepository[ParkingSection]):
    """Repository for ParkingSection operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(ParkingSection, session)

    async def get_by_name(self, tenant_id: Any, name: str) -> Optional[ParkingSection]:
        result = await self.session.execute(
            select(ParkingSection)
            .where(ParkingSection.tenant_id == tenant_id)
            .where(ParkingSection.name == name)
        )
        return result.scalar_one_or_none()

    async def list_by_tenant(self, tenant_id: Any) -> List[ParkingSection]:
        result = await self.session.execute(
            select(ParkingSection)
            .where(ParkingSection.tenant_id == tenant_id)
            .order_by(ParkingSection.floor, ParkingSection.name)
        )
        return list(result.scalars().all())


class SlotRepository(BaseRepository[ParkingSlot]):
    """Repository for ParkingSlot operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(ParkingSlot, session)

    async def get_by_name(self, tenant_id: Any, section_id: Any, name: str) -> Optional[ParkingSlot]:
        result = await self.session.execute(
            select(ParkingSlot)
            .where(ParkingSlot.tenant_id == tenant_id)
            .where(ParkingSlot.section_id == section_id)
            .where(ParkingSlot.name == name)
        )
        return result.scalar_one_or_none()

    async def list_by_section(self, section_id: Any) -> List[ParkingSlot]:
        result = await self.session.execute(
            select(ParkingSlot)
            .where(ParkingSlot.section_id == section_id)
            .order_by(ParkingSlot.name)
        )
        return list(result.scalars().all())

    async def list_filtered(
        self,
        tenant_id: Any,
        section_id: Any = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        reserved: Optional[bool] = None,
    ) -> List[ParkingSlot]:
        query = select(ParkingSlot).where(ParkingSlot.tenant_id == tenant_id)
        if section_id is not None:
            query = query.where(ParkingSlot.section_id == section_id)
        if status:
            query = query.where(ParkingSlot.status == status)
        if type:
            query = query.where(ParkingSlot.type == type)
        if reserved is not None:
            query = query.where(ParkingSlot.reserved == reserved)
        result = await self.session.execute(query.order_by(ParkingSlot.name))
        return list(result.scalars().all())

    async def slot_ids_by_section(self, tenant_id: Any) -> Dict[Any, List[Any]]:
        """Map section id -> its slot ids for one tenant"""
        result = await self.session.execute(
            select(ParkingSlot.section_id, ParkingSlot.id)
            .where(ParkingSlot.tenant_id == tenant_id)
            .order_by(ParkingSlot.name)
        )
        grouped: Dict[Any, List[Any]] = {}
        for section_id, slot_id in result.all():
            grouped.setdefault(section_id, []).append(slot_id)
        return grouped

    async def count_occupied(self, section_id: Any) -> int:
        result = await self.session.execute(
            select(func.count(ParkingSlot.id))
            .where(ParkingSlot.section_id == section_id)
            .where(ParkingSlot.status == SlotStatus.OCCUPIED.value)
        )
        return result.scalar() or 0

    async def occupy(self, slot_id: Any, vehicle_id: Any) -> bool:
        """Claim an Available slot; False when someone else got there first"""
        result = await self.session.execute(
            update(ParkingSlot)
            .where(ParkingSlot.id == slot_id)
            .where(ParkingSlot.status == SlotStatus.AVAILABLE.value)
            .values(status=SlotStatus.OCCUPIED.value, current_vehicle_id=vehicle_id)
        )
        return result.rowcount == 1

    async def release(self, slot_id: Any) -> None:
        await self.session.execute(
            update(ParkingSlot)
            .where(ParkingSlot.id == slot_id)
            .values(status=SlotStatus.AVAILABLE.value, current_vehicle_id=None)
        )

    async def delete_by_section(self, section_id: Any) -> int:
        slots = await self.list_by_section(section_id)
        for slot in slots:
            await self.session.delete(slot)
        await self.session.flush()
        return len(slots)
