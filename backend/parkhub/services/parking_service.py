# backend/parkhub/services/parking_service.py
"""
Parking inventory: sections, slots and the section availability counter.

``refresh_availability`` is the only code that writes
``ParkingSection.available``; every operation that can change how many
slots of a section are occupied calls it before committing.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import SlotStatus
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import (
    CannotOccupyWithoutVehicle,
    CapacityBelowOccupancy,
    DuplicateSection,
    DuplicateSlot,
    SectionHasOccupiedSlots,
    SectionNotFound,
    SlotNotFound,
    SlotOccupied,
)
from parkhub.core.logging import get_logger
from parkhub.db.database import transaction
from parkhub.db.models.parking import ParkingSection, ParkingSlot
from parkhub.db.repositories.parking_repository import SectionRepository, SlotRepository
from parkhub.db.repositories.vehicle_repository import VehicleRepository
from parkhub.schemas.parking import (
    SectionCreate,
    SectionDetail,
    SectionRead,
    SectionSummary,
    SectionUpdate,
    SlotCreate,
    SlotDetail,
    SlotRead,
    SlotUpdate,
)

logger = get_logger("parking")


def occupancy_percentage(section: ParkingSection) -> float:
    if not section.capacity:
        return 0.0
    return round((section.capacity - section.available) / section.capacity * 100, 2)


class ParkingService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.sections = SectionRepository(session)
        self.slots = SlotRepository(session)

    # Availability

    async def refresh_availability(self, section: ParkingSection) -> int:
        """Recompute ``available`` from the slots table, clamped to [0, capacity]"""
        await self.session.flush()
        occupied = await self.slots.count_occupied(section.id)
        section.available = max(0, min(section.capacity, section.capacity - occupied))
        await self.session.flush()
        return section.available

    async def refresh_section(self, section_id: UUID) -> None:
        section = await self.sections.get(section_id)
        if section:
            await self.refresh_availability(section)

    # Sections

    async def get_section_model(self, ctx: RequestContext, section_id: UUID) -> ParkingSection:
        section = await self.sections.get_for_tenant(section_id, ctx.require_tenant())
        if not section:
            raise SectionNotFound()
        return section

    async def list_sections(self, ctx: RequestContext) -> List[SectionSummary]:
        tenant_id = ctx.require_tenant()
        sections = await self.sections.list_by_tenant(tenant_id)
        slot_ids = await self.slots.slot_ids_by_section(tenant_id)
        return [
            SectionSummary(
                **SectionRead.model_validate(section).model_dump(),
                slot_ids=slot_ids.get(section.id, []),
                occupancy_percentage=occupancy_percentage(section),
            )
            for section in sections
        ]

    async def get_section(self, ctx: RequestContext, section_id: UUID) -> SectionDetail:
        section = await self.get_section_model(ctx, section_id)
        slots = await self.slots.list_by_section(section.id)
        return SectionDetail(
            **SectionRead.model_validate(section).model_dump(),
            slots=[await self.describe_slot(slot) for slot in slots],
        )

    async def create_section(self, ctx: RequestContext, data: SectionCreate) -> ParkingSection:
        tenant_id = ctx.require_tenant()
        async with transaction(self.session):
            if await self.sections.get_by_name(tenant_id, data.name):
                raise DuplicateSection()
            section = await self.sections.create({
                "tenant_id": tenant_id,
                "name": data.name,
                "floor": data.floor,
                "capacity": data.capacity,
                "available": data.capacity,
                "status": data.status.value,
                "description": data.description,
                "hourly_rate": data.hourly_rate,
            })

        logger.info(
            f"Section created: {section.name}",
            extra=ctx.log_extra(section_id=str(section.id), capacity=section.capacity),
        )
        return section

    async def resize_section(self, section: ParkingSection, capacity: int) -> ParkingSection:
        """
        Change capacity while keeping the occupied count.

        Raises:
            CapacityBelowOccupancy: ``capacity`` is below the number of occupied slots
        """
        occupied = await self.slots.count_occupied(section.id)
        if capacity < occupied:
            raise CapacityBelowOccupancy(
                f"Cannot reduce capacity below current occupancy ({occupied})"
            )
        section.capacity = capacity
        await self.refresh_availability(section)
        return section

    async def update_section(self, ctx: RequestContext, section_id: UUID, data: SectionUpdate) -> ParkingSection:
        async with transaction(self.session):
            section = await self.get_section_model(ctx, section_id)
            changes = data.model_dump(exclude_none=True)

            name = changes.get("name")
            if name and name != section.name:
                if await self.sections.get_by_name(section.tenant_id, name):
                    raise DuplicateSection()

            capacity = changes.pop("capacity", None)
            if "status" in changes:
                changes["status"] = changes["status"].value

            section = await self.sections.update(section, changes)
            if capacity is not None and capacity != section.capacity:
                await self.resize_section(section, capacity)
            await self.session.refresh(section)

        logger.info(
            f"Section updated: {section.name}",
            extra=ctx.log_extra(section_id=str(section.id), capacity=section.capacity, available=section.available),
        )
        return section

    async def delete_section(self, ctx: RequestContext, section_id: UUID) -> None:
        async with transaction(self.session):
            section = await self.get_section_model(ctx, section_id)
            if await self.slots.count_occupied(section.id):
                raise SectionHasOccupiedSlots()
            await self.slots.delete_by_section(section.id)
            await self.session.delete(section)

        logger.info("Section deleted", extra=ctx.log_extra(section_id=str(section_id)))

    # Slots

    async def get_slot_model(self, ctx: RequestContext, slot_id: UUID) -> ParkingSlot:
        slot = await self.slots.get_for_tenant(slot_id, ctx.require_tenant())
        if not slot:
            raise SlotNotFound()
        return slot

    async def describe_slot(self, slot: ParkingSlot) -> SlotDetail:
        plate = None
        if slot.current_vehicle_id:
            vehicle = await VehicleRepository(self.session).get(slot.current_vehicle_id)
            plate = vehicle.plate_number if vehicle else None
        return SlotDetail(
            **SlotRead.model_validate(slot).model_dump(),
            current_vehicle_plate=plate,
        )

    async def list_slots(
        self,
        ctx: RequestContext,
        section_id: Optional[UUID] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        reserved: Optional[bool] = None,
    ) -> List[ParkingSlot]:
        return await self.slots.list_filtered(
            ctx.require_tenant(),
            section_id=section_id,
            status=status,
            type=type,
            reserved=reserved,
        )

    async def get_slot(self, ctx: RequestContext, slot_id: UUID) -> SlotDetail:
        return await self.describe_slot(await self.get_slot_model(ctx, slot_id))

    async def create_slot(self, ctx: RequestContext, data: SlotCreate) -> ParkingSlot:
        async with transaction(self.session):
            section = await self.get_section_model(ctx, data.section_id)
            if await self.slots.get_by_name(section.tenant_id, section.id, data.name):
                raise DuplicateSlot()
            slot = await self.slots.create({
                "tenant_id": section.tenant_id,
                "section_id": section.id,
                "name": data.name,
                "type": data.type.value,
                "reserved": data.reserved,
                "status": SlotStatus.AVAILABLE.value,
            })
            await self.refresh_availability(section)

        logger.info(
            f"Slot created: {slot.name}",
            extra=ctx.log_extra(slot_id=str(slot.id), section_id=str(section.id)),
        )
        return slot

    async def set_slot_status(self, slot: ParkingSlot, status: SlotStatus) -> ParkingSlot:
        """
        Move a slot to ``status``.

        Occupied is only reachable through vehicle entry, so a slot without a
        vehicle reference cannot be marked Occupied. Leaving Occupied drops the
        vehicle reference on both sides.
        """
        if status == slot.status:
            return slot

        if status == SlotStatus.OCCUPIED and not slot.current_vehicle_id:
            raise CannotOccupyWithoutVehicle()

        if slot.status == SlotStatus.OCCUPIED:
            if slot.current_vehicle_id:
                vehicle = await VehicleRepository(self.session).get(slot.current_vehicle_id)
                if vehicle and vehicle.slot_id == slot.id:
                    vehicle.slot_id = None
            slot.current_vehicle_id = None

        slot.status = status.value
        section = await self.sections.get(slot.section_id)
        await self.refresh_availability(section)
        return slot

    async def update_slot(self, ctx: RequestContext, slot_id: UUID, data: SlotUpdate) -> ParkingSlot:
        async with transaction(self.session):
            slot = await self.get_slot_model(ctx, slot_id)
            old_section_id = slot.section_id
            target_section_id = data.section_id or slot.section_id

            if data.section_id and data.section_id != old_section_id:
                try:
                    await self.get_section_model(ctx, data.section_id)
                except SectionNotFound:
                    raise SectionNotFound("New parking section not found")

            new_name = data.name or slot.name
            if new_name != slot.name or target_section_id != old_section_id:
                existing = await self.slots.get_by_name(slot.tenant_id, target_section_id, new_name)
                if existing and existing.id != slot.id:
                    raise DuplicateSlot()

            slot.name = new_name
            if data.type:
                slot.type = data.type.value
            if data.reserved is not None:
                slot.reserved = data.reserved
            slot.section_id = target_section_id

            if data.status:
                await self.set_slot_status(slot, data.status)

            if target_section_id != old_section_id:
                await self.refresh_section(old_section_id)
                await self.refresh_section(target_section_id)

            await self.session.flush()
            await self.session.refresh(slot)

        logger.info(
            f"Slot updated: {slot.name}",
            extra=ctx.log_extra(slot_id=str(slot.id), section_id=str(slot.section_id), status=slot.status),
        )
        return slot

    async def delete_slot(self, ctx: RequestContext, slot_id: UUID) -> None:
        async with transaction(self.session):
            slot = await self.get_slot_model(ctx, slot_id)
            if slot.status == SlotStatus.OCCUPIED:
                raise SlotOccupied()
            section_id = slot.section_id
            await self.session.delete(slot)
            await self.refresh_section(section_id)

        logger.info("Slot deleted", extra=ctx.log_extra(slot_id=str(slot_id)))
