# backend/parkhub/services/vehicle_service.py
"""
Vehicle ledger and entry/exit bookkeeping.

Entry and exit each touch the vehicle row, at most one slot and that
slot's section. All of it happens inside one transaction: either every
write lands or none does.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import DEFAULT_VEHICLE_TYPE, SlotStatus, VehicleStatus
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import (
    AlreadyParked,
    SlotNotAvailable,
    SlotNotFound,
    ValidationError,
    VehicleNotFound,
    VehicleNotParked,
)
from parkhub.core.logging import get_logger
from parkhub.core.timeutils import utcnow
from parkhub.db.database import transaction
from parkhub.db.models.vehicle import Vehicle
from parkhub.db.repositories.parking_repository import SlotRepository
from parkhub.db.repositories.payment_repository import PaymentRepository
from parkhub.db.repositories.vehicle_repository import VehicleRepository
from parkhub.schemas.vehicle import VehicleDetail, VehicleEntry, VehicleExit, VehicleRead, VehicleUpdate
from parkhub.services.parking_service import ParkingService

logger = get_logger("vehicles")


def normalize_plate(plate_number: Optional[str]) -> str:
    """Single normalization point for plate numbers: trimmed, upper case"""
    plate = (plate_number or "").strip().upper()
    if not plate:
        raise ValidationError("Plate number is required")
    return plate


class VehicleService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = VehicleRepository(session)
        self.slots = SlotRepository(session)
        self.parking = ParkingService(session)

    async def register_entry(self, ctx: RequestContext, data: VehicleEntry) -> Vehicle:
        """
        Park a vehicle, optionally in a specific slot.

        Absent or Exited -> Parked. An existing ledger row for the plate is
        reused.

        Raises:
            AlreadyParked: the plate is already parked in this tenant
            SlotNotFound: ``slot_id`` does not resolve inside the tenant
            SlotNotAvailable: the slot is not Available
        """
        tenant_id = ctx.require_tenant()
        plate = normalize_plate(data.plate_number)

        async with transaction(self.session):
            if await self.repo.get_parked_by_plate(tenant_id, plate):
                raise AlreadyParked()

            slot = None
            if data.slot_id:
                slot = await self.slots.get_for_tenant(data.slot_id, tenant_id)
                if not slot:
                    raise SlotNotFound()
                if slot.status != SlotStatus.AVAILABLE:
                    raise SlotNotAvailable()

            now = utcnow()
            vehicle = await self.repo.get_by_plate(tenant_id, plate)
            if vehicle:
                reentered = await self.repo.reenter(vehicle.id, {
                    "entry_time": now,
                    "exit_time": None,
                    "slot_id": slot.id if slot else None,
                    "type": data.type.value if data.type else (vehicle.type or DEFAULT_VEHICLE_TYPE.value),
                })
                if not reentered:
                    raise AlreadyParked()
                await self.session.refresh(vehicle)
            else:
                vehicle = await self.repo.create({
                    "tenant_id": tenant_id,
                    "plate_number": plate,
                    "type": (data.type or DEFAULT_VEHICLE_TYPE).value,
                    "status": VehicleStatus.PARKED.value,
                    "entry_time": now,
                    "slot_id": slot.id if slot else None,
                })

            if slot:
                if not await self.slots.occupy(slot.id, vehicle.id):
                    raise SlotNotAvailable()
                await self.parking.refresh_section(slot.section_id)

        logger.info(
            f"Vehicle entry: {plate}",
            extra=ctx.log_extra(
                plate_number=plate,
                vehicle_id=str(vehicle.id),
                slot_id=str(slot.id) if slot else None,
            ),
        )
        return vehicle

    async def register_exit(self, ctx: RequestContext, data: VehicleExit) -> Vehicle:
        """
        Parked -> Exited, freeing the held slot.

        Raises:
            VehicleNotParked: no parked vehicle with this plate in the tenant
        """
        tenant_id = ctx.require_tenant()
        plate = normalize_plate(data.plate_number)

        async with transaction(self.session):
            vehicle = await self.repo.get_parked_by_plate(tenant_id, plate)
            if not vehicle:
                raise VehicleNotParked()

            released_slot_id = vehicle.slot_id
            vehicle.status = VehicleStatus.EXITED.value
            vehicle.exit_time = utcnow()

            if released_slot_id:
                slot = await self.slots.get(released_slot_id)
                vehicle.slot_id = None
                if slot:
                    await self.slots.release(slot.id)
                    await self.parking.refresh_section(slot.section_id)

            await self.session.flush()
            await self.session.refresh(vehicle)

        logger.info(
            f"Vehicle exit: {plate}",
            extra=ctx.log_extra(
                plate_number=plate,
                vehicle_id=str(vehicle.id),
                slot_id=str(released_slot_id) if released_slot_id else None,
            ),
        )
        return vehicle

    async def list(
        self,
        ctx: RequestContext,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 100,
    ) -> Tuple[List[Vehicle], int]:
        return await self.repo.list_by_tenant(
            ctx.require_tenant(),
            status=status,
            skip=(page - 1) * limit,
            limit=limit,
        )

    async def get_model(self, ctx: RequestContext, vehicle_id: UUID) -> Vehicle:
        vehicle = await self.repo.get_for_tenant(vehicle_id, ctx.require_tenant())
        if not vehicle:
            raise VehicleNotFound()
        return vehicle

    async def describe(self, vehicle: Vehicle) -> VehicleDetail:
        slot_name = None
        if vehicle.slot_id:
            slot = await self.slots.get(vehicle.slot_id)
            slot_name = slot.name if slot else None
        payments = await PaymentRepository(self.session).list_by_vehicle(vehicle.id)
        return VehicleDetail(
            **VehicleRead.model_validate(vehicle).model_dump(),
            slot_name=slot_name,
            payment_ids=[p.id for p in payments],
        )

    async def get(self, ctx: RequestContext, vehicle_id: UUID) -> VehicleDetail:
        return await self.describe(await self.get_model(ctx, vehicle_id))

    async def get_by_plate(self, ctx: RequestContext, plate_number: str) -> VehicleDetail:
        vehicle = await self.repo.get_by_plate(ctx.require_tenant(), normalize_plate(plate_number))
        if not vehicle:
            raise VehicleNotFound()
        return await self.describe(vehicle)

    async def update(self, ctx: RequestContext, vehicle_id: UUID, data: VehicleUpdate) -> Vehicle:
        """Patch descriptive fields only"""
        async with transaction(self.session):
            vehicle = await self.get_model(ctx, vehicle_id)
            changes = data.model_dump(exclude_none=True)
            if "type" in changes:
                changes["type"] = changes["type"].value
            vehicle = await self.repo.update(vehicle, changes)

        logger.info(
            f"Vehicle updated: {vehicle.plate_number}",
            extra=ctx.log_extra(vehicle_id=str(vehicle.id), fields=sorted(changes)),
        )
        return vehicle
