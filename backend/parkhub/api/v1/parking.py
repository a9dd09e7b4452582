# backend/parkhub/api/v1/parking.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from parkhub.api.dependencies import require_permission
from parkhub.core.constants import SlotStatus, SlotType
from parkhub.core.context import RequestContext
from parkhub.core.rbac import Permission
from parkhub.db.database import get_db
from parkhub.schemas.common import ApiResponse
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
from parkhub.services.parking_service import ParkingService

router = APIRouter()

can_view = require_permission(Permission.INVENTORY_VIEW)
can_manage = require_permission(Permission.INVENTORY_MANAGE)


# Sections

@router.get("/sections", response_model=ApiResponse[List[SectionSummary]])
async def list_sections(
    ctx: RequestContext = Depends(can_view),
    db: AsyncSession = Depends(get_db)
):
    return ApiResponse(data=await ParkingService(db).list_sections(ctx))


@router.get("/sections/{section_id}", response_model=ApiResponse[SectionDetail])
async def get_section(
    section_id: UUID,
    ctx: RequestContext = Depends(can_view),
    db: AsyncSession = Depends(get_db)
):
    return ApiResponse(data=await ParkingService(db).get_section(ctx, section_id))


@router.post("/sections", response_model=ApiResponse[SectionRead], status_code=status.HTTP_201_CREATED)
async def create_section(
    section_in: SectionCreate,
    ctx: RequestContext = Depends(can_manage),
    db: AsyncSession = Depends(get_db)
):
    section = await ParkingService(db).create_section(ctx, section_in)
    return ApiResponse(data=SectionRead.model_validate(section), message="Parking section created successfully")


@router.put("/sections/{section_id}", response_model=ApiResponse[SectionRead])
async def update_section(
    section_id: UUID,
    section_in: SectionUpdate,
    ctx: RequestContext = Depends(can_manage),
    db: AsyncSession = Depends(get_db)
):
    section = await ParkingService(db).update_section(ctx, section_id, section_in)
    return ApiResponse(data=SectionRead.model_validate(section), message="Parking section updated successfully")


@router.delete("/sections/{section_id}", response_model=ApiResponse[None])
async def delete_section(
    section_id: UUID,
    ctx: RequestContext = Depends(can_manage),
    db: AsyncSession = Depends(get_db)
):
    await ParkingService(db).delete_section(ctx, section_id)
    return ApiResponse(message="Parking section deleted successfully")


# Slots

@router.get("/slots", response_model=ApiResponse[List[SlotRead]])
async def list_slots(
    section_id: Optional[UUID] = None,
    slot_status: Optional[SlotStatus] = Query(None, alias="status"),
    slot_type: Optional[SlotType] = Query(None, alias="type"),
    reserved: Optional[bool] = None,
    ctx: RequestContext = Depends(can_view),
    db: AsyncSession = Depends(get_db)
):
    slots = await ParkingService(db).list_slots(
        ctx,
        section_id=section_id,
        status=slot_status.value if slot_status else None,
        type=slot_type.value if slot_type else None,
        reserved=reserved,
    )
    return ApiResponse(data=[SlotRead.model_validate(s) for s in slots])


@router.get("/slots/{slot_id}", response_model=ApiResponse[SlotDetail])
async def get_slot(
    slot_id: UUID,
    ctx: RequestContext = Depends(can_view),
    db: AsyncSession = Depends(get_db)
):
    return ApiResponse(data=await ParkingService(db).get_slot(ctx, slot_id))


@router.post("/slots", response_model=ApiResponse[SlotRead], status_code=status.HTTP_201_CREATED)
async def create_slot(
    slot_in: SlotCreate,
    ctx: RequestContext = Depends(can_manage),
    db: AsyncSession = Depends(get_db)
):
    slot = await ParkingService(db).create_slot(ctx, slot_in)
    return ApiResponse(data=SlotRead.model_validate(slot), message="Parking slot created successfully")


@router.put("/slots/{slot_id}", response_model=ApiResponse[SlotRead])
async def update_slot(
    slot_id: UUID,
    slot_in: SlotUpdate,
    ctx: RequestContext = Depends(can_manage),
    db: AsyncSession = Depends(get_db)
):
    slot = await ParkingService(db).update_slot(ctx, slot_id, slot_in)
    return ApiResponse(data=SlotRead.model_validate(slot), message="Parking slot updated successfully")


@router.delete("/slots/{slot_id}", response_model=ApiResponse[None])
async def delete_slot(
    slot_id: UUID,
    ctx: RequestContext = Depends(can_manage),
    db: AsyncSession = Depends(get_db)
):
    await ParkingService(db).delete_slot(ctx, slot_id)
    return ApiResponse(message="Parking slot deleted successfully")
