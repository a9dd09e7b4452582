# backend/parkhub/api/v1/vehicles.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from parkhub.api.dependencies import PageParams, pagination, require_permission
from parkhub.core.constants import VehicleStatus
from parkhub.core.context import RequestContext
from parkhub.core.rbac import Permission
from parkhub.db.database import get_db
from parkhub.schemas.common import ApiResponse, Page
from parkhub.schemas.vehicle import VehicleDetail, VehicleEntry, VehicleExit, VehicleRead, VehicleUpdate
from parkhub.services.vehicle_service import VehicleService

router = APIRouter()

can_register = require_permission(Permission.VEHICLE_REGISTER)
can_view = require_permission(Permission.VEHICLE_VIEW)
can_edit = require_permission(Permission.VEHICLE_EDIT)


@router.post("/entry", response_model=ApiResponse[VehicleRead], status_code=status.HTTP_201_CREATED)
async def register_entry(
    entry: VehicleEntry,
    ctx: RequestContext = Depends(can_register),
    db: AsyncSession = Depends(get_db)
):
    """Register vehicle entry"""
    vehicle = await VehicleService(db).register_entry(ctx, entry)
    return ApiResponse(data=VehicleRead.model_validate(vehicle), message="Vehicle entry registered successfully")


@router.post("/exit", response_model=ApiResponse[VehicleRead])
async def register_exit(
    exit_in: VehicleExit,
    ctx: RequestContext = Depends(can_register),
    db: AsyncSession = Depends(get_db)
):
    """Register vehicle exit"""
    vehicle = await VehicleService(db).register_exit(ctx, exit_in)
    return ApiResponse(data=VehicleRead.model_validate(vehicle), message="Vehicle exit registered successfully")


@router.get("", response_model=ApiResponse[Page[VehicleRead]])
async def list_vehicles(
    vehicle_status: Optional[VehicleStatus] = Query(None, alias="status"),
    paging: PageParams = Depends(pagination),
    ctx: RequestContext = Depends(can_view),
    db: AsyncSession = Depends(get_db)
):
    vehicles, total = await VehicleService(db).list(
        ctx,
        status=vehicle_status.value if vehicle_status else None,
        page=paging.page,
        limit=paging.limit,
    )
    return ApiResponse(
        data=Page.build([VehicleRead.model_validate(v) for v in vehicles], total, paging.page, paging.limit)
    )


@router.get("/plate/{plate_number}", response_model=ApiResponse[VehicleDetail])
async def find_by_plate(
    plate_number: str,
    ctx: RequestContext = Depends(can_view),
    db: AsyncSession = Depends(get_db)
):
    return ApiResponse(data=await VehicleService(db).get_by_plate(ctx, plate_number))


@router.get("/{vehicle_id}", response_model=ApiResponse[VehicleDetail])
async def get_vehicle(
    vehicle_id: UUID,
    ctx: RequestContext = Depends(can_view),
    db: AsyncSession = Depends(get_db)
):
    return ApiResponse(data=await VehicleService(db).get(ctx, vehicle_id))


@router.put("/{vehicle_id}", response_model=ApiResponse[VehicleRead])
async def update_vehicle(
    vehicle_id: UUID,
    vehicle_in: VehicleUpdate,
    ctx: RequestContext = Depends(can_edit),
    db: AsyncSession = Depends(get_db)
):
    vehicle = await VehicleService(db).update(ctx, vehicle_id, vehicle_in)
    return ApiResponse(data=VehicleRead.model_validate(vehicle), message="Vehicle updated successfully")
