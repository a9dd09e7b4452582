# backend/parkhub/api/v1/reports.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from parkhub.api.dependencies import PageParams, pagination, require_permission, require_plan
from parkhub.core.constants import PlanType, ReportType
from parkhub.core.context import RequestContext
from parkhub.core.rbac import Permission
from parkhub.db.database import get_db
from parkhub.schemas.common import ApiResponse, Page
from parkhub.schemas.report import ReportRead, ReportRequest, ScheduleCreate, ScheduleUpdate
from parkhub.services.report_service import ReportService

router = APIRouter()

can_report = require_permission(Permission.REPORT_MANAGE)
can_schedule = require_plan(PlanType.PREMIUM, Permission.REPORT_MANAGE)


@router.post("/occupancy", response_model=ApiResponse[ReportRead], status_code=status.HTTP_201_CREATED)
async def generate_occupancy_report(
    request: ReportRequest,
    ctx: RequestContext = Depends(can_report),
    db: AsyncSession = Depends(get_db)
):
    report = await ReportService(db).generate_occupancy(ctx, request)
    return ApiResponse(data=ReportRead.model_validate(report), message="Occupancy report generated successfully")


@router.post("/revenue", response_model=ApiResponse[ReportRead], status_code=status.HTTP_201_CREATED)
async def generate_revenue_report(
    request: ReportRequest,
    ctx: RequestContext = Depends(can_report),
    db: AsyncSession = Depends(get_db)
):
    report = await ReportService(db).generate_revenue(ctx, request)
    return ApiResponse(data=ReportRead.model_validate(report), message="Revenue report generated successfully")


@router.post("/scheduled", response_model=ApiResponse[ReportRead], status_code=status.HTTP_201_CREATED)
async def create_scheduled_report(
    schedule_in: ScheduleCreate,
    ctx: RequestContext = Depends(can_schedule),
    db: AsyncSession = Depends(get_db)
):
    report = await ReportService(db).create_schedule(ctx, schedule_in)
    return ApiResponse(data=ReportRead.model_validate(report), message="Scheduled report created successfully")


@router.put("/scheduled/{report_id}", response_model=ApiResponse[ReportRead])
async def update_scheduled_report(
    report_id: UUID,
    schedule_in: ScheduleUpdate,
    ctx: RequestContext = Depends(can_schedule),
    db: AsyncSession = Depends(get_db)
):
    report = await ReportService(db).update_schedule(ctx, report_id, schedule_in)
    return ApiResponse(data=ReportRead.model_validate(report), message="Scheduled report updated successfully")


@router.get("", response_model=ApiResponse[Page[ReportRead]])
async def list_reports(
    report_type: Optional[ReportType] = Query(None, alias="type"),
    paging: PageParams = Depends(pagination),
    ctx: RequestContext = Depends(can_report),
    db: AsyncSession = Depends(get_db)
):
    reports, total = await ReportService(db).list(
        ctx,
        type=report_type.value if report_type else None,
        page=paging.page,
        limit=paging.limit,
    )
    return ApiResponse(
        data=Page.build([ReportRead.model_validate(r) for r in reports], total, paging.page, paging.limit)
    )


@router.get("/{report_id}", response_model=ApiResponse[ReportRead])
async def get_report(
    report_id: UUID,
    ctx: RequestContext = Depends(can_report),
    db: AsyncSession = Depends(get_db)
):
    report = await ReportService(db).get(ctx, report_id)
    return ApiResponse(data=ReportRead.model_validate(report))


@router.delete("/{report_id}", response_model=ApiResponse[None])
async def delete_report(
    report_id: UUID,
    ctx: RequestContext = Depends(can_report),
    db: AsyncSession = Depends(get_db)
):
    await ReportService(db).delete(ctx, report_id)
    return ApiResponse(message="Report deleted successfully")
