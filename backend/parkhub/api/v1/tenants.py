# backend/parkhub/api/v1/tenants.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from parkhub.api.dependencies import PageParams, get_request_context, pagination, require_permission
from parkhub.core.context import RequestContext
from parkhub.core.rbac import Permission
from parkhub.db.database import get_db
from parkhub.schemas.common import ApiResponse, Page
from parkhub.schemas.tenant import TenantCreate, TenantRead, TenantUpdate
from parkhub.services.tenant_service import TenantService

router = APIRouter()

can_manage_tenants = require_permission(Permission.TENANT_MANAGE)


@router.get("/current", response_model=ApiResponse[TenantRead])
async def get_current_tenant(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Tenant resolved for this request"""
    tenant = await TenantService(db).get_current(ctx)
    return ApiResponse(data=TenantRead.model_validate(tenant))


@router.get("", response_model=ApiResponse[Page[TenantRead]])
async def list_tenants(
    paging: PageParams = Depends(pagination),
    ctx: RequestContext = Depends(can_manage_tenants),
    db: AsyncSession = Depends(get_db)
):
    tenants, total = await TenantService(db).list(paging.page, paging.limit)
    return ApiResponse(
        data=Page.build([TenantRead.model_validate(t) for t in tenants], total, paging.page, paging.limit)
    )


@router.post("", response_model=ApiResponse[TenantRead], status_code=status.HTTP_201_CREATED)
async def create_tenant(
    tenant_in: TenantCreate,
    ctx: RequestContext = Depends(can_manage_tenants),
    db: AsyncSession = Depends(get_db)
):
    tenant = await TenantService(db).create(ctx, tenant_in)
    return ApiResponse(data=TenantRead.model_validate(tenant), message="Tenant created successfully")


@router.get("/{tenant_id}", response_model=ApiResponse[TenantRead])
async def get_tenant(
    tenant_id: UUID,
    ctx: RequestContext = Depends(can_manage_tenants),
    db: AsyncSession = Depends(get_db)
):
    tenant = await TenantService(db).get(tenant_id)
    return ApiResponse(data=TenantRead.model_validate(tenant))


@router.put("/{tenant_id}", response_model=ApiResponse[TenantRead])
async def update_tenant(
    tenant_id: UUID,
    tenant_in: TenantUpdate,
    ctx: RequestContext = Depends(can_manage_tenants),
    db: AsyncSession = Depends(get_db)
):
    tenant = await TenantService(db).update(ctx, tenant_id, tenant_in)
    return ApiResponse(data=TenantRead.model_validate(tenant), message="Tenant updated successfully")


@router.delete("/{tenant_id}", response_model=ApiResponse[None])
async def delete_tenant(
    tenant_id: UUID,
    ctx: RequestContext = Depends(can_manage_tenants),
    db: AsyncSession = Depends(get_db)
):
    await TenantService(db).delete(ctx, tenant_id)
    return ApiResponse(message="Tenant deleted successfully")
