# backend/parkhub/api/v1/users.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from parkhub.api.dependencies import PageParams, pagination, require_permission
from parkhub.core.constants import UserRole, UserStatus
from parkhub.core.context import RequestContext
from parkhub.core.rbac import Permission
from parkhub.db.database import get_db
from parkhub.schemas.common import ApiResponse, Page
from parkhub.schemas.user import UserCreate, UserRead, UserUpdate
from parkhub.services.user_service import UserService

router = APIRouter()

can_manage_users = require_permission(Permission.USER_MANAGE)


@router.get("", response_model=ApiResponse[Page[UserRead]])
async def list_users(
    role: Optional[UserRole] = None,
    user_status: Optional[UserStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    paging: PageParams = Depends(pagination),
    ctx: RequestContext = Depends(can_manage_users),
    db: AsyncSession = Depends(get_db)
):
    """List users of the current tenant"""
    users, total = await UserService(db).list(
        ctx,
        role=role.value if role else None,
        status=user_status.value if user_status else None,
        search=search,
        page=paging.page,
        limit=paging.limit,
    )
    return ApiResponse(
        data=Page.build([UserRead.model_validate(u) for u in users], total, paging.page, paging.limit)
    )


@router.post("", response_model=ApiResponse[UserRead], status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    ctx: RequestContext = Depends(can_manage_users),
    db: AsyncSession = Depends(get_db)
):
    user = await UserService(db).create(ctx, user_in)
    return ApiResponse(data=UserRead.model_validate(user), message="User created successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserRead])
async def get_user(
    user_id: UUID,
    ctx: RequestContext = Depends(can_manage_users),
    db: AsyncSession = Depends(get_db)
):
    user = await UserService(db).get(ctx, user_id)
    return ApiResponse(data=UserRead.model_validate(user))


@router.put("/{user_id}", response_model=ApiResponse[UserRead])
async def update_user(
    user_id: UUID,
    user_in: UserUpdate,
    ctx: RequestContext = Depends(can_manage_users),
    db: AsyncSession = Depends(get_db)
):
    user = await UserService(db).update(ctx, user_id, user_in)
    return ApiResponse(data=UserRead.model_validate(user), message="User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    user_id: UUID,
    ctx: RequestContext = Depends(can_manage_users),
    db: AsyncSession = Depends(get_db)
):
    await UserService(db).delete(ctx, user_id)
    return ApiResponse(message="User deleted successfully")
