# backend/parkhub/api/v1/auth.py
from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from parkhub.api.dependencies import get_request_context
from parkhub.core.context import RequestContext
from parkhub.core.tenant import parse_uuid
from parkhub.db.database import get_db
from parkhub.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from parkhub.schemas.common import ApiResponse
from parkhub.schemas.tenant import TenantRead, TenantSummary
from parkhub.schemas.user import UserRead
from parkhub.services.auth_service import AuthService, token_lifetime_seconds

router = APIRouter()


@router.post("/login", response_model=ApiResponse[TokenResponse])
async def login(
    request: LoginRequest,
    x_tenant_id: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
):
    """Login user"""
    tenant_id = parse_uuid(x_tenant_id, "tenant ID") if x_tenant_id else None
    user, token = await AuthService(db).authenticate(request.email, request.password, tenant_id)
    return ApiResponse(
        data=TokenResponse(
            access_token=token,
            expires_in=token_lifetime_seconds(),
            user=UserRead.model_validate(user),
        ),
        message="Login successful",
    )


@router.post("/register", response_model=ApiResponse[RegisterResponse], status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Register a new tenant and its first admin"""
    tenant, user, token = await AuthService(db).register(request)
    return ApiResponse(
        data=RegisterResponse(
            access_token=token,
            expires_in=token_lifetime_seconds(),
            user=UserRead.model_validate(user),
            tenant=TenantRead.model_validate(tenant),
        ),
        message="Registration successful",
    )


@router.get("/profile", response_model=ApiResponse[ProfileResponse])
async def get_profile(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    user, tenant = await AuthService(db).get_profile(ctx)
    return ApiResponse(
        data=ProfileResponse(
            **UserRead.model_validate(user).model_dump(),
            tenant=TenantSummary.model_validate(tenant) if tenant else None,
        )
    )


@router.post("/change-password", response_model=ApiResponse[None])
async def change_password(
    request: ChangePasswordRequest,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    await AuthService(db).change_password(ctx, request.current_password, request.new_password)
    return ApiResponse(message="Password changed successfully")
