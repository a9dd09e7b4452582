# backend/parkhub/api/dependencies.py
from dataclasses import dataclass
from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from parkhub.core.config import settings
from parkhub.core.constants import PlanType, UserRole
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import (
    AuthenticationError,
    TenantIdentifierMissing,
    TenantMismatch,
    TenantNotFound,
)
from parkhub.core.rbac import Permission, is_platform_role
from parkhub.core.tenant import resolve_tenant
from parkhub.db.database import get_db
from parkhub.db.models.user import User
from parkhub.services.auth_service import AuthService
from parkhub.services.tenant_service import TenantService, check_plan

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if not credentials:
        raise AuthenticationError()
    return await AuthService(db).verify(credentials.credentials)


async def get_request_context(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RequestContext:
    """
    Resolve the acting tenant and bind it to the caller.

    Non-platform users always carry a tenant claim, so resolution cannot come
    up empty for them and their tenant must match the resolved one. A
    SuperAdmin may act without any tenant identifier.
    """
    platform = is_platform_role(current_user.role)
    explicit_id = request.headers.get("x-tenant-id") or request.query_params.get("tenant_id")
    api_key = request.headers.get("x-api-key")
    tenant_id = None
    try:
        tenant = await resolve_tenant(
            db,
            tenant_id=explicit_id,
            api_key=api_key,
            host=request.headers.get("host"),
            token_tenant_id=str(current_user.tenant_id) if current_user.tenant_id else None,
        )
        tenant_id = tenant.id
    except TenantIdentifierMissing:
        if not platform:
            raise
    except TenantNotFound:
        # an unmatched host is not a tenant choice for platform callers
        if not platform or explicit_id or api_key:
            raise

    if not platform and current_user.tenant_id != tenant_id:
        raise TenantMismatch()

    return RequestContext(
        user_id=current_user.id,
        role=UserRole(current_user.role),
        user_tenant_id=current_user.tenant_id,
        tenant_id=tenant_id,
        request_id=getattr(request.state, "request_id", None),
    )


def require_permission(*permissions: Permission):
    """Dependency factory: caller's role must grant every permission"""
    async def permission_checker(
        ctx: RequestContext = Depends(get_request_context),
    ) -> RequestContext:
        ctx.authorize(*permissions)
        return ctx

    return permission_checker


def require_plan(plan: PlanType, *permissions: Permission):
    """Dependency factory: resolved tenant must be on ``plan`` or higher"""
    async def plan_checker(
        ctx: RequestContext = Depends(require_permission(*permissions)),
        db: AsyncSession = Depends(get_db),
    ) -> RequestContext:
        tenant = await TenantService(db).get_current(ctx)
        check_plan(tenant, plan)
        return ctx

    return plan_checker


@dataclass
class PageParams:
    page: int
    limit: int


def pagination(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(page=page, limit=limit)
