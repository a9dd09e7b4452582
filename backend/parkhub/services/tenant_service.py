# backend/parkhub/services/tenant_service.py
"""
Tenant directory: platform-level tenant lifecycle.
"""
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID
import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.config import settings
from parkhub.core.constants import PLAN_HIERARCHY, PlanType, TenantStatus
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import DuplicateDomain, PlanTooLow, TenantHasLiveData, TenantNotFound
from parkhub.core.logging import get_logger
from parkhub.core.timeutils import utcnow
from parkhub.db.database import transaction
from parkhub.db.models.tenant import Tenant
from parkhub.db.repositories.tenant_repository import TenantRepository
from parkhub.schemas.tenant import TenantCreate, TenantUpdate
from parkhub.services.setting_service import SettingService

logger = get_logger("tenants")


def generate_api_key() -> str:
    return f"pk_{secrets.token_hex(24)}"


def trial_subscription() -> Dict[str, Any]:
    start = utcnow()
    return {
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=settings.TRIAL_DAYS)).isoformat(),
        "auto_renew": True,
    }


def check_plan(tenant: Tenant, required_plan: PlanType) -> None:
    """Raise PlanTooLow when the tenant's plan ranks below ``required_plan``"""
    current = PLAN_HIERARCHY.get(tenant.plan, 0)
    if current < PLAN_HIERARCHY[required_plan]:
        raise PlanTooLow(f"This feature requires a {required_plan.value} plan or higher")


class TenantService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = TenantRepository(session)

    async def create_tenant(self, data: Dict[str, Any], created_by: Optional[UUID] = None) -> Tenant:
        """Insert a tenant plus its default settings without committing"""
        if await self.repo.get_by_domain(data["domain"]):
            raise DuplicateDomain()

        plan = data.get("plan") or settings.DEFAULT_TENANT_PLAN
        status = data.get("status") or TenantStatus.ACTIVE
        tenant = await self.repo.create({
            "name": data["name"],
            "domain": data["domain"].lower(),
            "plan": getattr(plan, "value", plan),
            "status": getattr(status, "value", status),
            "contact_email": data["contact_email"],
            "contact_phone": data.get("contact_phone"),
            "address": data.get("address") or {},
            "subscription": data.get("subscription") or trial_subscription(),
            "settings": data.get("settings") or {},
            "api_key": generate_api_key(),
            "created_by": created_by,
        })
        await SettingService(self.session).create_defaults(tenant)
        return tenant

    async def create(self, ctx: RequestContext, data: TenantCreate) -> Tenant:
        async with transaction(self.session):
            tenant = await self.create_tenant(data.model_dump(), created_by=ctx.user_id)

        logger.info(
            f"Tenant created: {tenant.domain}",
            extra=ctx.log_extra(created_tenant_id=str(tenant.id)),
        )
        return tenant

    async def list(self, page: int, limit: int) -> Tuple[List[Tenant], int]:
        return await self.repo.list_paginated(skip=(page - 1) * limit, limit=limit)

    async def get(self, tenant_id: UUID) -> Tenant:
        tenant = await self.repo.get(tenant_id)
        if not tenant:
            raise TenantNotFound()
        return tenant

    async def get_current(self, ctx: RequestContext) -> Tenant:
        return await self.get(ctx.require_tenant())

    async def update(self, ctx: RequestContext, tenant_id: UUID, data: TenantUpdate) -> Tenant:
        async with transaction(self.session):
            tenant = await self.get(tenant_id)
            changes = data.model_dump(exclude_none=True)

            new_domain = changes.get("domain")
            if new_domain and new_domain != tenant.domain:
                if await self.repo.get_by_domain(new_domain):
                    raise DuplicateDomain()

            for key in ("plan", "status"):
                if changes.get(key) is not None:
                    changes[key] = changes[key].value

            tenant = await self.repo.update(tenant, changes)

        logger.info(
            f"Tenant updated: {tenant.domain}",
            extra=ctx.log_extra(updated_tenant_id=str(tenant.id), fields=sorted(changes)),
        )
        return tenant

    async def delete(self, ctx: RequestContext, tenant_id: UUID) -> None:
        """Remove a tenant that no longer owns sections or parked vehicles"""
        async with transaction(self.session):
            tenant = await self.get(tenant_id)
            stats = await self.repo.get_usage_stats(tenant.id)
            if stats["sections_count"] or stats["parked_vehicles"]:
                raise TenantHasLiveData(errors=[
                    f"sections: {stats['sections_count']}",
                    f"parked vehicles: {stats['parked_vehicles']}",
                ])
            await self.repo.purge(tenant.id)

        logger.warning(
            f"Tenant deleted: {tenant.domain}",
            extra=ctx.log_extra(deleted_tenant_id=str(tenant_id)),
        )
