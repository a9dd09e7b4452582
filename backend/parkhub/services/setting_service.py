# backend/parkhub/services/setting_service.py
from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.config import settings
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import SettingsNotFound
from parkhub.core.logging import get_logger
from parkhub.db.database import transaction
from parkhub.db.models.setting import Setting
from parkhub.db.models.tenant import Tenant
from parkhub.db.repositories.setting_repository import SettingRepository
from parkhub.schemas.setting import SettingsUpdate

logger = get_logger("settings")


def default_settings(tenant: Tenant) -> Dict[str, Any]:
    """Settings document a new tenant starts with"""
    return {
        "general": {
            "company_name": tenant.name,
            "address": "",
            "contact_email": tenant.contact_email,
            "contact_phone": tenant.contact_phone or "",
            "dark_mode": False,
        },
        "pricing": {
            "hourly_rate": settings.DEFAULT_HOURLY_RATE,
            "daily_rate": 50.0,
            "monthly_rate": 150.0,
            "weekend_pricing": False,
        },
        "api": {
            "plate_recognizer_key": "",
            "payment_gateway_key": "",
        },
        "notifications": {
            "email_enabled": True,
            "sms_enabled": False,
            "capacity_alerts_enabled": True,
        },
    }


class SettingService:
    """Per-tenant settings document"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = SettingRepository(session)

    async def create_defaults(self, tenant: Tenant) -> Setting:
        """Flush the default document; the caller owns the transaction"""
        return await self.repo.create({
            "tenant_id": tenant.id,
            "settings": default_settings(tenant),
        })

    async def get(self, ctx: RequestContext) -> Setting:
        setting = await self.repo.get_by_tenant(ctx.require_tenant())
        if not setting:
            raise SettingsNotFound()
        return setting

    async def update(self, ctx: RequestContext, data: SettingsUpdate) -> Setting:
        """Merge supplied categories key by key"""
        async with transaction(self.session):
            setting = await self.get(ctx)
            merged = {k: dict(v) for k, v in (setting.settings or {}).items()}
            changes = data.model_dump(exclude_none=True)
            for category, values in changes.items():
                merged.setdefault(category, {}).update(values)

            # JSON columns only notice reassignment
            setting = await self.repo.update(setting, {"settings": merged})

        logger.info(
            "Settings updated",
            extra=ctx.log_extra(categories=sorted(changes)),
        )
        return setting
