# backend/parkhub/api/v1/settings.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.dependencies import require_permission
from parkhub.core.context import RequestContext
from parkhub.core.rbac import Permission
from parkhub.db.database import get_db
from parkhub.schemas.common import ApiResponse
from parkhub.schemas.setting import SettingsRead, SettingsUpdate
from parkhub.services.setting_service import SettingService

router = APIRouter()


@router.get("", response_model=ApiResponse[SettingsRead])
async def get_settings(
    ctx: RequestContext = Depends(require_permission(Permission.SETTINGS_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    setting = await SettingService(db).get(ctx)
    return ApiResponse(data=SettingsRead.model_validate(setting))


@router.put("", response_model=ApiResponse[SettingsRead])
async def update_settings(
    settings_in: SettingsUpdate,
    ctx: RequestContext = Depends(require_permission(Permission.SETTINGS_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    setting = await SettingService(db).update(ctx, settings_in)
    return ApiResponse(data=SettingsRead.model_validate(setting), message="Settings updated successfully")
