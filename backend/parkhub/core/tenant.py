"""Tenant resolution for inbound requests."""
from typing import Optional, Any
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from parkhub.core.config import settings
from parkhub.core.constants import OPERATIONAL_TENANT_STATUSES
from parkhub.core.exceptions import (
    TenantIdentifierMissing,
    TenantNotActive,
    TenantNotFound,
    ValidationError,
)
from parkhub.db.models.tenant import Tenant
from parkhub.db.repositories.tenant_repository import TenantRepository


def parse_uuid(value: Any, label: str = "ID") -> uuid.UUID:
    """Coerce a header/path value to UUID or raise a 400"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError):
        raise ValidationError(f"Invalid {label} format")


def normalize_host(host: Optional[str]) -> Optional[str]:
    """Strip the port and drop hosts that serve the API itself"""
    if not host:
        return None
    hostname = host.split(":", 1)[0].strip().lower()
    platform_hosts = {h.lower() for h in settings.PLATFORM_HOSTS}
    if not hostname or hostname in platform_hosts:
        return None
    return hostname


async def resolve_tenant(
    session: AsyncSession,
    tenant_id: Optional[str] = None,
    api_key: Optional[str] = None,
    host: Optional[str] = None,
    token_tenant_id: Optional[str] = None,
) -> Tenant:
    """
    Resolve the acting tenant for a request.

    Sources are tried in priority order: explicit tenant id, API key,
    request host, then the tenant claim of the caller's token. The first
    source that is present decides; an unmatched host falls through to the
    token claim.

    Raises:
        TenantIdentifierMissing: no source present
        TenantNotFound: a supplied identifier matches nothing
        TenantNotActive: tenant status is not Active or Trial
    """
    repo = TenantRepository(session)
    hostname = normalize_host(host)

    if not (tenant_id or api_key or hostname or token_tenant_id):
        raise TenantIdentifierMissing()

    tenant: Optional[Tenant] = None
    if tenant_id:
        tenant = await repo.get(parse_uuid(tenant_id, "tenant ID"))
    elif api_key:
        tenant = await repo.get_by_api_key(api_key)
    else:
        if hostname:
            tenant = await repo.get_by_host(hostname)
        if tenant is None and token_tenant_id:
            tenant = await repo.get(parse_uuid(token_tenant_id, "tenant ID"))

    if tenant is None:
        raise TenantNotFound()

    if tenant.status not in OPERATIONAL_TENANT_STATUSES:
        raise TenantNotActive(f"Tenant account is {tenant.status.lower()}")

    return tenant
