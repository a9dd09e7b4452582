# backend/parkhub/core/context.py
"""Request-scoped context threaded explicitly through service calls"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

from parkhub.core.constants import UserRole
from parkhub.core.exceptions import TenantIdentifierMissing
from parkhub.core.rbac import Permission, authorize, is_platform_role


@dataclass(frozen=True)
class RequestContext:
    """Who is acting, for which tenant"""

    user_id: Optional[UUID]
    role: UserRole
    user_tenant_id: Optional[UUID] = None
    tenant_id: Optional[UUID] = None
    request_id: Optional[str] = None

    @property
    def is_platform(self) -> bool:
        return is_platform_role(self.role)

    def require_tenant(self) -> UUID:
        """Tenant the operation is scoped to"""
        if self.tenant_id is None:
            raise TenantIdentifierMissing()
        return self.tenant_id

    def authorize(self, *permissions: Permission) -> bool:
        return authorize(self.role, *permissions)

    def log_extra(self, **kwargs: Any) -> Dict[str, Any]:
        """``extra=`` payload picked up by the JSON formatter"""
        extra: Dict[str, Any] = {
            "tenant_id": self.tenant_id,
            "user_id": self.user_id,
            "request_id": self.request_id,
        }
        extra.update(kwargs)
        return extra
