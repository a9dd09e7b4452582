# backend/parkhub/core/rbac.py
"""
Role-Based Access Control

Roles are a closed enum; what a role may do is looked up in
ROLE_PERMISSIONS rather than compared as strings at call sites.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union

from parkhub.core.constants import UserRole
from parkhub.core.exceptions import AuthorizationError


class Permission(str, Enum):
    # Vehicle ledger
    VEHICLE_REGISTER = "vehicle:register"
    VEHICLE_VIEW = "vehicle:view"
    VEHICLE_EDIT = "vehicle:edit"

    # Parking inventory
    INVENTORY_VIEW = "inventory:view"
    INVENTORY_MANAGE = "inventory:manage"

    # Payment ledger
    PAYMENT_CREATE = "payment:create"
    PAYMENT_VIEW = "payment:view"
    PAYMENT_MANAGE = "payment:manage"

    # Reporting
    REPORT_MANAGE = "report:manage"

    # Settings
    SETTINGS_VIEW = "settings:view"
    SETTINGS_MANAGE = "settings:manage"

    # Directory
    USER_MANAGE = "user:manage"
    TENANT_MANAGE = "tenant:manage"


ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[Permission]] = {
    UserRole.SUPER_ADMIN: frozenset(Permission),  # All permissions
    UserRole.ADMIN: frozenset(p for p in Permission if p is not Permission.TENANT_MANAGE),
    UserRole.GATEKEEPER: frozenset({
        Permission.VEHICLE_REGISTER, Permission.VEHICLE_VIEW,
        Permission.INVENTORY_VIEW,
        Permission.PAYMENT_CREATE, Permission.PAYMENT_VIEW,
        Permission.SETTINGS_VIEW,
    }),
    UserRole.VIEWER: frozenset({
        Permission.INVENTORY_VIEW,
        Permission.SETTINGS_VIEW,
    }),
}


def has_permission(role: Union[UserRole, str], permission: Permission) -> bool:
    """Check if a role grants a specific permission"""
    try:
        role = UserRole(role)
    except ValueError:
        return False
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


def is_platform_role(role: Union[UserRole, str]) -> bool:
    """Platform roles are not bound to a single tenant"""
    return role == UserRole.SUPER_ADMIN


def authorize(role: Union[UserRole, str], *permissions: Permission) -> bool:
    """
    Require every listed permission for ``role``.

    Raises:
        AuthorizationError: if any permission is missing
    """
    missing = [p.value for p in permissions if not has_permission(role, p)]
    if missing:
        raise AuthorizationError(
            f"Role {getattr(role, 'value', role)} is not allowed to perform this action",
            errors=[f"Missing permission: {m}" for m in missing],
        )
    return True
