# backend/parkhub/services/auth_service.py
"""
Identity & Access: credential checks, session tokens, self-service signup.
"""
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.config import settings
from parkhub.core.constants import UserRole, UserStatus
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import (
    AccountInactive,
    InvalidCredentials,
    InvalidToken,
    UserNotFound,
    ValidationError,
)
from parkhub.core.logging import get_logger
from parkhub.core.security import create_access_token, decode_token, get_password_hash, verify_password
from parkhub.core.tenant import parse_uuid
from parkhub.core.timeutils import utcnow
from parkhub.db.database import transaction
from parkhub.db.models.tenant import Tenant
from parkhub.db.models.user import User
from parkhub.db.repositories.tenant_repository import TenantRepository
from parkhub.db.repositories.user_repository import UserRepository
from parkhub.schemas.auth import RegisterRequest
from parkhub.services.tenant_service import TenantService

logger = get_logger("auth")


def issue_token(user: User) -> str:
    return create_access_token(
        user_id=str(user.id),
        role=user.role,
        tenant_id=str(user.tenant_id) if user.tenant_id else None,
    )


def token_lifetime_seconds() -> int:
    return settings.ACCESS_TOKEN_EXPIRE_HOURS * 3600


class AuthService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)

    async def authenticate(
        self,
        email: str,
        password: str,
        tenant_id: Optional[UUID] = None,
    ) -> Tuple[User, str]:
        """
        Check credentials and issue a session token.

        The same email may exist in several tenants; the first account whose
        password verifies wins, narrowed to ``tenant_id`` when given.

        Raises:
            InvalidCredentials: unknown email or wrong password
            AccountInactive: matching account is not Active
        """
        candidates = await self.users.find_login_candidates(email, tenant_id)
        user = next(
            (u for u in candidates if verify_password(password, u.hashed_password)),
            None,
        )
        if user is None:
            logger.warning("Failed login attempt", extra={"email": email})
            raise InvalidCredentials()

        if user.status != UserStatus.ACTIVE:
            raise AccountInactive()

        async with transaction(self.session):
            user = await self.users.update(user, {"last_active": utcnow()})

        logger.info(
            f"User logged in: {user.email}",
            extra={"user_id": user.id, "tenant_id": user.tenant_id},
        )
        return user, issue_token(user)

    async def verify(self, token: str) -> User:
        """
        Resolve a session token to an active user.

        Raises:
            InvalidToken: bad token or the user no longer exists
            TokenExpired: token past its expiry
            AccountInactive: user has been deactivated
        """
        payload = decode_token(token)
        try:
            user_id = parse_uuid(payload["sub"])
        except ValidationError:
            raise InvalidToken()

        user = await self.users.get(user_id)
        if not user:
            raise InvalidToken()
        if user.status != UserStatus.ACTIVE:
            raise AccountInactive()
        return user

    async def register(self, data: RegisterRequest) -> Tuple[Tenant, User, str]:
        """Create a tenant, its first Admin and default settings in one go"""
        async with transaction(self.session):
            tenant = await TenantService(self.session).create_tenant({
                "name": data.tenant_name,
                "domain": data.domain.strip().lower(),
                "contact_email": data.contact_email,
                "contact_phone": data.contact_phone,
            })
            user = await self.users.create({
                "name": data.name,
                "email": data.email.lower(),
                "hashed_password": get_password_hash(data.password),
                "role": UserRole.ADMIN.value,
                "status": UserStatus.ACTIVE.value,
                "tenant_id": tenant.id,
                "phone_number": data.phone_number,
                "last_active": utcnow(),
            })
            tenant = await TenantRepository(self.session).update(tenant, {"created_by": user.id})

        logger.info(
            f"Tenant registered: {tenant.domain}",
            extra={"tenant_id": tenant.id, "user_id": user.id},
        )
        return tenant, user, issue_token(user)

    async def get_profile(self, ctx: RequestContext) -> Tuple[User, Optional[Tenant]]:
        user = await self.users.get(ctx.user_id)
        if not user:
            raise UserNotFound()
        tenant = None
        if user.tenant_id:
            tenant = await TenantRepository(self.session).get(user.tenant_id)
        return user, tenant

    async def change_password(self, ctx: RequestContext, current_password: str, new_password: str) -> None:
        user = await self.users.get(ctx.user_id)
        if not user:
            raise UserNotFound()
        if not verify_password(current_password, user.hashed_password):
            raise InvalidCredentials("Current password is incorrect")

        async with transaction(self.session):
            await self.users.update(user, {"hashed_password": get_password_hash(new_password)})

        logger.info("Password changed", extra=ctx.log_extra())
