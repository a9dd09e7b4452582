# backend/parkhub/services/user_service.py
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import UserRole
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import (
    AuthorizationError,
    DuplicateEmail,
    TenantIdentifierMissing,
    TenantNotFound,
    UserNotFound,
    ValidationError,
)
from parkhub.core.logging import get_logger
from parkhub.core.security import get_password_hash
from parkhub.db.database import transaction
from parkhub.db.models.user import User
from parkhub.db.repositories.tenant_repository import TenantRepository
from parkhub.db.repositories.user_repository import UserRepository
from parkhub.schemas.user import UserCreate, UserUpdate

logger = get_logger("users")


class UserService:
    """User directory scoped to the caller's tenant (any tenant for SuperAdmin)"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = UserRepository(session)

    def _guard_role(self, ctx: RequestContext, role: Optional[UserRole]) -> None:
        if role == UserRole.SUPER_ADMIN and not ctx.is_platform:
            raise AuthorizationError("Only a SuperAdmin can grant the SuperAdmin role")

    async def list(
        self,
        ctx: RequestContext,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[User], int]:
        tenant_id = ctx.tenant_id if ctx.is_platform else ctx.require_tenant()
        return await self.repo.search(
            tenant_id=tenant_id,
            role=role,
            status=status,
            search=search,
            skip=(page - 1) * limit,
            limit=limit,
        )

    async def get(self, ctx: RequestContext, user_id: UUID) -> User:
        user = await self.repo.get(user_id)
        if not user or (not ctx.is_platform and user.tenant_id != ctx.tenant_id):
            raise UserNotFound()
        return user

    async def create(self, ctx: RequestContext, data: UserCreate) -> User:
        self._guard_role(ctx, data.role)

        if data.role == UserRole.SUPER_ADMIN:
            tenant_id = None
        elif ctx.is_platform:
            tenant_id = data.tenant_id or ctx.tenant_id
            if tenant_id is None:
                raise TenantIdentifierMissing("Tenant is required for non-platform users")
            if not await TenantRepository(self.session).get(tenant_id):
                raise TenantNotFound()
        else:
            tenant_id = ctx.require_tenant()

        async with transaction(self.session):
            if await self.repo.get_by_email(data.email, tenant_id):
                raise DuplicateEmail()
            user = await self.repo.create({
                "name": data.name,
                "email": data.email.lower(),
                "hashed_password": get_password_hash(data.password),
                "role": data.role.value,
                "status": data.status.value,
                "tenant_id": tenant_id,
                "phone_number": data.phone_number,
            })

        logger.info(
            f"User created: {user.email}",
            extra=ctx.log_extra(created_user_id=str(user.id), role=user.role),
        )
        return user

    async def update(self, ctx: RequestContext, user_id: UUID, data: UserUpdate) -> User:
        self._guard_role(ctx, data.role)

        async with transaction(self.session):
            user = await self.get(ctx, user_id)
            changes = data.model_dump(exclude_none=True)

            email = changes.get("email")
            if email:
                email = email.lower()
                existing = await self.repo.get_by_email(email, user.tenant_id)
                if existing and existing.id != user.id:
                    raise DuplicateEmail()
                changes["email"] = email

            for key in ("role", "status"):
                if changes.get(key) is not None:
                    changes[key] = changes[key].value

            user = await self.repo.update(user, changes)

        logger.info(
            f"User updated: {user.email}",
            extra=ctx.log_extra(updated_user_id=str(user.id), fields=sorted(changes)),
        )
        return user

    async def delete(self, ctx: RequestContext, user_id: UUID) -> None:
        if user_id == ctx.user_id:
            raise ValidationError("You cannot delete your own account")

        async with transaction(self.session):
            user = await self.get(ctx, user_id)
            await self.session.delete(user)

        logger.info("User deleted", extra=ctx.log_extra(deleted_user_id=str(user_id)))
