# backend/parkhub/db/repositories/user_repository.py
from typing import Any, Optional, List, Tuple
from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.db.models.user import User
from parkhub.db.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_email(self, email: str, tenant_id: Any = None) -> Optional[User]:
        """Get user by email inside one tenant (platform users when tenant_id is None)"""
        query = select(User).where(func.lower(User.email) == email.lower())
        if tenant_id is None:
            query = query.where(User.tenant_id.is_(None))
        else:
            query = query.where(User.tenant_id == tenant_id)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_login_candidates(self, email: str, tenant_id: Any = None) -> List[User]:
        """Every account carrying ``email``, optionally narrowed to one tenant"""
        query = select(User).where(func.lower(User.email) == email.lower())
        if tenant_id is not None:
            query = query.where(or_(User.tenant_id == tenant_id, User.tenant_id.is_(None)))
        result = await self.session.execute(query.order_by(User.created_at))
        return list(result.scalars().all())

    async def search(
        self,
        tenant_id: Any = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[User], int]:
        """Filtered, paginated user listing, newest first"""
        query = select(User)
        if tenant_id is not None:
            query = query.where(User.tenant_id == tenant_id)
        if role:
            query = query.where(User.role == role)
        if status:
            query = query.where(User.status == status)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern))
            )
        return await self.paginate(query.order_by(User.created_at.desc()), skip, limit)
