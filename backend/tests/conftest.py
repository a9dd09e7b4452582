"""
Pytest configuration and fixtures
Shared test setup for all test modules
"""
import os

# Must be set before parkhub is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from typing import AsyncGenerator, Dict
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from parkhub.main import app
from parkhub.core.constants import PlanType, UserRole, UserStatus
from parkhub.core.context import RequestContext
from parkhub.core.security import get_password_hash
from parkhub.db.base import Base
from parkhub.db.database import get_db, transaction
from parkhub.db import models  # noqa: F401
from parkhub.db.models.tenant import Tenant
from parkhub.db.models.user import User
from parkhub.services.auth_service import issue_token
from parkhub.schemas.parking import SectionCreate, SlotCreate
from parkhub.services.parking_service import ParkingService
from parkhub.services.tenant_service import TenantService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "TestPassword123!"


@pytest.fixture(scope="function")
async def engine():
    """Fresh in-memory database for each test"""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with a per-request database session override"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def make_tenant(session: AsyncSession, name: str, domain: str, plan: PlanType = PlanType.BASIC) -> Tenant:
    async with transaction(session):
        tenant = await TenantService(session).create_tenant({
            "name": name,
            "domain": domain,
            "plan": plan,
            "contact_email": f"contact@{domain}",
        })
    return tenant


async def make_user(
    session: AsyncSession,
    email: str,
    role: UserRole,
    tenant: Tenant = None,
    status: UserStatus = UserStatus.ACTIVE,
) -> User:
    user = User(
        name=email.split("@")[0].title(),
        email=email,
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role.value,
        status=status.value,
        tenant_id=tenant.id if tenant else None,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


def bearer(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user)}"}


def context_for(user: User, tenant: Tenant = None) -> RequestContext:
    """Service-level context as the API dependency would build it"""
    return RequestContext(
        user_id=user.id,
        role=UserRole(user.role),
        user_tenant_id=user.tenant_id,
        tenant_id=tenant.id if tenant else user.tenant_id,
    )


@pytest.fixture
async def test_tenant(db_session: AsyncSession) -> Tenant:
    """Create test tenant"""
    return await make_tenant(db_session, "Acme Parking", "acme.com")


@pytest.fixture
async def other_tenant(db_session: AsyncSession) -> Tenant:
    return await make_tenant(db_session, "Globex Parking", "globex.com")


@pytest.fixture
async def admin_user(db_session: AsyncSession, test_tenant: Tenant) -> User:
    return await make_user(db_session, "admin@acme.com", UserRole.ADMIN, test_tenant)


@pytest.fixture
async def gatekeeper_user(db_session: AsyncSession, test_tenant: Tenant) -> User:
    return await make_user(db_session, "gate@acme.com", UserRole.GATEKEEPER, test_tenant)


@pytest.fixture
async def viewer_user(db_session: AsyncSession, test_tenant: Tenant) -> User:
    return await make_user(db_session, "viewer@acme.com", UserRole.VIEWER, test_tenant)


@pytest.fixture
async def other_admin(db_session: AsyncSession, other_tenant: Tenant) -> User:
    return await make_user(db_session, "admin@globex.com", UserRole.ADMIN, other_tenant)


@pytest.fixture
async def super_admin(db_session: AsyncSession) -> User:
    return await make_user(db_session, "root@parkhub.io", UserRole.SUPER_ADMIN)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return bearer(admin_user)


@pytest.fixture
def gatekeeper_headers(gatekeeper_user: User) -> dict:
    return bearer(gatekeeper_user)


@pytest.fixture
def viewer_headers(viewer_user: User) -> dict:
    return bearer(viewer_user)


@pytest.fixture
def other_admin_headers(other_admin: User) -> dict:
    return bearer(other_admin)


@pytest.fixture
def super_admin_headers(super_admin: User) -> dict:
    return bearer(super_admin)


@pytest.fixture
def admin_ctx(admin_user: User, test_tenant: Tenant) -> RequestContext:
    return context_for(admin_user, test_tenant)


async def reload(session: AsyncSession, model, id):
    """Re-read a row, bypassing the session's identity map"""
    return await session.get(model, id, populate_existing=True)


async def make_section(session: AsyncSession, ctx: RequestContext, name: str = "A", capacity: int = 2, slots: int = None):
    """Section with ``slots`` Available slots named <name>-1, <name>-2, ..."""
    parking = ParkingService(session)
    section = await parking.create_section(ctx, SectionCreate(name=name, floor="1", capacity=capacity))
    created = []
    for number in range(1, (capacity if slots is None else slots) + 1):
        created.append(await parking.create_slot(ctx, SlotCreate(name=f"{name}-{number}", section_id=section.id)))
    return section, created
