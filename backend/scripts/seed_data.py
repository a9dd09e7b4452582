"""
Seed a demo tenant with staff, two parking sections and a platform SuperAdmin.

    python backend/scripts/seed_data.py

Safe to run repeatedly; existing records are reused.
"""
import asyncio
from typing import Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import PlanType, UserRole, UserStatus
from parkhub.core.context import RequestContext
from parkhub.core.logging import get_logger
from parkhub.core.security import get_password_hash
from parkhub.db.database import async_session_local, init_db, transaction
from parkhub.db.repositories.parking_repository import SectionRepository
from parkhub.db.repositories.tenant_repository import TenantRepository
from parkhub.db.repositories.user_repository import UserRepository
from parkhub.schemas.parking import SectionCreate, SlotCreate
from parkhub.services.parking_service import ParkingService
from parkhub.services.tenant_service import TenantService

logger = get_logger("seed")

DEMO_DOMAIN = "demo.parkhub.io"

SUPER_ADMIN = {"name": "Platform Admin", "email": "superadmin@parkhub.io", "password": "SuperAdmin123!"}
STAFF = [
    {"name": "Demo Admin", "email": "admin@demo.parkhub.io", "password": "Admin123!", "role": UserRole.ADMIN},
    {"name": "Demo Gatekeeper", "email": "gate@demo.parkhub.io", "password": "Gate123!", "role": UserRole.GATEKEEPER},
]
SECTIONS = [
    {"name": "A", "floor": "1", "capacity": 10, "hourly_rate": 10.0},
    {"name": "B", "floor": "2", "capacity": 5, "hourly_rate": 8.0},
]


async def ensure_user(session: AsyncSession, entry: Dict[str, Any], tenant_id=None, role=UserRole.SUPER_ADMIN):
    repo = UserRepository(session)
    user = await repo.get_by_email(entry["email"], tenant_id)
    if user:
        logger.info(f"User already exists: {user.email}")
        return user
    async with transaction(session):
        user = await repo.create({
            "name": entry["name"],
            "email": entry["email"],
            "hashed_password": get_password_hash(entry["password"]),
            "role": role.value,
            "status": UserStatus.ACTIVE.value,
            "tenant_id": tenant_id,
        })
    logger.info(f"Created user: {user.email}")
    return user


async def seed_data(session: AsyncSession) -> Dict[str, Any]:
    """Create demo records; returns what was created or found"""
    platform_admin = await ensure_user(session, SUPER_ADMIN)
    tenant = await TenantRepository(session).get_by_domain(DEMO_DOMAIN)
    if tenant:
        logger.info(f"Tenant already exists: {tenant.name}")
    else:
        async with transaction(session):
            tenant = await TenantService(session).create_tenant({
                "name": "Demo Parking Co.",
                "domain": DEMO_DOMAIN,
                "plan": PlanType.PREMIUM,
                "contact_email": "contact@demo.parkhub.io",
                "contact_phone": "+1-555-0100",
                "address": {"street": "1 Main St", "city": "Springfield", "country": "US"},
            }, created_by=platform_admin.id)
        logger.info(f"Created tenant: {tenant.name}")

    staff = [await ensure_user(session, entry, tenant.id, entry["role"]) for entry in STAFF]

    tenant_ctx = RequestContext(
        user_id=platform_admin.id,
        role=UserRole.SUPER_ADMIN,
        tenant_id=tenant.id,
    )
    parking = ParkingService(session)
    sections = []
    for entry in SECTIONS:
        section = await SectionRepository(session).get_by_name(tenant.id, entry["name"])
        if section is None:
            section = await parking.create_section(tenant_ctx, SectionCreate(**entry))
            for number in range(1, entry["capacity"] + 1):
                await parking.create_slot(
                    tenant_ctx,
                    SlotCreate(name=f"{entry['name']}-{number}", section_id=section.id),
                )
        sections.append(section)

    return {"tenant": tenant, "super_admin": platform_admin, "staff": staff, "sections": sections}


async def main():
    await init_db()
    async with async_session_local() as session:
        await seed_data(session)

    print("\nLogin credentials:")
    print(f"SuperAdmin: {SUPER_ADMIN['email']} / {SUPER_ADMIN['password']}")
    for entry in STAFF:
        print(f"{entry['role'].value}: {entry['email']} / {entry['password']}")


if __name__ == "__main__":
    asyncio.run(main())
