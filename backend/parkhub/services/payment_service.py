# backend/parkhub/services/payment_service.py
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID
import math
import random

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import PaymentStatus
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import PaymentNotFound, VehicleNotFound
from parkhub.core.logging import get_logger
from parkhub.core.timeutils import to_naive_utc, utcnow
from parkhub.db.database import transaction
from parkhub.db.models.payment import Payment
from parkhub.db.repositories.payment_repository import PaymentRepository
from parkhub.db.repositories.vehicle_repository import VehicleRepository
from parkhub.schemas.payment import PaymentCreate, Receipt

logger = get_logger("payments")


def compute_duration(entry_time: datetime, exit_time: datetime) -> int:
    """Whole minutes between entry and exit, rounded up"""
    seconds = (exit_time - entry_time).total_seconds()
    return max(0, math.ceil(seconds / 60))


def generate_receipt_number(tenant_id: UUID, when: Optional[datetime] = None) -> str:
    """PAY-<tenant prefix>-<yyyymmdd>-<4 digits>; collisions are not checked"""
    when = when or utcnow()
    prefix = str(tenant_id)[:3].upper()
    return f"PAY-{prefix}-{when:%Y%m%d}-{random.randint(1000, 9999)}"


class PaymentService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = PaymentRepository(session)
        self.vehicles = VehicleRepository(session)

    async def create(self, ctx: RequestContext, data: PaymentCreate) -> Payment:
        """
        Record a charge for a vehicle's current or last stay.

        Entry/exit times come from the vehicle; a vehicle still parked is
        charged up to now. Duplicate calls create duplicate payments.
        """
        tenant_id = ctx.require_tenant()
        async with transaction(self.session):
            vehicle = await self.vehicles.get_for_tenant(data.vehicle_id, tenant_id)
            if not vehicle:
                raise VehicleNotFound()

            now = utcnow()
            entry_time = to_naive_utc(vehicle.entry_time)
            exit_time = to_naive_utc(vehicle.exit_time) or now

            payment = await self.repo.create({
                "tenant_id": tenant_id,
                "vehicle_id": vehicle.id,
                "amount": data.amount,
                "method": data.method.value,
                "status": data.status.value,
                "entry_time": entry_time,
                "exit_time": exit_time,
                "duration": compute_duration(entry_time, exit_time),
                "receipt_number": data.receipt_number or generate_receipt_number(tenant_id, now),
                "processed_by": ctx.user_id,
                "notes": data.notes,
            })

        logger.info(
            f"Payment recorded: {payment.receipt_number}",
            extra=ctx.log_extra(
                payment_id=str(payment.id),
                vehicle_id=str(vehicle.id),
                amount=payment.amount,
                method=payment.method,
            ),
        )
        return payment

    async def list(
        self,
        ctx: RequestContext,
        status: Optional[str] = None,
        method: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Payment], int]:
        return await self.repo.search(
            ctx.require_tenant(),
            status=status,
            method=method,
            start_date=to_naive_utc(start_date),
            end_date=to_naive_utc(end_date),
            skip=(page - 1) * limit,
            limit=limit,
        )

    async def get(self, ctx: RequestContext, payment_id: UUID) -> Payment:
        payment = await self.repo.get_for_tenant(payment_id, ctx.require_tenant())
        if not payment:
            raise PaymentNotFound()
        return payment

    async def update_status(self, ctx: RequestContext, payment_id: UUID, status: PaymentStatus) -> Payment:
        async with transaction(self.session):
            payment = await self.get(ctx, payment_id)
            previous = payment.status
            payment = await self.repo.update(payment, {"status": status.value})

        logger.info(
            f"Payment status changed: {previous} -> {payment.status}",
            extra=ctx.log_extra(payment_id=str(payment.id)),
        )
        return payment

    async def receipt(self, ctx: RequestContext, payment_id: UUID) -> Receipt:
        payment = await self.get(ctx, payment_id)
        vehicle = await self.vehicles.get(payment.vehicle_id)
        return Receipt(
            receipt_number=payment.receipt_number,
            date=payment.created_at,
            plate_number=vehicle.plate_number if vehicle else None,
            entry_time=payment.entry_time,
            exit_time=payment.exit_time,
            duration=payment.duration,
            amount=payment.amount,
            method=payment.method,
            status=payment.status,
        )
