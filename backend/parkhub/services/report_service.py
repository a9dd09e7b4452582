# backend/parkhub/services/report_service.py
"""
Reporting: full recomputation over the vehicle and payment ledgers for a
date range, persisted as a snapshot. Schedules are stored only.
"""
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.constants import PaymentStatus, ReportType
from parkhub.core.context import RequestContext
from parkhub.core.exceptions import ReportNotFound
from parkhub.core.logging import get_logger
from parkhub.core.timeutils import utcnow
from parkhub.db.database import transaction
from parkhub.db.models.payment import Payment
from parkhub.db.models.report import Report
from parkhub.db.models.vehicle import Vehicle
from parkhub.db.models.parking import ParkingSection
from parkhub.db.repositories.parking_repository import SectionRepository
from parkhub.db.repositories.payment_repository import PaymentRepository
from parkhub.db.repositories.report_repository import ReportRepository
from parkhub.db.repositories.vehicle_repository import VehicleRepository
from parkhub.schemas.report import ReportRequest, ScheduleCreate, ScheduleUpdate

logger = get_logger("reports")


def occupancy_data(vehicles: List[Vehicle], sections: List[ParkingSection]) -> Dict[str, Any]:
    hourly: Dict[str, int] = defaultdict(int)
    for vehicle in vehicles:
        hourly[str(vehicle.entry_time.hour)] += 1

    return {
        "total_vehicles": len(vehicles),
        "sections": [
            {"name": s.name, "capacity": s.capacity, "available": s.available}
            for s in sections
        ],
        "hourly_occupancy": dict(sorted(hourly.items(), key=lambda item: int(item[0]))),
    }


def revenue_data(payments: List[Payment]) -> Dict[str, Any]:
    total = sum(p.amount for p in payments)
    by_method: Dict[str, float] = defaultdict(float)
    by_day: Dict[str, float] = defaultdict(float)
    for payment in payments:
        by_method[payment.method] += payment.amount
        by_day[payment.created_at.date().isoformat()] += payment.amount

    return {
        "total_revenue": round(total, 2),
        "total_transactions": len(payments),
        "average_transaction": round(total / (len(payments) or 1), 2),
        "revenue_by_method": {k: round(v, 2) for k, v in by_method.items()},
        "daily_revenue": {k: round(by_day[k], 2) for k in sorted(by_day)},
    }


def range_label(request: ReportRequest) -> str:
    return f"{request.start_date:%Y-%m-%d} - {request.end_date:%Y-%m-%d}"


class ReportService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = ReportRepository(session)

    async def _save(self, ctx: RequestContext, values: Dict[str, Any]) -> Report:
        async with transaction(self.session):
            report = await self.repo.create({
                "tenant_id": ctx.require_tenant(),
                "created_by": ctx.user_id,
                **values,
            })
        logger.info(
            f"Report saved: {report.name}",
            extra=ctx.log_extra(report_id=str(report.id), report_type=report.type),
        )
        return report

    async def generate_occupancy(self, ctx: RequestContext, request: ReportRequest) -> Report:
        tenant_id = ctx.require_tenant()
        vehicles = await VehicleRepository(self.session).list_entered_between(
            tenant_id, request.start_date, request.end_date
        )
        sections = await SectionRepository(self.session).list_by_tenant(tenant_id)

        return await self._save(ctx, {
            "name": f"Occupancy Report ({range_label(request)})",
            "type": (request.type or ReportType.OCCUPANCY).value,
            "start_date": request.start_date,
            "end_date": request.end_date,
            "format": request.format.value if request.format else None,
            "data": occupancy_data(vehicles, sections),
        })

    async def generate_revenue(self, ctx: RequestContext, request: ReportRequest) -> Report:
        payments = await PaymentRepository(self.session).list_completed_between(
            ctx.require_tenant(), PaymentStatus.COMPLETED.value, request.start_date, request.end_date
        )

        return await self._save(ctx, {
            "name": f"Revenue Report ({range_label(request)})",
            "type": (request.type or ReportType.REVENUE).value,
            "start_date": request.start_date,
            "end_date": request.end_date,
            "format": request.format.value if request.format else None,
            "data": revenue_data(payments),
        })

    async def list(
        self,
        ctx: RequestContext,
        type: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Report], int]:
        return await self.repo.list_by_tenant(
            ctx.require_tenant(), type=type, skip=(page - 1) * limit, limit=limit
        )

    async def get(self, ctx: RequestContext, report_id: UUID) -> Report:
        report = await self.repo.get_for_tenant(report_id, ctx.require_tenant())
        if not report:
            raise ReportNotFound()
        return report

    async def delete(self, ctx: RequestContext, report_id: UUID) -> None:
        async with transaction(self.session):
            report = await self.get(ctx, report_id)
            await self.session.delete(report)
        logger.info("Report deleted", extra=ctx.log_extra(report_id=str(report_id)))

    async def create_schedule(self, ctx: RequestContext, data: ScheduleCreate) -> Report:
        now = utcnow()
        return await self._save(ctx, {
            "name": data.name,
            "type": data.type.value,
            "start_date": now,
            "end_date": now,
            "status": "Scheduled",
            "schedule": {
                "is_scheduled": True,
                "frequency": data.frequency.value,
                "time": data.time,
                "send_email": data.send_email,
                "recipients": data.recipients,
            },
        })

    async def update_schedule(self, ctx: RequestContext, report_id: UUID, data: ScheduleUpdate) -> Report:
        async with transaction(self.session):
            report = await self.get(ctx, report_id)
            schedule = dict(report.schedule or {
                "is_scheduled": True,
                "frequency": "Weekly",
                "time": "08:00",
                "send_email": True,
                "recipients": [],
            })
            changes = data.model_dump(exclude_none=True)
            name = changes.pop("name", None)
            if "frequency" in changes:
                changes["frequency"] = changes["frequency"].value
            schedule.update(changes)

            values: Dict[str, Any] = {"schedule": schedule, "status": "Scheduled"}
            if name:
                values["name"] = name
            report = await self.repo.update(report, values)

        logger.info("Report schedule updated", extra=ctx.log_extra(report_id=str(report.id)))
        return report
