# tests/test_reports.py
"""
Reporting tests
Tests: occupancy and revenue snapshots, date ranges, schedules, plan gating
"""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from fastapi import status
from pydantic import ValidationError as PydanticValidationError

from conftest import bearer, make_section, make_tenant, make_user
from parkhub.core.constants import PlanType, UserRole
from parkhub.core.timeutils import utcnow
from parkhub.schemas.report import ReportRequest
from parkhub.services.report_service import occupancy_data, revenue_data

API = "/api/v1/reports"


def window(days: int = 1) -> dict:
    now = utcnow()
    return {
        "start_date": (now - timedelta(days=days)).isoformat(),
        "end_date": (now + timedelta(days=days)).isoformat(),
    }


@pytest.fixture
async def premium_headers(db_session):
    tenant = await make_tenant(db_session, "Premium Lots", "premium.com", PlanType.PREMIUM)
    user = await make_user(db_session, "admin@premium.com", UserRole.ADMIN, tenant)
    return bearer(user)


class TestReportData:
    """Pure aggregation helpers"""

    def test_occupancy_data(self):
        vehicles = [
            SimpleNamespace(entry_time=datetime(2024, 3, 1, 8, 15)),
            SimpleNamespace(entry_time=datetime(2024, 3, 1, 8, 45)),
            SimpleNamespace(entry_time=datetime(2024, 3, 1, 17, 0)),
        ]
        sections = [SimpleNamespace(name="A", capacity=10, available=7)]

        data = occupancy_data(vehicles, sections)

        assert data["total_vehicles"] == 3
        assert data["hourly_occupancy"] == {"8": 2, "17": 1}
        assert data["sections"] == [{"name": "A", "capacity": 10, "available": 7}]

    def test_revenue_data(self):
        day = datetime(2024, 3, 1, 12, 0)
        payments = [
            SimpleNamespace(amount=10.0, method="Cash", created_at=day),
            SimpleNamespace(amount=20.0, method="Credit Card", created_at=day),
            SimpleNamespace(amount=5.5, method="Cash", created_at=day + timedelta(days=1)),
        ]

        data = revenue_data(payments)

        assert data["total_revenue"] == 35.5
        assert data["total_transactions"] == 3
        assert data["average_transaction"] == 11.83
        assert data["revenue_by_method"] == {"Cash": 15.5, "Credit Card": 20.0}
        assert data["daily_revenue"] == {"2024-03-01": 30.0, "2024-03-02": 5.5}

    def test_revenue_data_empty(self):
        data = revenue_data([])

        assert data["total_revenue"] == 0
        assert data["average_transaction"] == 0

    def test_inverted_range_rejected(self):
        with pytest.raises(PydanticValidationError):
            ReportRequest(start_date=datetime(2024, 3, 2), end_date=datetime(2024, 3, 1))

    def test_mixed_timezones_normalized(self):
        request = ReportRequest(start_date="2024-03-01T00:00:00+02:00", end_date="2024-03-01T00:00:00")

        assert request.start_date == datetime(2024, 2, 29, 22, 0)
        assert request.start_date.tzinfo is None


class TestGeneratedReports:
    """Snapshots computed on demand"""

    async def test_occupancy_report(self, client, db_session, admin_ctx, admin_headers):
        await make_section(db_session, admin_ctx, "A", capacity=4)
        for plate in ("OCC1", "OCC2"):
            await client.post("/api/v1/vehicles/entry", json={"plate_number": plate}, headers=admin_headers)

        response = await client.post(f"{API}/occupancy", json=window(), headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        report = response.json()["data"]
        assert report["type"] == "Occupancy"
        assert report["status"] == "Generated"
        assert report["name"].startswith("Occupancy Report (")
        assert report["data"]["total_vehicles"] == 2
        assert sum(report["data"]["hourly_occupancy"].values()) == 2
        assert report["data"]["sections"][0]["name"] == "A"

    async def test_revenue_report_counts_completed_only(self, client, admin_headers):
        entry = await client.post("/api/v1/vehicles/entry", json={"plate_number": "REV1"}, headers=admin_headers)
        vehicle_id = entry.json()["data"]["id"]
        for amount, payment_status in ((10, "Completed"), (15, "Completed"), (99, "Pending")):
            await client.post(
                "/api/v1/payments",
                json={"vehicle_id": vehicle_id, "amount": amount, "method": "Cash", "status": payment_status},
                headers=admin_headers,
            )

        response = await client.post(f"{API}/revenue", json=window(), headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]["data"]
        assert data["total_revenue"] == 25.0
        assert data["total_transactions"] == 2
        assert data["revenue_by_method"] == {"Cash": 25.0}

    async def test_inverted_range(self, client, admin_headers):
        now = utcnow()
        response = await client.post(
            f"{API}/revenue",
            json={"start_date": now.isoformat(), "end_date": (now - timedelta(days=1)).isoformat()},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Validation Error"

    async def test_list_get_delete(self, client, admin_headers):
        await client.post(f"{API}/occupancy", json=window(), headers=admin_headers)
        created = await client.post(f"{API}/revenue", json=window(), headers=admin_headers)
        report_id = created.json()["data"]["id"]

        everything = await client.get(API, headers=admin_headers)
        revenue_only = await client.get(API, params={"type": "Revenue"}, headers=admin_headers)
        assert everything.json()["data"]["pagination"]["total"] == 2
        assert revenue_only.json()["data"]["pagination"]["total"] == 1

        fetched = await client.get(f"{API}/{report_id}", headers=admin_headers)
        assert fetched.json()["data"]["id"] == report_id

        deleted = await client.delete(f"{API}/{report_id}", headers=admin_headers)
        assert deleted.status_code == status.HTTP_200_OK
        assert (await client.get(f"{API}/{report_id}", headers=admin_headers)).status_code == 404

    async def test_reports_are_tenant_scoped(self, client, admin_headers, other_admin_headers):
        created = await client.post(f"{API}/occupancy", json=window(), headers=admin_headers)
        report_id = created.json()["data"]["id"]

        assert (await client.get(f"{API}/{report_id}", headers=other_admin_headers)).status_code == 404
        assert (await client.get(API, headers=other_admin_headers)).json()["data"]["pagination"]["total"] == 0

    async def test_gatekeeper_cannot_generate(self, client, gatekeeper_headers):
        response = await client.post(f"{API}/occupancy", json=window(), headers=gatekeeper_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestScheduledReports:
    """Schedules are stored, gated by plan"""

    async def test_basic_plan_rejected(self, client, admin_headers):
        response = await client.post(
            f"{API}/scheduled", json={"name": "Weekly revenue", "type": "Revenue"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "This feature requires a Premium plan or higher"

    async def test_create_and_update_schedule(self, client, premium_headers):
        created = await client.post(
            f"{API}/scheduled",
            json={
                "name": "Weekly revenue",
                "type": "Revenue",
                "frequency": "Weekly",
                "time": "07:30",
                "recipients": ["ops@premium.com"],
            },
            headers=premium_headers,
        )

        assert created.status_code == status.HTTP_201_CREATED
        report = created.json()["data"]
        assert report["status"] == "Scheduled"
        assert report["schedule"]["is_scheduled"] is True
        assert report["schedule"]["time"] == "07:30"

        updated = await client.put(
            f"{API}/scheduled/{report['id']}",
            json={"frequency": "Daily", "name": "Daily revenue"},
            headers=premium_headers,
        )

        assert updated.status_code == status.HTTP_200_OK
        data = updated.json()["data"]
        assert data["name"] == "Daily revenue"
        assert data["schedule"]["frequency"] == "Daily"
        assert data["schedule"]["time"] == "07:30"
        assert data["schedule"]["recipients"] == ["ops@premium.com"]

    async def test_invalid_time(self, client, premium_headers):
        response = await client.post(
            f"{API}/scheduled",
            json={"name": "Nightly", "type": "Occupancy", "time": "25:00"},
            headers=premium_headers,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
