# tests/test_tenants.py
"""
Tenant directory tests
"""

from fastapi import status
from sqlalchemy import select

from conftest import make_section, reload
from parkhub.db.models.setting import Setting
from parkhub.db.models.tenant import Tenant
from parkhub.db.models.user import User
from parkhub.services.tenant_service import generate_api_key

API = "/api/v1/tenants"

NEW_TENANT = {
    "name": "Harbor Parking",
    "domain": "Harbor.io",
    "contact_email": "ops@harbor.io",
}


class TestTenantLifecycle:
    async def test_create_tenant(self, client, db_session, super_admin_headers):
        response = await client.post(API, json=NEW_TENANT, headers=super_admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["domain"] == "harbor.io"
        assert data["plan"] == "Basic"
        assert data["status"] == "Active"
        assert data["api_key"].startswith("pk_")
        assert "end_date" in data["subscription"]

        setting = (
            await db_session.execute(
                select(Setting).join(Tenant, Setting.tenant_id == Tenant.id).where(Tenant.domain == "harbor.io")
            )
        ).scalar_one()
        assert setting.settings["general"]["company_name"] == "Harbor Parking"

    async def test_duplicate_domain(self, client, super_admin_headers, test_tenant):
        response = await client.post(API, json={**NEW_TENANT, "domain": "ACME.COM"}, headers=super_admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Domain is already in use"

    async def test_admin_cannot_manage_tenants(self, client, admin_headers):
        assert (await client.get(API, headers=admin_headers)).status_code == status.HTTP_403_FORBIDDEN
        assert (await client.post(API, json=NEW_TENANT, headers=admin_headers)).status_code == status.HTTP_403_FORBIDDEN

    async def test_current_tenant(self, client, admin_headers, test_tenant):
        response = await client.get(f"{API}/current", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["id"] == str(test_tenant.id)

    async def test_current_tenant_by_api_key(self, client, gatekeeper_headers, test_tenant):
        response = await client.get(f"{API}/current", headers={**gatekeeper_headers, "X-API-Key": test_tenant.api_key})
        assert response.json()["data"]["domain"] == "acme.com"

    async def test_list_tenants(self, client, super_admin_headers, test_tenant, other_tenant):
        response = await client.get(API, headers=super_admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["pagination"]["total"] == 2

    async def test_update_tenant(self, client, super_admin_headers, test_tenant):
        response = await client.put(
            f"{API}/{test_tenant.id}",
            json={"plan": "Premium", "contact_phone": "+1-555-0199"},
            headers=super_admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["plan"] == "Premium"
        assert response.json()["data"]["contact_phone"] == "+1-555-0199"
        assert response.json()["data"]["domain"] == "acme.com"

    async def test_update_to_taken_domain(self, client, super_admin_headers, test_tenant, other_tenant):
        response = await client.put(
            f"{API}/{test_tenant.id}", json={"domain": "globex.com"}, headers=super_admin_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_get_unknown_tenant(self, client, super_admin_headers):
        response = await client.get(f"{API}/00000000-0000-0000-0000-000000000000", headers=super_admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTenantDeletion:
    async def test_tenant_with_sections_kept(self, client, db_session, admin_ctx, super_admin_headers, test_tenant):
        await make_section(db_session, admin_ctx, "A", capacity=1)

        response = await client.delete(f"{API}/{test_tenant.id}", headers=super_admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["errors"] == ["sections: 1", "parked vehicles: 0"]

    async def test_delete_empty_tenant(self, client, db_session, super_admin_headers, admin_user, test_tenant):
        tenant_id, user_id = test_tenant.id, admin_user.id

        response = await client.delete(f"{API}/{tenant_id}", headers=super_admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert await reload(db_session, Tenant, tenant_id) is None
        assert await reload(db_session, User, user_id) is None
        remaining = await db_session.execute(select(Setting).where(Setting.tenant_id == tenant_id))
        assert remaining.scalars().first() is None


def test_api_keys_are_unique():
    keys = {generate_api_key() for _ in range(50)}
    assert len(keys) == 50
