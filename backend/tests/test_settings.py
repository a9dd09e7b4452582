# tests/test_settings.py
"""
Tenant settings tests
"""

from fastapi import status
from sqlalchemy import delete

from parkhub.db.models.setting import Setting

API = "/api/v1/settings"


class TestSettings:
    async def test_defaults(self, client, admin_headers, test_tenant):
        response = await client.get(API, headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        settings = response.json()["data"]["settings"]
        assert set(settings) == {"general", "pricing", "api", "notifications"}
        assert settings["general"]["company_name"] == "Acme Parking"
        assert settings["general"]["contact_email"] == "contact@acme.com"
        assert settings["pricing"]["hourly_rate"] == 10.0
        assert settings["pricing"]["daily_rate"] == 50.0

    async def test_update_merges_per_category(self, client, admin_headers):
        response = await client.put(
            API,
            json={"pricing": {"hourly_rate": 12.5}, "notifications": {"sms_enabled": True}},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        settings = response.json()["data"]["settings"]
        assert settings["pricing"]["hourly_rate"] == 12.5
        assert settings["pricing"]["daily_rate"] == 50.0
        assert settings["notifications"]["sms_enabled"] is True
        assert settings["notifications"]["email_enabled"] is True
        assert settings["general"]["company_name"] == "Acme Parking"

        reread = await client.get(API, headers=admin_headers)
        assert reread.json()["data"]["settings"]["pricing"]["hourly_rate"] == 12.5

    async def test_gatekeeper_reads_only(self, client, gatekeeper_headers):
        assert (await client.get(API, headers=gatekeeper_headers)).status_code == status.HTTP_200_OK

        response = await client.put(API, json={"general": {"dark_mode": True}}, headers=gatekeeper_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_viewer_cannot_update(self, client, viewer_headers):
        response = await client.put(API, json={"general": {"dark_mode": True}}, headers=viewer_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_settings_are_per_tenant(self, client, admin_headers, other_admin_headers):
        await client.put(API, json={"general": {"company_name": "Renamed"}}, headers=admin_headers)

        response = await client.get(API, headers=other_admin_headers)
        assert response.json()["data"]["settings"]["general"]["company_name"] == "Globex Parking"

    async def test_missing_document(self, client, db_session, admin_headers, test_tenant):
        await db_session.execute(delete(Setting).where(Setting.tenant_id == test_tenant.id))
        await db_session.commit()

        response = await client.get(API, headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Settings not found"
