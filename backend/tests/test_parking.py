# tests/test_parking.py
"""
Parking inventory tests
Tests: sections, slots, capacity changes, slot moves
"""

from fastapi import status

from conftest import make_section, reload
from parkhub.core.constants import SlotStatus
from parkhub.db.models.parking import ParkingSection, ParkingSlot
from parkhub.db.models.vehicle import Vehicle
from parkhub.schemas.vehicle import VehicleEntry
from parkhub.services.parking_service import occupancy_percentage
from parkhub.services.vehicle_service import VehicleService

API = "/api/v1/parking"


async def park(session, ctx, slots, count):
    """Park ``count`` vehicles in the first slots; returns vehicle ids"""
    service = VehicleService(session)
    ids = []
    for index in range(count):
        vehicle = await service.register_entry(
            ctx, VehicleEntry(plate_number=f"PARK{index}", slot_id=slots[index].id)
        )
        ids.append(vehicle.id)
    return ids


class TestSections:
    """Section CRUD"""

    async def test_create_section(self, client, admin_headers):
        """A new section starts fully available"""
        response = await client.post(
            f"{API}/sections",
            json={"name": "A", "floor": "1", "capacity": 10, "hourly_rate": 5.5},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["capacity"] == 10
        assert data["available"] == 10
        assert data["status"] == "Active"
        assert data["hourly_rate"] == 5.5

    async def test_duplicate_section_name(self, client, admin_headers):
        payload = {"name": "A", "floor": "1", "capacity": 5}
        await client.post(f"{API}/sections", json=payload, headers=admin_headers)
        response = await client.post(f"{API}/sections", json=payload, headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "A section with this name already exists"

    async def test_same_section_name_in_other_tenant(self, client, admin_headers, other_admin_headers):
        payload = {"name": "A", "floor": "1", "capacity": 5}
        ours = await client.post(f"{API}/sections", json=payload, headers=admin_headers)
        theirs = await client.post(f"{API}/sections", json=payload, headers=other_admin_headers)

        assert ours.status_code == status.HTTP_201_CREATED
        assert theirs.status_code == status.HTTP_201_CREATED

    async def test_zero_capacity_rejected(self, client, admin_headers):
        response = await client.post(
            f"{API}/sections", json={"name": "A", "floor": "1", "capacity": 0}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Validation Error"
        assert any(e.startswith("capacity") for e in response.json()["errors"])

    async def test_list_sections(self, client, db_session, admin_ctx, viewer_headers):
        """Listing carries slot ids and occupancy"""
        _, slots = await make_section(db_session, admin_ctx, "A", capacity=4)
        await park(db_session, admin_ctx, slots, 1)

        response = await client.get(f"{API}/sections", headers=viewer_headers)

        assert response.status_code == status.HTTP_200_OK
        sections = response.json()["data"]
        assert len(sections) == 1
        assert sections[0]["available"] == 3
        assert sections[0]["occupancy_percentage"] == 25.0
        assert len(sections[0]["slot_ids"]) == 4

    async def test_section_detail_shows_parked_plate(self, client, db_session, admin_ctx, viewer_headers):
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        section_id = section.id
        await park(db_session, admin_ctx, slots, 1)

        response = await client.get(f"{API}/sections/{section_id}", headers=viewer_headers)

        data = response.json()["data"]
        plates = {slot["name"]: slot["current_vehicle_plate"] for slot in data["slots"]}
        assert plates == {"A-1": "PARK0", "A-2": None}

    async def test_section_of_other_tenant_not_found(self, client, db_session, admin_ctx, other_admin_headers):
        section, _ = await make_section(db_session, admin_ctx, "A", capacity=1)

        response = await client.get(f"{API}/sections/{section.id}", headers=other_admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_viewer_cannot_create_section(self, client, viewer_headers):
        response = await client.post(
            f"{API}/sections", json={"name": "A", "floor": "1", "capacity": 5}, headers=viewer_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_gatekeeper_cannot_create_section(self, client, gatekeeper_headers):
        response = await client.post(
            f"{API}/sections", json={"name": "A", "floor": "1", "capacity": 5}, headers=gatekeeper_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestCapacity:
    """Capacity changes keep the occupied count"""

    async def test_shrink_below_occupancy_rejected(self, client, db_session, admin_ctx, admin_headers):
        """capacity 10 with 7 parked cannot shrink to 5"""
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=10)
        section_id = section.id
        await park(db_session, admin_ctx, slots, 7)

        response = await client.put(f"{API}/sections/{section_id}", json={"capacity": 5}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Cannot reduce capacity below current occupancy (7)"
        section = await reload(db_session, ParkingSection, section_id)
        assert section.capacity == 10
        assert section.available == 3

    async def test_shrink_keeps_occupied_count(self, client, db_session, admin_ctx, admin_headers):
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=10)
        await park(db_session, admin_ctx, slots, 7)

        response = await client.put(f"{API}/sections/{section.id}", json={"capacity": 8}, headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["capacity"] == 8
        assert response.json()["data"]["available"] == 1

    async def test_grow(self, client, db_session, admin_ctx, admin_headers):
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        await park(db_session, admin_ctx, slots, 2)

        response = await client.put(
            f"{API}/sections/{section.id}", json={"capacity": 6, "name": "Annex"}, headers=admin_headers
        )

        data = response.json()["data"]
        assert data["name"] == "Annex"
        assert data["capacity"] == 6
        assert data["available"] == 4

    def test_occupancy_percentage(self):
        section = ParkingSection(capacity=8, available=2)
        assert occupancy_percentage(section) == 75.0


class TestSectionDeletion:
    async def test_delete_empty_section_removes_slots(self, client, db_session, admin_ctx, admin_headers):
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        section_id, slot_id = section.id, slots[0].id

        response = await client.delete(f"{API}/sections/{section_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert await reload(db_session, ParkingSection, section_id) is None
        assert await reload(db_session, ParkingSlot, slot_id) is None

    async def test_delete_section_with_parked_vehicle(self, client, db_session, admin_ctx, admin_headers):
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        await park(db_session, admin_ctx, slots, 1)

        response = await client.delete(f"{API}/sections/{section.id}", headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Cannot delete section with occupied slots"


class TestSlots:
    """Slot CRUD and status transitions"""

    async def test_create_slot(self, client, db_session, admin_ctx, admin_headers):
        section, _ = await make_section(db_session, admin_ctx, "A", capacity=3, slots=0)

        response = await client.post(
            f"{API}/slots",
            json={"name": "A-1", "section_id": str(section.id), "type": "Electric"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["status"] == SlotStatus.AVAILABLE.value
        assert data["type"] == "Electric"
        assert data["reserved"] is False

    async def test_duplicate_slot_name(self, client, db_session, admin_ctx, admin_headers):
        section, _ = await make_section(db_session, admin_ctx, "A", capacity=2)

        response = await client.post(
            f"{API}/slots", json={"name": "A-1", "section_id": str(section.id)}, headers=admin_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_slot_in_unknown_section(self, client, admin_headers):
        response = await client.post(
            f"{API}/slots",
            json={"name": "X-1", "section_id": "00000000-0000-0000-0000-000000000000"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_list_slots_by_status(self, client, db_session, admin_ctx, viewer_headers):
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=3)
        await park(db_session, admin_ctx, slots, 1)

        occupied = await client.get(f"{API}/slots?status=Occupied", headers=viewer_headers)
        in_section = await client.get(f"{API}/slots?section_id={section.id}", headers=viewer_headers)

        assert [s["name"] for s in occupied.json()["data"]] == ["A-1"]
        assert len(in_section.json()["data"]) == 3

    async def test_cannot_mark_occupied_by_hand(self, client, db_session, admin_ctx, admin_headers):
        """Occupied is only reachable through a vehicle entry"""
        _, slots = await make_section(db_session, admin_ctx, "A", capacity=1)

        response = await client.put(
            f"{API}/slots/{slots[0].id}", json={"status": "Occupied"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Cannot mark slot as occupied without a vehicle"

    async def test_maintenance_does_not_change_availability(self, client, db_session, admin_ctx, admin_headers):
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        section_id = section.id

        response = await client.put(
            f"{API}/slots/{slots[0].id}", json={"status": "Maintenance"}, headers=admin_headers
        )

        assert response.json()["data"]["status"] == SlotStatus.MAINTENANCE.value
        section = await reload(db_session, ParkingSection, section_id)
        assert section.available == 2

    async def test_freeing_occupied_slot_detaches_vehicle(self, client, db_session, admin_ctx, admin_headers):
        """Leaving Occupied clears the reference on both sides"""
        section, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        section_id, slot_id = section.id, slots[0].id
        [vehicle_id] = await park(db_session, admin_ctx, slots, 1)

        response = await client.put(f"{API}/slots/{slot_id}", json={"status": "Available"}, headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["current_vehicle_id"] is None
        vehicle = await reload(db_session, Vehicle, vehicle_id)
        assert vehicle.slot_id is None
        assert vehicle.status == "Parked"
        section = await reload(db_session, ParkingSection, section_id)
        assert section.available == 2

    async def test_move_occupied_slot_between_sections(self, client, db_session, admin_ctx, admin_headers):
        """Both sections are recounted after a move"""
        section_a, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        section_b, _ = await make_section(db_session, admin_ctx, "B", capacity=2, slots=0)
        a_id, b_id, slot_id = section_a.id, section_b.id, slots[0].id
        await park(db_session, admin_ctx, slots, 1)

        response = await client.put(
            f"{API}/slots/{slot_id}", json={"section_id": str(b_id)}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["section_id"] == str(b_id)
        assert response.json()["data"]["status"] == SlotStatus.OCCUPIED.value
        assert (await reload(db_session, ParkingSection, a_id)).available == 2
        assert (await reload(db_session, ParkingSection, b_id)).available == 1

    async def test_move_to_unknown_section(self, client, db_session, admin_ctx, admin_headers):
        _, slots = await make_section(db_session, admin_ctx, "A", capacity=1)

        response = await client.put(
            f"{API}/slots/{slots[0].id}",
            json={"section_id": "00000000-0000-0000-0000-000000000000"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "New parking section not found"

    async def test_rename_onto_existing_slot(self, client, db_session, admin_ctx, admin_headers):
        _, slots = await make_section(db_session, admin_ctx, "A", capacity=2)

        response = await client.put(f"{API}/slots/{slots[1].id}", json={"name": "A-1"}, headers=admin_headers)
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_delete_occupied_slot(self, client, db_session, admin_ctx, admin_headers):
        _, slots = await make_section(db_session, admin_ctx, "A", capacity=1)
        slot_id = slots[0].id
        await park(db_session, admin_ctx, slots, 1)

        response = await client.delete(f"{API}/slots/{slot_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Cannot delete occupied slot"

    async def test_delete_free_slot(self, client, db_session, admin_ctx, admin_headers):
        _, slots = await make_section(db_session, admin_ctx, "A", capacity=2)
        slot_id = slots[1].id

        response = await client.delete(f"{API}/slots/{slot_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert await reload(db_session, ParkingSlot, slot_id) is None
