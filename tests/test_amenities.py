# ================================
# AMENITY & BOOKING TESTS (test_amenities.py)
# ================================

import uuid
from datetime import date, timedelta

import pytest


CLUBHOUSE = {
    "name": "Clubhouse Hall",
    "description": "Air-conditioned party hall",
    "category": "Indoor",
    "capacity": 50,
    "location": "Block C, ground floor",
    "features": ["AC", "Projector"],
    "open_time": "06:00",
    "close_time": "22:00",
    "max_duration": 4,
    "advance_booking_days": 7,
    "price_per_hour": 500,
    "security_deposit": 1000,
}

TOMORROW = date.today() + timedelta(days=1)


@pytest.fixture
def amenity(client, admin_headers):
    response = client.post("/api/amenities/amenities", json=CLUBHOUSE, headers=admin_headers)
    assert response.status_code == 201
    return response.json()["amenity"]


def booking_payload(amenity_id, start="10:00", end="12:00", **overrides):
    payload = {
        "amenity_id": amenity_id,
        "booking_date": TOMORROW.isoformat(),
        "start_time": start,
        "end_time": end,
        "purpose": "Birthday party",
        "number_of_guests": 20,
    }
    payload.update(overrides)
    return payload


class TestAmenityManagement:

    def test_create_amenity_with_defaults(self, amenity, admin):
        assert amenity["status"] == "active"
        assert amenity["min_booking_duration"] == 1
        assert amenity["slot_interval"] == 1
        assert amenity["price_per_day"] == 0
        assert amenity["created_by_id"] == str(admin.id)

    def test_close_must_follow_open(self, client, admin_headers):
        response = client.post(
            "/api/amenities/amenities",
            json={**CLUBHOUSE, "open_time": "22:00", "close_time": "06:00"},
            headers=admin_headers
        )
        assert response.status_code == 400

    def test_bad_time_format(self, client, admin_headers):
        response = client.post(
            "/api/amenities/amenities",
            json={**CLUBHOUSE, "open_time": "6am"},
            headers=admin_headers
        )
        assert response.status_code == 422

    def test_residents_cannot_create(self, client, resident_headers):
        response = client.post("/api/amenities/amenities", json=CLUBHOUSE, headers=resident_headers)
        assert response.status_code == 403

    def test_list_and_filter(self, client, amenity, committee_headers, resident_headers):
        client.post(
            "/api/amenities/amenities",
            json={**CLUBHOUSE, "name": "Tennis Court", "category": "Sports"},
            headers=committee_headers
        )

        listing = client.get("/api/amenities/amenities", headers=resident_headers).json()
        assert listing["count"] == 2
        assert listing["amenities"][0]["name"] == "Tennis Court"

        sports = client.get("/api/amenities/amenities?category=Sports", headers=resident_headers).json()
        assert [a["name"] for a in sports["amenities"]] == ["Tennis Court"]

    def test_get_missing_amenity(self, client, resident_headers):
        response = client.get(f"/api/amenities/amenities/{uuid.uuid4()}", headers=resident_headers)
        assert response.status_code == 404

    def test_update_is_revalidated(self, client, amenity, committee_headers):
        response = client.patch(
            f"/api/amenities/amenities/{amenity['id']}",
            json={"close_time": "05:00"},
            headers=committee_headers
        )
        assert response.status_code == 400

        ok = client.patch(
            f"/api/amenities/amenities/{amenity['id']}",
            json={"capacity": 80},
            headers=committee_headers
        )
        assert ok.json()["amenity"]["capacity"] == 80
        assert ok.json()["amenity"]["close_time"] == "22:00"

    def test_delete_removes_bookings(self, client, amenity, admin_headers, resident_headers):
        booking = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)
        booking_id = booking.json()["booking"]["id"]

        response = client.delete(f"/api/amenities/amenities/{amenity['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/api/amenities/bookings/{booking_id}", headers=admin_headers).status_code == 404

    def test_stats(self, client, amenity, admin_headers, resident_headers):
        created = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)
        booking_id = created.json()["booking"]["id"]
        client.patch(
            f"/api/amenities/bookings/{booking_id}/payment",
            json={"payment_method": "upi", "transaction_id": "UPI123"},
            headers=admin_headers
        )

        stats = client.get("/api/amenities/amenities/stats", headers=admin_headers).json()

        assert stats["total_amenities"] == 1
        assert stats["active_amenities"] == 1
        assert stats["total_bookings"] == 1
        assert stats["pending_bookings"] == 1
        assert stats["total_revenue"] == 2000
        assert stats["category_breakdown"] == [{"category": "Indoor", "count": 1}]


class TestBookingRules:

    def test_successful_booking(self, client, amenity, resident, resident_headers):
        response = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        assert response.status_code == 201
        booking = response.json()["booking"]
        assert booking["status"] == "pending"
        assert booking["duration"] == 2
        assert booking["total_amount"] == 2000  # 2h x 500 + 1000 deposit
        assert booking["resident_name"] == "Riya Resident"
        assert booking["unit"] == "A-101"
        assert booking["user_id"] == str(resident.id)
        assert booking["amenity"]["name"] == "Clubhouse Hall"

    def test_unknown_amenity(self, client, resident_headers):
        response = client.post("/api/amenities/bookings", json=booking_payload(str(uuid.uuid4())), headers=resident_headers)
        assert response.status_code == 404

    def test_inactive_amenity(self, client, amenity, admin_headers, resident_headers):
        client.patch(f"/api/amenities/amenities/{amenity['id']}", json={"status": "maintenance"}, headers=admin_headers)

        response = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Amenity is not available for booking"

    def test_end_before_start(self, client, amenity, resident_headers):
        response = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], start="12:00", end="10:00"),
            headers=resident_headers
        )
        assert response.status_code == 400

    def test_outside_opening_hours(self, client, amenity, resident_headers):
        response = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], start="21:00", end="23:00"),
            headers=resident_headers
        )
        assert response.status_code == 400

    def test_duration_limits(self, client, amenity, resident_headers):
        too_long = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], start="08:00", end="14:00"),
            headers=resident_headers
        )
        assert too_long.status_code == 400

        too_short = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], start="10:00", end="10:30"),
            headers=resident_headers
        )
        assert too_short.status_code == 400

    def test_past_date(self, client, amenity, resident_headers):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        response = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], booking_date=yesterday),
            headers=resident_headers
        )
        assert response.status_code == 400

    def test_beyond_advance_window(self, client, amenity, resident_headers):
        far = (date.today() + timedelta(days=8)).isoformat()
        response = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], booking_date=far),
            headers=resident_headers
        )
        assert response.status_code == 400

    def test_maintenance_window(self, client, amenity, admin_headers, resident_headers):
        client.patch(
            f"/api/amenities/amenities/{amenity['id']}",
            json={"maintenance_schedule": [{
                "start_date": TOMORROW.isoformat(),
                "end_date": (TOMORROW + timedelta(days=2)).isoformat(),
                "reason": "Painting"
            }]},
            headers=admin_headers
        )

        response = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)
        assert response.status_code == 400

    def test_guests_over_capacity(self, client, amenity, resident_headers):
        response = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], number_of_guests=51),
            headers=resident_headers
        )
        assert response.status_code == 400

    def test_overlap_conflict(self, client, amenity, resident_headers, other_resident_headers):
        client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        response = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], start="11:00", end="13:00"),
            headers=other_resident_headers
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Time slot already booked"

    def test_touching_bookings_allowed(self, client, amenity, resident_headers, other_resident_headers):
        client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        response = client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], start="12:00", end="14:00"),
            headers=other_resident_headers
        )
        assert response.status_code == 201

    def test_cancelled_booking_frees_slot(self, client, amenity, resident_headers, other_resident_headers):
        first = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)
        client.patch(f"/api/amenities/bookings/{first.json()['booking']['id']}/cancel", headers=resident_headers)

        response = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=other_resident_headers)
        assert response.status_code == 201


class TestBookingAccess:

    def test_residents_see_only_their_bookings(self, client, amenity, resident_headers, other_resident_headers, admin_headers):
        client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)
        client.post(
            "/api/amenities/bookings",
            json=booking_payload(amenity["id"], start="14:00", end="16:00"),
            headers=other_resident_headers
        )

        mine = client.get("/api/amenities/bookings", headers=resident_headers).json()
        assert mine["count"] == 1

        everything = client.get("/api/amenities/bookings", headers=admin_headers).json()
        assert everything["count"] == 2
        assert [b["start_time"] for b in everything["bookings"]] == ["14:00", "10:00"]

    def test_get_booking_access(self, client, amenity, resident_headers, other_resident_headers, committee_headers):
        created = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)
        booking_id = created.json()["booking"]["id"]

        assert client.get(f"/api/amenities/bookings/{booking_id}", headers=resident_headers).status_code == 200
        assert client.get(f"/api/amenities/bookings/{booking_id}", headers=committee_headers).status_code == 200
        assert client.get(f"/api/amenities/bookings/{booking_id}", headers=other_resident_headers).status_code == 403

    def test_approve_then_complete_then_locked(self, client, amenity, committee, resident_headers, committee_headers):
        created = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)
        url = f"/api/amenities/bookings/{created.json()['booking']['id']}"

        approved = client.patch(f"{url}/status", json={"status": "approved"}, headers=committee_headers)
        assert approved.json()["booking"]["approved_by_id"] == str(committee.id)

        client.patch(f"{url}/status", json={"status": "completed"}, headers=committee_headers)

        locked = client.patch(f"{url}/status", json={"status": "approved"}, headers=committee_headers)
        assert locked.status_code == 400

        cancel = client.patch(f"{url}/cancel", headers=resident_headers)
        assert cancel.status_code == 400

    def test_reject_stores_reason(self, client, amenity, resident_headers, admin_headers):
        created = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        response = client.patch(
            f"/api/amenities/bookings/{created.json()['booking']['id']}/status",
            json={"status": "rejected", "rejection_reason": "Hall reserved for AGM"},
            headers=admin_headers
        )

        assert response.json()["booking"]["status"] == "rejected"
        assert response.json()["booking"]["rejection_reason"] == "Hall reserved for AGM"

    def test_resident_cannot_change_status(self, client, amenity, resident_headers):
        created = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        response = client.patch(
            f"/api/amenities/bookings/{created.json()['booking']['id']}/status",
            json={"status": "approved"},
            headers=resident_headers
        )
        assert response.status_code == 403

    def test_other_resident_cannot_cancel(self, client, amenity, resident_headers, other_resident_headers):
        created = client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        response = client.patch(
            f"/api/amenities/bookings/{created.json()['booking']['id']}/cancel",
            headers=other_resident_headers
        )
        assert response.status_code == 403


class TestAvailableSlots:

    def test_slots_skip_booked_hours(self, client, amenity, resident_headers):
        client.post("/api/amenities/bookings", json=booking_payload(amenity["id"]), headers=resident_headers)

        response = client.get(
            f"/api/amenities/bookings/available-slots?amenity_id={amenity['id']}&date={TOMORROW.isoformat()}",
            headers=resident_headers
        )

        assert response.status_code == 200
        starts = [s["start_time"] for s in response.json()["available_slots"]]
        assert starts[0] == "06:00"
        assert starts[-1] == "21:00"
        assert "10:00" not in starts
        assert "11:00" not in starts
        assert "12:00" in starts
        assert len(starts) == 14

    def test_parameters_required(self, client, amenity, resident_headers):
        response = client.get(
            f"/api/amenities/bookings/available-slots?amenity_id={amenity['id']}",
            headers=resident_headers
        )
        assert response.status_code == 400
