# tests/test_bookings.py

"""
Booking lifecycle through the API: door codes, overlap protection,
idempotent creation, cancellation, check-in and check-out.
"""

import re
from datetime import datetime, timedelta


# -------------------------------------------------
# Door codes
# -------------------------------------------------
def test_manager_generates_daily_code_without_touching_status(client, storage, manager_headers):
    before = datetime.now()

    response = client.post(
        "/api/rooms/P1-R1/generate-code",
        json={"duration": "daily"},
        headers=manager_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert re.fullmatch(r"\d{4}", data["doorCode"])
    expiry = datetime.fromisoformat(data["codeExpiry"])
    assert before + timedelta(days=2) <= expiry <= datetime.now() + timedelta(days=2)

    room = storage.get_room("P1-R1")
    assert room.door_code == data["doorCode"]
    assert room.status == "available"
    assert data["room"]["status"] == "available"


def test_generate_code_without_body_defaults_to_monthly(client, admin_headers):
    response = client.post("/api/rooms/P2-R3/generate-code", headers=admin_headers)

    assert response.status_code == 200
    expiry = datetime.fromisoformat(response.json()["codeExpiry"])
    assert expiry - datetime.now() > timedelta(days=34)


def test_manager_cannot_generate_code_for_other_property(client, manager_headers):
    response = client.post("/api/rooms/P2-R1/generate-code", json={"duration": "weekly"}, headers=manager_headers)
    assert response.status_code == 403


def test_generate_code_unknown_room(client, admin_headers):
    response = client.post("/api/rooms/P9-R1/generate-code", headers=admin_headers)
    assert response.status_code == 404


# -------------------------------------------------
# Create
# -------------------------------------------------
def test_create_booking_occupies_room(client, storage, manager_headers, booking_payload):
    response = client.post("/api/bookings", json=booking_payload, headers=manager_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "active"
    assert data["paymentStatus"] == "pending"
    assert data["frontDoorCode"] == "1234"
    assert float(data["totalAmount"]) == 2000.0
    assert storage.get_room("P1-R1").status == "occupied"
    assert "booking_created" in [log.action for log in storage.get_audit_logs()]


def test_identical_booking_request_is_idempotent(client, storage, manager_headers, booking_payload):
    first = client.post("/api/bookings", json=booking_payload, headers=manager_headers)
    second = client.post("/api/bookings", json=booking_payload, headers=manager_headers)

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert len(storage.get_bookings()) == 1


def test_overlapping_booking_is_rejected(client, storage, manager_headers, booking_payload, guest):
    assert client.post("/api/bookings", json=booking_payload, headers=manager_headers).status_code == 201

    other_guest = storage.create_guest({"name": "Second Guest", "contact": "555-0200"})
    response = client.post(
        "/api/bookings",
        json={
            **booking_payload,
            "guestId": other_guest.id,
            "plan": "daily",
            "startDate": "2026-03-15T12:00:00",
            "endDate": "2026-03-20T12:00:00",
        },
        headers=manager_headers,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Room is already booked for the selected dates"
    assert len(storage.get_bookings()) == 1
    assert "booking_error" in [log.action for log in storage.get_audit_logs()]


def test_back_to_back_bookings_are_allowed(client, manager_headers, booking_payload):
    assert client.post("/api/bookings", json=booking_payload, headers=manager_headers).status_code == 201

    response = client.post(
        "/api/bookings",
        json={**booking_payload, "startDate": "2026-04-01T12:00:00", "endDate": "2026-05-01T12:00:00"},
        headers=manager_headers,
    )
    assert response.status_code == 201


def test_open_ended_booking_blocks_later_stays(client, manager_headers, booking_payload):
    tenant = {**booking_payload, "endDate": None}
    assert client.post("/api/bookings", json=tenant, headers=manager_headers).status_code == 201

    later = {**booking_payload, "startDate": "2027-01-01T12:00:00", "endDate": "2027-01-05T12:00:00"}
    assert client.post("/api/bookings", json=later, headers=manager_headers).status_code == 409


def test_end_before_start_is_invalid(client, manager_headers, booking_payload):
    payload = {**booking_payload, "endDate": "2026-02-01T12:00:00"}
    response = client.post("/api/bookings", json=payload, headers=manager_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request data"


def test_manager_cannot_book_other_property(client, storage, manager_headers, booking_payload):
    response = client.post(
        "/api/bookings",
        json={**booking_payload, "roomId": "P2-R1"},
        headers=manager_headers,
    )

    assert response.status_code == 403
    assert storage.get_bookings() == []
    assert storage.get_room("P2-R1").status == "available"


def test_unknown_room_or_guest(client, admin_headers, booking_payload):
    assert client.post(
        "/api/bookings", json={**booking_payload, "roomId": "P1-R99"}, headers=admin_headers
    ).status_code == 404
    assert client.post(
        "/api/bookings", json={**booking_payload, "guestId": "missing"}, headers=admin_headers
    ).status_code == 404


def test_helper_cannot_create_bookings(client, helper_headers, booking_payload):
    assert client.post("/api/bookings", json=booking_payload, headers=helper_headers).status_code == 403


# -------------------------------------------------
# Listing & availability
# -------------------------------------------------
def test_bookings_list_is_scoped(client, admin_headers, manager_headers, p2_manager_headers, booking_payload):
    client.post("/api/bookings", json=booking_payload, headers=admin_headers)

    assert len(client.get("/api/bookings", headers=admin_headers).json()) == 1
    assert len(client.get("/api/bookings", headers=manager_headers).json()) == 1
    assert client.get("/api/bookings", headers=p2_manager_headers).json() == []


def test_other_property_booking_is_forbidden(client, admin_headers, p2_manager_headers, booking_payload):
    booking_id = client.post("/api/bookings", json=booking_payload, headers=admin_headers).json()["id"]

    assert client.get(f"/api/bookings/{booking_id}", headers=p2_manager_headers).status_code == 403
    assert client.get(f"/api/bookings/{booking_id}", headers=admin_headers).status_code == 200


def test_room_availability_window(client, manager_headers, booking_payload):
    booking_id = client.post("/api/bookings", json=booking_payload, headers=manager_headers).json()["id"]

    busy = client.get(
        "/api/rooms/P1-R1/availability",
        params={"start": "2026-03-10T00:00:00", "end": "2026-03-12T00:00:00"},
        headers=manager_headers,
    )
    free = client.get(
        "/api/rooms/P1-R1/availability",
        params={"start": "2026-05-01T00:00:00", "end": "2026-05-02T00:00:00"},
        headers=manager_headers,
    )

    assert [b["id"] for b in busy.json()["bookings"]] == [booking_id]
    assert free.json()["bookings"] == []


# -------------------------------------------------
# Update / cancel
# -------------------------------------------------
def test_cancel_releases_room(client, storage, manager_headers, booking_payload):
    booking_id = client.post("/api/bookings", json=booking_payload, headers=manager_headers).json()["id"]

    response = client.delete(f"/api/bookings/{booking_id}", headers=manager_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert storage.get_room("P1-R1").status == "available"
    assert client.delete(f"/api/bookings/{booking_id}", headers=manager_headers).status_code == 400


def test_update_dates_checks_overlap(client, manager_headers, booking_payload):
    client.post("/api/bookings", json=booking_payload, headers=manager_headers)
    later = {**booking_payload, "startDate": "2026-04-01T12:00:00", "endDate": "2026-05-01T12:00:00"}
    second_id = client.post("/api/bookings", json=later, headers=manager_headers).json()["id"]

    clash = client.put(
        f"/api/bookings/{second_id}",
        json={"startDate": "2026-03-20T12:00:00"},
        headers=manager_headers,
    )
    fine = client.put(
        f"/api/bookings/{second_id}",
        json={"endDate": "2026-05-15T12:00:00", "paymentStatus": "overdue"},
        headers=manager_headers,
    )

    assert clash.status_code == 409
    assert fine.status_code == 200
    assert fine.json()["paymentStatus"] == "overdue"


def test_status_update_to_cancelled_releases_room(any_client, seeded_any_storage, any_manager_headers, any_booking_payload):
    booking_id = any_client.post("/api/bookings", json=any_booking_payload, headers=any_manager_headers).json()["id"]
    assert seeded_any_storage.get_room("P1-R1").status == "occupied"

    response = any_client.put(f"/api/bookings/{booking_id}", json={"status": "cancelled"}, headers=any_manager_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert seeded_any_storage.get_room("P1-R1").status == "available"


def test_reactivating_booking_checks_overlap(any_client, seeded_any_storage, any_manager_headers, any_booking_payload):
    first_id = any_client.post("/api/bookings", json=any_booking_payload, headers=any_manager_headers).json()["id"]
    any_client.delete(f"/api/bookings/{first_id}", headers=any_manager_headers)
    second = any_client.post("/api/bookings", json=any_booking_payload, headers=any_manager_headers)
    assert second.status_code == 201

    clash = any_client.put(f"/api/bookings/{first_id}", json={"status": "active"}, headers=any_manager_headers)

    assert clash.status_code == 409
    active = [b for b in seeded_any_storage.get_bookings_for_room("P1-R1") if b.status == "active"]
    assert [b.id for b in active] == [second.json()["id"]]

    any_client.delete(f"/api/bookings/{second.json()['id']}", headers=any_manager_headers)
    assert seeded_any_storage.get_room("P1-R1").status == "available"

    reactivated = any_client.put(f"/api/bookings/{first_id}", json={"status": "active"}, headers=any_manager_headers)

    assert reactivated.status_code == 200
    assert reactivated.json()["status"] == "active"
    assert seeded_any_storage.get_room("P1-R1").status == "occupied"


# -------------------------------------------------
# Check-in / check-out
# -------------------------------------------------
def test_check_in_marks_room_occupied(client, storage, manager_headers, booking_payload):
    booking_id = client.post("/api/bookings", json=booking_payload, headers=manager_headers).json()["id"]
    storage.update_room("P1-R1", {"status": "available"})

    response = client.post(f"/api/bookings/{booking_id}/check-in", headers=manager_headers)

    assert response.status_code == 200
    assert storage.get_room("P1-R1").status == "occupied"


def test_check_out_hands_room_to_housekeeping(client, storage, manager_headers, booking_payload):
    booking_id = client.post("/api/bookings", json=booking_payload, headers=manager_headers).json()["id"]

    response = client.post(f"/api/bookings/{booking_id}/check-out", headers=manager_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    room = storage.get_room("P1-R1")
    assert room.status == "cleaning"
    assert room.cleaning_status == "dirty"
    assert room.linen_status == "used"

    [task] = storage.get_cleaning_tasks()
    assert task.type == "room_cleaning"
    assert task.room_id == "P1-R1"
    assert task.property_id == "P1"
    assert task.status == "pending"
    assert task.priority == "high"

    # Completed bookings cannot be checked out again
    assert client.post(f"/api/bookings/{booking_id}/check-out", headers=manager_headers).status_code == 400
