# tests/test_inquiries.py

"""
Public inquiries: ban screening, anonymous tracking, status progression and
turning an inquiry into a booking.
"""

import re
from datetime import datetime, timedelta

import pytest


def submit(client, **overrides):
    payload = {"name": "Jo Walker", "contact": "555-0199", "email": "jo@example.com", "referralSource": "Clubhouse"}
    payload.update(overrides)
    return client.post("/api/inquiries", json=payload)


@pytest.fixture
def inquiry(client):
    response = submit(client)
    assert response.status_code == 201
    return response.json()


# -------------------------------------------------
# Submission
# -------------------------------------------------
def test_public_submission_returns_tracker(client, storage, inquiry):
    assert inquiry["status"] == "received"
    assert inquiry["trackerToken"]

    expiry = datetime.fromisoformat(inquiry["tokenExpiry"])
    assert timedelta(days=6) < expiry - datetime.now() <= timedelta(days=7)
    assert len(storage.get_inquiries()) == 1


def test_banned_email_is_blocked(client, storage, admin_headers):
    ban = client.post(
        "/api/banned-users",
        json={"name": "Trouble", "email": "Trouble@Example.com", "reason": "Property damage"},
        headers=admin_headers,
    )
    assert ban.status_code == 201

    response = submit(client, email="trouble@example.com", contact="555-7777")

    assert response.status_code == 403
    assert response.json() == {"detail": "Unable to process inquiry", "reason": "blocked"}
    assert storage.get_inquiries() == []

    blocked = [log for log in storage.get_audit_logs() if log.action == "blocked_inquiry"]
    assert len(blocked) == 1
    assert blocked[0].user_id is None


def test_banned_phone_is_blocked_regardless_of_format(client, storage, admin_user):
    storage.create_banned_user({"name": "X", "phone": "(555) 333-4444", "reason": "r", "banned_by": admin_user.id})

    response = submit(client, contact="555.333.4444", email=None)

    assert response.status_code == 403
    assert storage.get_inquiries() == []


def test_email_given_as_contact_is_screened(client, storage, admin_user):
    storage.create_banned_user({"name": "X", "email": "x@example.com", "reason": "r", "banned_by": admin_user.id})

    assert submit(client, contact="X@example.com", email=None).status_code == 403


def test_lifting_a_ban_allows_submission(client, admin_headers):
    banned_id = client.post(
        "/api/banned-users",
        json={"name": "Jo", "email": "jo@example.com", "reason": "Mistake"},
        headers=admin_headers,
    ).json()["id"]
    assert submit(client).status_code == 403

    assert client.delete(f"/api/banned-users/{banned_id}", headers=admin_headers).status_code == 200
    assert submit(client).status_code == 201
    assert client.delete(f"/api/banned-users/{banned_id}", headers=admin_headers).status_code == 404


def test_invalid_email_is_rejected(client):
    assert submit(client, email="not-an-email").status_code == 400


# -------------------------------------------------
# Tracking
# -------------------------------------------------
def test_track_by_token(client, inquiry):
    response = client.get(f"/api/inquiries/track/{inquiry['trackerToken']}")

    assert response.status_code == 200
    assert response.json() == {"id": inquiry["id"], "status": "received", "booking": None}


def test_unknown_token_is_404(client):
    assert client.get("/api/inquiries/track/not-a-token").status_code == 404


def test_expired_token_is_404(client, storage, inquiry):
    storage.update_inquiry(inquiry["id"], {"token_expiry": datetime.now() - timedelta(minutes=1)})

    response = client.get(f"/api/inquiries/track/{inquiry['trackerToken']}")

    assert response.status_code == 404
    assert response.json()["detail"] == "Tracking link has expired"


# -------------------------------------------------
# Staff handling
# -------------------------------------------------
def test_listing_requires_staff(client, inquiry, helper_headers, manager_headers):
    assert client.get("/api/inquiries").status_code == 401
    assert client.get("/api/inquiries", headers=helper_headers).status_code == 403
    assert len(client.get("/api/inquiries", headers=manager_headers).json()) == 1


def test_status_progression(client, inquiry, manager_headers):
    url = f"/api/inquiries/{inquiry['id']}"

    confirmed = client.put(url, json={"status": "payment_confirmed"}, headers=manager_headers)
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "payment_confirmed"

    backwards = client.put(url, json={"status": "received"}, headers=manager_headers)
    assert backwards.status_code == 400

    cancelled = client.put(url, json={"status": "cancelled", "notes": "No show"}, headers=manager_headers)
    assert cancelled.json()["status"] == "cancelled"
    assert cancelled.json()["notes"] == "No show"

    assert client.put(url, json={"status": "payment_confirmed"}, headers=manager_headers).status_code == 400


def test_status_change_is_audited(any_client, seeded_any_storage, any_manager_headers):
    inquiry_id = submit(any_client).json()["id"]

    response = any_client.put(
        f"/api/inquiries/{inquiry_id}", json={"status": "payment_confirmed"}, headers=any_manager_headers
    )

    assert response.status_code == 200
    changes = [log for log in seeded_any_storage.get_audit_logs() if log.action == "inquiry_status_changed"]
    assert len(changes) == 1
    assert "from received to payment_confirmed" in changes[0].details


def test_assign_room_books_first_available_room(client, storage, inquiry, manager_headers):
    storage.update_room("P1-R1", {"status": "occupied"})

    response = client.post(
        f"/api/inquiries/{inquiry['id']}/assign-room",
        json={"propertyId": "P1", "plan": "monthly", "startDate": "2026-07-01T12:00:00"},
        headers=manager_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["room"]["id"] == "P1-R2"
    assert data["room"]["status"] == "occupied"
    assert data["guest"]["name"] == "Jo Walker"
    assert data["guest"]["referralSource"] == "Clubhouse"
    assert data["inquiry"]["status"] == "booking_confirmed"
    assert data["inquiry"]["bookingId"] == data["booking"]["id"]

    booking = data["booking"]
    assert float(booking["totalAmount"]) == 2000.0
    assert booking["frontDoorCode"] == "1234"
    assert re.fullmatch(r"\d{4}", booking["doorCode"])
    assert data["room"]["doorCode"] == booking["doorCode"]

    tracked = client.get(f"/api/inquiries/track/{inquiry['trackerToken']}").json()
    assert tracked["status"] == "booking_confirmed"
    assert tracked["booking"]["roomId"] == "P1-R2"
    assert tracked["booking"]["doorCode"] == booking["doorCode"]


def test_assign_room_prices_daily_stays(client, inquiry, admin_headers):
    response = client.post(
        f"/api/inquiries/{inquiry['id']}/assign-room",
        json={
            "propertyId": "P2",
            "plan": "daily",
            "startDate": "2026-07-01T12:00:00",
            "endDate": "2026-07-03T18:00:00",
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    # 2.25 days rounds up to 3 at $60
    assert float(response.json()["booking"]["totalAmount"]) == 180.0


def test_assign_room_without_vacancy(client, storage, inquiry, admin_headers):
    for room in storage.get_rooms_by_property("P1"):
        storage.update_room(room.id, {"status": "occupied"})

    response = client.post(
        f"/api/inquiries/{inquiry['id']}/assign-room",
        json={"propertyId": "P1", "startDate": "2026-07-01T12:00:00"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "No available rooms in selected property"
    assert storage.get_guests() == []
    assert storage.get_inquiry(inquiry["id"]).status == "received"


def test_manager_cannot_assign_other_property(client, inquiry, manager_headers):
    response = client.post(
        f"/api/inquiries/{inquiry['id']}/assign-room",
        json={"propertyId": "P2", "startDate": "2026-07-01T12:00:00"},
        headers=manager_headers,
    )
    assert response.status_code == 403


def test_cancelled_inquiry_cannot_be_assigned(client, inquiry, admin_headers):
    client.put(f"/api/inquiries/{inquiry['id']}", json={"status": "cancelled"}, headers=admin_headers)

    response = client.post(
        f"/api/inquiries/{inquiry['id']}/assign-room",
        json={"propertyId": "P1", "startDate": "2026-07-01T12:00:00"},
        headers=admin_headers,
    )
    assert response.status_code == 400
