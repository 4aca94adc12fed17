# tests/test_permissions.py

"""
Tests for permission checks and access control.
"""

import pytest
from fastapi.testclient import TestClient


# (method, path, json) reachable by admins only
ADMIN_ONLY = [
    ("get", "/api/users", None),
    ("post", "/api/properties", {"id": "P3", "name": "Annex"}),
    ("post", "/api/rooms", {"propertyId": "P1", "roomNumber": 9}),
    ("put", "/api/rooms/P1-R1/master-code", {"masterCode": "4321"}),
    ("get", "/api/master-codes", None),
    ("get", "/api/audit-logs", None),
    ("get", "/api/reports", None),
    ("get", "/api/inventory/low-stock", None),
    ("get", "/api/maintenance/open", None),
    ("post", "/api/banned-users", {"name": "X", "email": "x@example.com", "reason": "r"}),
]

# Reachable by admins and managers, never helpers
STAFF_ONLY = [
    ("get", "/api/guests", None),
    ("get", "/api/bookings", None),
    ("get", "/api/payments", None),
    ("get", "/api/helpers", None),
    ("get", "/api/banned-users", None),
    ("get", "/api/analytics", None),
    ("get", "/api/cash-turnins", None),
]


def _call(client, method, path, payload, headers):
    kwargs = {"headers": headers}
    if payload is not None:
        kwargs["json"] = payload
    return getattr(client, method)(path, **kwargs)


@pytest.mark.parametrize("method, path, payload", ADMIN_ONLY)
def test_admin_only_routes_reject_managers(client: TestClient, manager_headers, method, path, payload):
    response = _call(client, method, path, payload, manager_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Insufficient permissions"


@pytest.mark.parametrize("method, path, payload", ADMIN_ONLY)
def test_admin_only_routes_admit_admin(client: TestClient, admin_headers, method, path, payload):
    response = _call(client, method, path, payload, admin_headers)
    assert response.status_code in (200, 201)


@pytest.mark.parametrize("method, path, payload", STAFF_ONLY)
def test_staff_routes_reject_helpers(client: TestClient, helper_headers, manager_headers, method, path, payload):
    assert _call(client, method, path, payload, helper_headers).status_code == 403
    assert _call(client, method, path, payload, manager_headers).status_code == 200


@pytest.mark.parametrize("path", ["/api/rooms", "/api/bookings", "/api/dashboard/stats", "/api/audit-logs"])
def test_anonymous_requests_are_unauthorized(client: TestClient, path):
    assert client.get(path).status_code == 401


def test_public_routes_need_no_token(client: TestClient):
    assert client.get("/api/health").status_code == 200
    assert client.get("/api/inquiries/track/unknown").status_code == 404


# -------------------------------------------------
# Property scoping through the API
# -------------------------------------------------
def test_manager_sees_only_own_rooms(client, manager_headers, admin_headers, helper_headers):
    mine = client.get("/api/rooms", headers=manager_headers).json()

    assert len(mine) == 8
    assert {room["propertyId"] for room in mine} == {"P1"}
    assert len(client.get("/api/rooms", headers=admin_headers).json()) == 18
    assert len(client.get("/api/rooms", headers=helper_headers).json()) == 18
    assert len(client.get("/api/rooms", params={"propertyId": "P2"}, headers=admin_headers).json()) == 10


def test_manager_cannot_read_other_property_room(client, manager_headers):
    assert client.get("/api/rooms/P1-R2", headers=manager_headers).status_code == 200
    assert client.get("/api/rooms/P2-R2", headers=manager_headers).status_code == 403


def test_manager_without_property_sees_nothing(client, storage):
    from core.security import create_access_token

    # Created directly: the API refuses managers without a property
    floating = storage.create_user({"username": "floater", "password_hash": "x", "role": "manager", "name": "Floater"})
    headers = {"Authorization": f"Bearer {create_access_token(floating.id, floating.role)}"}

    assert client.get("/api/rooms", headers=headers).json() == []
    assert client.get("/api/inventory", headers=headers).json() == []
    assert client.get("/api/rooms/P1-R1", headers=headers).status_code == 403


def test_inventory_scoping_and_writes(client, storage, manager_headers, p2_manager_headers):
    items = client.get("/api/inventory", headers=manager_headers).json()
    assert {item["propertyId"] for item in items} == {"P1"}

    towels = next(item for item in items if item["item"] == "Towels")
    updated = client.put(f"/api/inventory/{towels['id']}", json={"quantity": 3}, headers=manager_headers)
    assert updated.status_code == 200
    assert updated.json()["quantity"] == 3

    assert client.put(f"/api/inventory/{towels['id']}", json={"quantity": 99}, headers=p2_manager_headers).status_code == 403
    assert client.delete(f"/api/inventory/{towels['id']}", headers=p2_manager_headers).status_code == 403

    created = client.post(
        "/api/inventory",
        json={"propertyId": "P2", "item": "Soap", "quantity": 10},
        headers=manager_headers,
    )
    assert created.status_code == 403

    assert client.delete(f"/api/inventory/{towels['id']}", headers=manager_headers).status_code == 200
    assert storage.get_inventory_item(towels["id"]) is None


def test_maintenance_reporting(client, storage, manager_headers, p2_manager_headers, p1_manager):
    response = client.post(
        "/api/maintenance",
        json={"roomId": "P1-R4", "issue": "Leaky faucet", "priority": "critical"},
        headers=manager_headers,
    )
    assert response.status_code == 201
    item = response.json()
    assert item["propertyId"] == "P1"
    assert item["reportedBy"] == p1_manager.id
    assert item["status"] == "open"

    assert client.get("/api/maintenance", headers=p2_manager_headers).json() == []
    assert client.put(f"/api/maintenance/{item['id']}", json={"status": "completed"}, headers=p2_manager_headers).status_code == 403

    done = client.put(f"/api/maintenance/{item['id']}", json={"status": "completed"}, headers=manager_headers)
    assert done.json()["dateCompleted"] is not None


def test_helper_cannot_report_maintenance(client, helper_headers):
    response = client.post("/api/maintenance", json={"issue": "Broken lamp"}, headers=helper_headers)
    assert response.status_code == 403


# -------------------------------------------------
# Staff accounts
# -------------------------------------------------
def test_admin_creates_manager_account(client, storage, admin_headers):
    response = client.post(
        "/api/users",
        json={"username": "p2deputy", "password": "deputy123", "role": "manager", "property": "P2", "name": "Deputy"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["property"] == "P2"
    assert "password" not in response.json()

    login = client.post("/api/auth/login", json={"username": "p2deputy", "password": "deputy123"})
    assert login.status_code == 200


def test_manager_account_requires_property(client, admin_headers):
    response = client.post(
        "/api/users",
        json={"username": "nohome", "password": "secret1", "role": "manager", "name": "No Home"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_duplicate_username_rejected(client, admin_headers):
    response = client.post(
        "/api/users",
        json={"username": "helper", "password": "secret1", "name": "Dupe"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"


def test_password_reset(client, admin_headers, helper_user):
    response = client.put(
        f"/api/users/{helper_user.id}/password",
        json={"newPassword": "brandnew1"},
        headers=admin_headers,
    )
    assert response.json() == {"success": True}

    assert client.post("/api/auth/login", json={"username": "helper", "password": "helper123"}).status_code == 401
    assert client.post("/api/auth/login", json={"username": "helper", "password": "brandnew1"}).status_code == 200


def test_front_door_code_for_own_property_only(client, storage, manager_headers):
    response = client.put("/api/properties/P1/front-door-code", json={"frontDoorCode": "2468"}, headers=manager_headers)

    assert response.status_code == 200
    assert response.json()["property"]["frontDoorCode"] == "2468"
    assert storage.get_property("P1").front_door_code == "2468"

    assert client.put("/api/properties/P2/front-door-code", json={}, headers=manager_headers).status_code == 403


def test_master_code_records(client, admin_headers):
    created = client.post(
        "/api/master-codes",
        json={"propertyId": "P1", "roomId": "P1-R1", "masterCode": "9999"},
        headers=admin_headers,
    )
    assert created.status_code == 201

    assert client.post(
        "/api/master-codes", json={"propertyId": "P7", "masterCode": "9999"}, headers=admin_headers
    ).status_code == 404
    assert len(client.get("/api/master-codes", headers=admin_headers).json()) == 1
