# storage/seed.py

from datetime import datetime, timedelta
from decimal import Decimal

from core.logging_config import logger
from core.security import hash_password
from storage.base import Storage


DEMO_PROPERTIES = [
    {
        "id": "P1",
        "name": "Premium Location",
        "description": "8 Rooms • Premium location with higher rates",
        "front_door_code": "1234",
        "rate_daily": Decimal("100.00"),
        "rate_weekly": Decimal("500.00"),
        "rate_monthly": Decimal("2000.00"),
        "room_count": 8,
    },
    {
        "id": "P2",
        "name": "Value Location",
        "description": "10 Rooms • Value location with competitive rates",
        "front_door_code": "5678",
        "rate_daily": Decimal("60.00"),
        "rate_weekly": Decimal("300.00"),
        "rate_monthly": Decimal("1200.00"),
        "room_count": 10,
    },
]

# (username, password, role, property, display name)
DEMO_USERS = [
    ("admin", "admin123", "admin", None, "Admin User"),
    ("p1manager", "p1manager123", "manager", "P1", "P1 Manager"),
    ("p2manager", "p2manager123", "manager", "P2", "P2 Manager"),
    ("helper", "helper123", "helper", None, "Cleaning Helper"),
]

# (property, item, quantity, threshold, unit)
DEMO_INVENTORY = [
    ("P1", "Sheet Sets", 20, 10, "sets"),
    ("P1", "Towels", 30, 15, "pieces"),
    ("P2", "Sheet Sets", 25, 12, "sets"),
    ("P2", "Towels", 35, 18, "pieces"),
]


def seed_demo_data(storage: Storage) -> bool:
    """
    Load the demo properties, rooms, staff accounts and inventory.
    Skipped when any user already exists. Returns True if data was written.
    """
    if storage.get_users():
        logger.info("Seed skipped, users already present")
        return False

    now = datetime.now()

    with storage.transaction():
        for prop in DEMO_PROPERTIES:
            room_count = prop["room_count"]
            storage.create_property({
                **{k: v for k, v in prop.items() if k != "room_count"},
                "code_expiry": now + timedelta(days=30),
            })
            for number in range(1, room_count + 1):
                storage.create_room({
                    "id": f"{prop['id']}-R{number}",
                    "property_id": prop["id"],
                    "room_number": number,
                    "status": "available",
                    "cleaning_status": "clean",
                    "linen_status": "fresh",
                    "last_cleaned": now,
                    "last_linen_change": now,
                })

        for username, password, role, property_id, name in DEMO_USERS:
            storage.create_user({
                "username": username,
                "password_hash": hash_password(password),
                "role": role,
                "property_id": property_id,
                "name": name,
            })

        for property_id, item, quantity, threshold, unit in DEMO_INVENTORY:
            storage.create_inventory_item({
                "property_id": property_id,
                "item": item,
                "quantity": quantity,
                "threshold": threshold,
                "unit": unit,
            })

    logger.info("🌱 Demo data seeded (2 properties, 18 rooms, 4 users)")
    return True
