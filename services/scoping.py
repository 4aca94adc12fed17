# services/scoping.py
"""
Role-scoped visibility.

    admin    → everything
    manager  → rows of their own property (bookings via the property's rooms);
               nothing at all when no property is assigned
    helper   → every room and inventory item, only tasks assigned to them,
               no bookings, no payments, no maintenance
"""

from typing import Iterable, List, Optional, Sequence, Set

from core.permissions import is_admin, is_helper, is_manager


def _manager_property(user) -> Optional[str]:
    return user.property_id or None


def _manager_room_ids(user, rooms: Iterable) -> Set[str]:
    property_id = _manager_property(user)
    return {room.id for room in rooms if room.property_id == property_id}


def scope_rooms(user, rooms: Sequence) -> List:
    if is_admin(user) or is_helper(user):
        return list(rooms)
    property_id = _manager_property(user)
    if not is_manager(user) or property_id is None:
        return []
    return [room for room in rooms if room.property_id == property_id]


def scope_inventory(user, items: Sequence) -> List:
    if is_admin(user) or is_helper(user):
        return list(items)
    property_id = _manager_property(user)
    if not is_manager(user) or property_id is None:
        return []
    return [item for item in items if item.property_id == property_id]


def scope_bookings(user, bookings: Sequence, rooms: Sequence = ()) -> List:
    if is_admin(user):
        return list(bookings)
    if not is_manager(user) or _manager_property(user) is None:
        return []
    room_ids = _manager_room_ids(user, rooms)
    return [booking for booking in bookings if booking.room_id in room_ids]


def _scope_property_work(user, rows: Sequence, rooms: Sequence) -> List:
    """Tasks and maintenance carry a property, a room, or both."""
    property_id = _manager_property(user)
    if property_id is None:
        return []
    room_ids = _manager_room_ids(user, rooms)
    return [
        row for row in rows
        if row.property_id == property_id or row.room_id in room_ids
    ]


def scope_cleaning_tasks(user, tasks: Sequence, rooms: Sequence = ()) -> List:
    if is_admin(user):
        return list(tasks)
    if is_helper(user):
        return [task for task in tasks if task.assigned_to == user.id]
    if is_manager(user):
        return _scope_property_work(user, tasks, rooms)
    return []


def scope_maintenance(user, items: Sequence, rooms: Sequence = ()) -> List:
    if is_admin(user):
        return list(items)
    if is_manager(user):
        return _scope_property_work(user, items, rooms)
    return []


def scope_payments(user, payments: Sequence, bookings: Sequence, rooms: Sequence = ()) -> List:
    """Payments follow the visibility of the booking they settle."""
    if is_admin(user):
        return list(payments)
    visible = {booking.id for booking in scope_bookings(user, bookings, rooms)}
    return [payment for payment in payments if payment.booking_id in visible]


_SCOPERS = {
    "rooms": lambda user, rows, rooms: scope_rooms(user, rows),
    "inventory": lambda user, rows, rooms: scope_inventory(user, rows),
    "bookings": scope_bookings,
    "cleaning_tasks": scope_cleaning_tasks,
    "maintenance": scope_maintenance,
}


def scope_for(user, kind: str, rows: Sequence, rooms: Sequence = ()) -> List:
    """
    Visible subset of `rows` for `user`. `rooms` resolves the room → property
    link for bookings, tasks and maintenance; for kind="rooms" it is unused.
    """
    try:
        scoper = _SCOPERS[kind]
    except KeyError:
        raise ValueError(f"Unknown resource kind: {kind}")
    return scoper(user, rows, rooms)
