# services/bookings.py
"""
Booking lifecycle as units of work. Each operation runs inside
storage.transaction(), so a failure partway leaves nothing behind.
"""

from datetime import datetime
from typing import Tuple

from fastapi import HTTPException

from core.logging_config import logger
from core.permissions import require_property_access
from models.booking import BookingCreate, BookingUpdate
from models.enums import (
    BookingStatus,
    CleaningStatus,
    LinenStatus,
    Priority,
    RoomStatus,
    TaskStatus,
    TaskType,
)
from storage.base import Storage
from storage.tables import Booking


def _describe_stay(booking_or_data) -> str:
    end = getattr(booking_or_data, "end_date", None)
    start = getattr(booking_or_data, "start_date", None)
    return f"{start:%Y-%m-%d} to {end:%Y-%m-%d}" if end else f"{start:%Y-%m-%d} (open-ended)"


def get_booking_for_user(storage: Storage, user, booking_id: str) -> Booking:
    """404 when missing, 403 when the booking's room is outside the manager's property."""
    booking = storage.get_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    room = storage.get_room(booking.room_id)
    require_property_access(user, room.property_id if room else None)
    return booking


# ============================================================
# CREATE
# ============================================================
def create_booking(storage: Storage, user, payload: BookingCreate) -> Tuple[Booking, bool]:
    """
    Create a booking and mark its room occupied.

    Idempotent: an identical active booking (same room, guest, plan and
    dates) is returned instead of a duplicate. Returns (booking, created).
    """
    data = payload.model_dump()

    try:
        with storage.transaction():
            room = storage.get_room(data["room_id"])
            if room is None:
                raise HTTPException(status_code=404, detail="Room not found")
            require_property_access(user, room.property_id)

            if storage.get_guest(data["guest_id"]) is None:
                raise HTTPException(status_code=404, detail="Guest not found")

            for existing in storage.get_bookings_for_room(room.id):
                if (
                    existing.status == BookingStatus.active.value
                    and existing.guest_id == data["guest_id"]
                    and existing.plan == data["plan"]
                    and existing.start_date == data["start_date"]
                    and existing.end_date == data["end_date"]
                ):
                    return existing, False

            overlaps = storage.find_overlapping_bookings(room.id, data["start_date"], data["end_date"])
            if overlaps:
                raise HTTPException(
                    status_code=409,
                    detail="Room is already booked for the selected dates",
                )

            if not data.get("front_door_code"):
                prop = storage.get_property(room.property_id)
                data["front_door_code"] = prop.front_door_code if prop else None

            booking = storage.create_booking({
                **data,
                "status": BookingStatus.active.value,
                "created_by": user.id,
            })
            storage.update_room(room.id, {"status": RoomStatus.occupied.value})
            storage.create_audit_log(
                user.id,
                "booking_created",
                f"Booking created for room {room.id} {_describe_stay(booking)} by {user.name}",
            )
    except HTTPException as e:
        storage.create_audit_log(
            user.id,
            "booking_error",
            f"Booking creation failed for room {data['room_id']}: {e.detail}",
        )
        raise

    logger.info(f"Booking {booking.id} created for room {booking.room_id}")
    return booking, True


# ============================================================
# UPDATE / CANCEL
# ============================================================
def update_booking(storage: Storage, user, booking_id: str, payload: BookingUpdate) -> Booking:
    changes = payload.model_dump(exclude_unset=True)

    with storage.transaction():
        booking = get_booking_for_user(storage, user, booking_id)

        start = changes.get("start_date", booking.start_date)
        end = changes.get("end_date", booking.end_date)
        if end is not None and end <= start:
            raise HTTPException(status_code=400, detail="endDate must be after startDate")

        was_active = booking.status == BookingStatus.active.value
        is_active = changes.get("status", booking.status) == BookingStatus.active.value
        dates_changed = "start_date" in changes or "end_date" in changes

        # Reactivating a cancelled or completed stay claims the room again
        if is_active and (dates_changed or not was_active):
            if storage.find_overlapping_bookings(booking.room_id, start, end, exclude_id=booking.id):
                raise HTTPException(
                    status_code=409,
                    detail="Room is already booked for the selected dates",
                )

        updated = storage.update_booking(booking.id, changes)
        if was_active and not is_active:
            _release_room(storage, booking)
        elif is_active and not was_active:
            storage.update_room(booking.room_id, {"status": RoomStatus.occupied.value})
    return updated


def _release_room(storage: Storage, booking: Booking) -> None:
    """Free the room unless another active booking still holds it."""
    still_held = [
        b for b in storage.get_bookings_for_room(booking.room_id)
        if b.id != booking.id and b.status == BookingStatus.active.value
    ]
    if not still_held:
        storage.update_room(booking.room_id, {"status": RoomStatus.available.value})


def cancel_booking(storage: Storage, user, booking_id: str) -> Booking:
    with storage.transaction():
        booking = get_booking_for_user(storage, user, booking_id)
        if booking.status != BookingStatus.active.value:
            raise HTTPException(status_code=400, detail=f"Booking is already {booking.status}")

        cancelled = storage.update_booking(booking.id, {"status": BookingStatus.cancelled.value})
        _release_room(storage, booking)
        storage.create_audit_log(
            user.id, "booking_cancelled", f"{user.name} cancelled booking {booking.id} (room {booking.room_id})"
        )
    return cancelled


# ============================================================
# CHECK-IN / CHECK-OUT
# ============================================================
def check_in(storage: Storage, user, booking_id: str) -> Booking:
    with storage.transaction():
        booking = get_booking_for_user(storage, user, booking_id)
        if booking.status != BookingStatus.active.value:
            raise HTTPException(status_code=400, detail=f"Cannot check in a {booking.status} booking")

        storage.update_room(booking.room_id, {"status": RoomStatus.occupied.value})
        storage.create_audit_log(
            user.id, "guest_checked_in", f"{user.name} checked in booking {booking.id} (room {booking.room_id})"
        )
    return booking


def check_out(storage: Storage, user, booking_id: str, now: datetime = None) -> Booking:
    """
    Complete the booking and hand the room to housekeeping: room goes to
    cleaning/dirty/used and a pending room_cleaning task is queued.
    """
    now = now or datetime.now()

    with storage.transaction():
        booking = get_booking_for_user(storage, user, booking_id)
        if booking.status != BookingStatus.active.value:
            raise HTTPException(status_code=400, detail=f"Cannot check out a {booking.status} booking")

        completed = storage.update_booking(booking.id, {"status": BookingStatus.completed.value})
        room = storage.update_room(booking.room_id, {
            "status": RoomStatus.cleaning.value,
            "cleaning_status": CleaningStatus.dirty.value,
            "linen_status": LinenStatus.used.value,
        })
        storage.create_cleaning_task({
            "room_id": room.id,
            "property_id": room.property_id,
            "type": TaskType.room_cleaning.value,
            "title": f"Turn over room {room.room_number}",
            "description": f"Guest checked out of {room.id}",
            "priority": Priority.high.value,
            "status": TaskStatus.pending.value,
            "due_date": now,
        })
        storage.create_audit_log(
            user.id, "guest_checked_out", f"{user.name} checked out booking {booking.id} (room {room.id})"
        )
    return completed
