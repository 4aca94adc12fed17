# services/inquiries.py
"""
Public inquiries: submission with ban screening, anonymous tracking by
token, and the staff-driven status progression

    received → payment_confirmed → booking_confirmed
    (any non-cancelled state) → cancelled

received may jump straight to booking_confirmed through assign-room.
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException

from core.logging_config import logger
from core.permissions import require_property_access
from models.enums import BookingPlan, BookingStatus, ContactType, InquiryStatus, RoomStatus
from models.inquiry import AssignRoomRequest, InquiryCreate, InquiryUpdate
from services.access_codes import issue_code, issue_tracker_token, is_tracker_expired
from storage.base import Storage
from storage.tables import Inquiry


ALLOWED_TRANSITIONS = {
    InquiryStatus.received.value: {
        InquiryStatus.payment_confirmed.value,
        InquiryStatus.booking_confirmed.value,
        InquiryStatus.cancelled.value,
    },
    InquiryStatus.payment_confirmed.value: {
        InquiryStatus.booking_confirmed.value,
        InquiryStatus.cancelled.value,
    },
    InquiryStatus.booking_confirmed.value: {InquiryStatus.cancelled.value},
    InquiryStatus.cancelled.value: set(),
}


class InquiryBlocked(Exception):
    """Raised when the submitter matches a banned user."""


def check_transition(current: str, target: str) -> None:
    if target == current:
        return
    if target not in ALLOWED_TRANSITIONS.get(current, set()):
        raise HTTPException(
            status_code=400,
            detail=f"Cannot move inquiry from {current} to {target}",
        )


# -------------------------------------------------
# Public
# -------------------------------------------------
def submit_inquiry(storage: Storage, payload: InquiryCreate, now: Optional[datetime] = None) -> Inquiry:
    data = payload.model_dump()
    contact = data["contact"]
    email = data.get("email") or (contact if "@" in contact else None)
    phone = None if "@" in contact else contact

    if storage.find_banned_user(email=email, phone=phone) is not None:
        storage.create_audit_log(
            None,
            "blocked_inquiry",
            f"Blocked inquiry from banned contact: {email or phone}",
        )
        logger.warning(f"Blocked inquiry from banned contact {email or phone}")
        raise InquiryBlocked()

    token, expiry = issue_tracker_token(now)
    return storage.create_inquiry({
        **data,
        "status": InquiryStatus.received.value,
        "tracker_token": token,
        "token_expiry": expiry,
    })


def track_inquiry(storage: Storage, token: str, now: Optional[datetime] = None):
    """Returns (inquiry, booking-or-None). Missing and expired tokens are both 404."""
    inquiry = storage.get_inquiry_by_token(token)
    if inquiry is None:
        raise HTTPException(status_code=404, detail="Inquiry not found or expired")
    if is_tracker_expired(inquiry.token_expiry, now):
        raise HTTPException(status_code=404, detail="Tracking link has expired")

    booking = storage.get_booking(inquiry.booking_id) if inquiry.booking_id else None
    return inquiry, booking


# -------------------------------------------------
# Staff
# -------------------------------------------------
def update_inquiry(storage: Storage, user, inquiry_id: str, payload: InquiryUpdate) -> Inquiry:
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    with storage.transaction():
        inquiry = storage.get_inquiry(inquiry_id)
        if inquiry is None:
            raise HTTPException(status_code=404, detail="Inquiry not found")
        previous_status = inquiry.status
        if "status" in changes:
            check_transition(previous_status, changes["status"])

        updated = storage.update_inquiry(inquiry.id, changes)
        if "status" in changes and changes["status"] != previous_status:
            storage.create_audit_log(
                user.id,
                "inquiry_status_changed",
                f"{user.name} moved inquiry {inquiry.id} from {previous_status} to {changes['status']}",
            )
    return updated


def price_stay(prop, plan: str, start: datetime, end: Optional[datetime]) -> Decimal:
    """Weekly and monthly plans are flat; daily is the daily rate per started day."""
    if plan == BookingPlan.monthly.value:
        return Decimal(prop.rate_monthly)
    if plan == BookingPlan.weekly.value:
        return Decimal(prop.rate_weekly)
    days = 1 if end is None else max(1, math.ceil((end - start).total_seconds() / 86400))
    return Decimal(prop.rate_daily) * days


def assign_room(storage: Storage, user, inquiry_id: str, payload: AssignRoomRequest, now: Optional[datetime] = None):
    """
    Book the first available room of the requested property for the inquirer.
    Creates the guest and booking, issues a fresh door code, occupies the room
    and confirms the inquiry, all in one unit of work.
    """
    data = payload.model_dump()

    with storage.transaction():
        inquiry = storage.get_inquiry(inquiry_id)
        if inquiry is None:
            raise HTTPException(status_code=404, detail="Inquiry not found")
        check_transition(inquiry.status, InquiryStatus.booking_confirmed.value)

        prop = storage.get_property(data["property_id"])
        if prop is None:
            raise HTTPException(status_code=404, detail="Property not found")
        require_property_access(user, prop.id)

        room = next(
            (r for r in storage.get_rooms_by_property(prop.id) if r.status == RoomStatus.available.value),
            None,
        )
        if room is None:
            raise HTTPException(status_code=400, detail="No available rooms in selected property")

        guest = storage.create_guest({
            "name": inquiry.name,
            "contact": inquiry.contact,
            "contact_type": ContactType.email.value if "@" in inquiry.contact else ContactType.phone.value,
            "referral_source": inquiry.referral_source,
            "notes": inquiry.message,
        })

        issued = issue_code(data["plan"], now)
        booking = storage.create_booking({
            "room_id": room.id,
            "guest_id": guest.id,
            "plan": data["plan"],
            "start_date": data["start_date"],
            "end_date": data["end_date"],
            "total_amount": price_stay(prop, data["plan"], data["start_date"], data["end_date"]),
            "status": BookingStatus.active.value,
            "door_code": issued.code,
            "front_door_code": prop.front_door_code,
            "code_expiry": issued.expiry,
            "created_by": user.id,
        })
        room = storage.update_room(room.id, {
            "status": RoomStatus.occupied.value,
            "door_code": issued.code,
            "code_expiry": issued.expiry,
        })
        inquiry = storage.update_inquiry(inquiry.id, {
            "status": InquiryStatus.booking_confirmed.value,
            "booking_id": booking.id,
        })
        storage.create_audit_log(
            user.id,
            "inquiry_room_assigned",
            f"{user.name} assigned room {room.id} to inquiry {inquiry.id} ({guest.name})",
        )

    logger.info(f"Inquiry {inquiry.id} assigned to room {room.id}")
    return booking, guest, room, inquiry
