# models/inquiry.py

from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from models.base import CamelModel, LocalDateTime
from models.booking import BookingRead
from models.enums import BookingPlan, InquiryStatus
from models.guest import GuestRead
from models.room import RoomRead


# -------------------------------------------------
# Public (no auth)
# -------------------------------------------------
class InquiryCreate(CamelModel):
    name: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    referral_source: Optional[str] = None
    clubhouse: Optional[str] = None
    preferred_plan: BookingPlan = BookingPlan.monthly
    message: Optional[str] = None


class InquiryCreated(CamelModel):
    id: str
    tracker_token: str
    token_expiry: datetime
    status: InquiryStatus


class TrackedBooking(CamelModel):
    room_id: str
    door_code: Optional[str] = None
    front_door_code: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None


class InquiryTrackResponse(CamelModel):
    id: str
    status: InquiryStatus
    booking: Optional[TrackedBooking] = None


# -------------------------------------------------
# Staff
# -------------------------------------------------
class InquiryRead(CamelModel):
    id: str
    name: str
    contact: str
    email: Optional[str] = None
    referral_source: Optional[str] = None
    clubhouse: Optional[str] = None
    preferred_plan: BookingPlan
    message: Optional[str] = None
    status: InquiryStatus
    tracker_token: str
    token_expiry: datetime
    booking_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class InquiryUpdate(CamelModel):
    status: Optional[InquiryStatus] = None
    notes: Optional[str] = None


class AssignRoomRequest(CamelModel):
    property_id: str
    plan: BookingPlan = BookingPlan.monthly
    start_date: LocalDateTime
    end_date: Optional[LocalDateTime] = None


class AssignRoomResponse(CamelModel):
    booking: BookingRead
    guest: GuestRead
    room: RoomRead
    inquiry: InquiryRead
