# models/booking.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field, model_validator

from models.base import CamelModel, FOUR_DIGITS, LocalDateTime, Money
from models.enums import BookingPlan, BookingStatus, PaymentStatus


# -------------------------------------------------
# Create
# -------------------------------------------------
class BookingCreate(CamelModel):
    """
    end_date may be omitted for a tenant booking (indefinite stay).
    """
    room_id: str
    guest_id: str
    plan: BookingPlan = BookingPlan.daily
    start_date: LocalDateTime
    end_date: Optional[LocalDateTime] = None
    total_amount: Money = Decimal("0")
    payment_status: PaymentStatus = PaymentStatus.pending
    door_code: Optional[str] = Field(default=None, pattern=FOUR_DIGITS)
    front_door_code: Optional[str] = Field(default=None, pattern=FOUR_DIGITS)
    code_expiry: Optional[LocalDateTime] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError("endDate must be after startDate")
        return self


# -------------------------------------------------
# Read
# -------------------------------------------------
class BookingRead(CamelModel):
    id: str
    room_id: str
    guest_id: str
    plan: BookingPlan
    start_date: datetime
    end_date: Optional[datetime] = None
    total_amount: Decimal
    payment_status: PaymentStatus
    status: BookingStatus
    door_code: Optional[str] = None
    front_door_code: Optional[str] = None
    code_expiry: Optional[datetime] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


# -------------------------------------------------
# Update (PUT)
# -------------------------------------------------
class BookingUpdate(CamelModel):
    plan: Optional[BookingPlan] = None
    start_date: Optional[LocalDateTime] = None
    end_date: Optional[LocalDateTime] = None
    total_amount: Optional[Money] = None
    payment_status: Optional[PaymentStatus] = None
    status: Optional[BookingStatus] = None
    door_code: Optional[str] = Field(default=None, pattern=FOUR_DIGITS)
    front_door_code: Optional[str] = Field(default=None, pattern=FOUR_DIGITS)
    code_expiry: Optional[LocalDateTime] = None
    notes: Optional[str] = None


class RoomAvailability(CamelModel):
    """Bookings holding a room within the requested window."""
    room_id: str
    bookings: List[BookingRead] = Field(default_factory=list)
