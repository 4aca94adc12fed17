# storage/tables.py
"""
Persisted records. Enumerated columns are plain text; their allowed values
are enforced by the API schemas in models/.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid4())


MONEY = dict(max_digits=10, decimal_places=2)


# -------------------------------------------------
# Staff & properties
# -------------------------------------------------
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    username: str = Field(index=True, unique=True)
    password_hash: str
    role: str = "helper"
    property_id: Optional[str] = Field(default=None, foreign_key="properties.id")
    name: str
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class Property(SQLModel, table=True):
    __tablename__ = "properties"

    id: str = Field(primary_key=True)
    name: str
    description: Optional[str] = None
    front_door_code: Optional[str] = None
    code_expiry: Optional[datetime] = Field(default=None, sa_type=DateTime)
    rate_daily: Decimal = Field(default=Decimal("0"), **MONEY)
    rate_weekly: Decimal = Field(default=Decimal("0"), **MONEY)
    rate_monthly: Decimal = Field(default=Decimal("0"), **MONEY)


class Room(SQLModel, table=True):
    __tablename__ = "rooms"

    id: str = Field(primary_key=True)
    property_id: str = Field(foreign_key="properties.id", index=True)
    room_number: int
    status: str = "available"
    door_code: Optional[str] = None
    code_expiry: Optional[datetime] = Field(default=None, sa_type=DateTime)
    master_code: Optional[str] = None
    cleaning_status: str = "clean"
    linen_status: str = "fresh"
    last_cleaned: Optional[datetime] = Field(default=None, sa_type=DateTime)
    last_linen_change: Optional[datetime] = Field(default=None, sa_type=DateTime)
    notes: Optional[str] = None


# -------------------------------------------------
# Guests, bookings & payments
# -------------------------------------------------
class Guest(SQLModel, table=True):
    __tablename__ = "guests"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    contact: str
    contact_type: str = "phone"
    referral_source: Optional[str] = None
    cash_app_tag: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: str = Field(default_factory=new_id, primary_key=True)
    room_id: str = Field(foreign_key="rooms.id", index=True)
    guest_id: str = Field(foreign_key="guests.id")
    plan: str
    start_date: datetime = Field(sa_type=DateTime)
    # None = tenant booking (indefinite stay)
    end_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    total_amount: Decimal = Field(default=Decimal("0"), **MONEY)
    payment_status: str = "pending"
    status: str = "active"
    door_code: Optional[str] = None
    front_door_code: Optional[str] = None
    code_expiry: Optional[datetime] = Field(default=None, sa_type=DateTime)
    notes: Optional[str] = None
    created_by: Optional[str] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class Payment(SQLModel, table=True):
    __tablename__ = "payments"

    id: str = Field(default_factory=new_id, primary_key=True)
    booking_id: str = Field(foreign_key="bookings.id", index=True)
    amount: Decimal = Field(**MONEY)
    method: str
    transaction_id: Optional[str] = None
    date_received: datetime = Field(default_factory=datetime.now, sa_type=DateTime)
    received_by: str = Field(foreign_key="users.id")
    notes: Optional[str] = None

    discount_amount: Optional[Decimal] = Field(default=None, **MONEY)
    discount_reason: Optional[str] = None
    has_security_deposit: bool = False
    security_deposit_amount: Optional[Decimal] = Field(default=None, **MONEY)
    security_deposit_discount: Optional[Decimal] = Field(default=None, **MONEY)
    has_pet_fee: bool = False
    pet_fee_amount: Optional[Decimal] = Field(default=None, **MONEY)
    pet_fee_discount: Optional[Decimal] = Field(default=None, **MONEY)
    total_paid: Optional[Decimal] = Field(default=None, **MONEY)

    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


# -------------------------------------------------
# Operations
# -------------------------------------------------
class CleaningTask(SQLModel, table=True):
    __tablename__ = "cleaning_tasks"

    id: str = Field(default_factory=new_id, primary_key=True)
    room_id: Optional[str] = Field(default=None, foreign_key="rooms.id")
    property_id: Optional[str] = Field(default=None, foreign_key="properties.id")
    type: str = "general"
    title: str
    description: Optional[str] = None
    priority: str = "normal"
    status: str = "pending"
    assigned_to: Optional[str] = Field(default=None, foreign_key="users.id")
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    completed_by: Optional[str] = Field(default=None, foreign_key="users.id")
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class InventoryItem(SQLModel, table=True):
    __tablename__ = "inventory"

    id: str = Field(default_factory=new_id, primary_key=True)
    property_id: str = Field(foreign_key="properties.id", index=True)
    item: str
    quantity: int = 0
    threshold: int = 5
    unit: str = "pieces"
    notes: Optional[str] = None
    last_updated: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class MaintenanceItem(SQLModel, table=True):
    __tablename__ = "maintenance"

    id: str = Field(default_factory=new_id, primary_key=True)
    room_id: Optional[str] = Field(default=None, foreign_key="rooms.id")
    property_id: Optional[str] = Field(default=None, foreign_key="properties.id")
    issue: str
    description: Optional[str] = None
    priority: str = "normal"
    status: str = "open"
    reported_by: str = Field(foreign_key="users.id")
    assigned_to: Optional[str] = Field(default=None, foreign_key="users.id")
    date_reported: datetime = Field(default_factory=datetime.now, sa_type=DateTime)
    date_completed: Optional[datetime] = Field(default=None, sa_type=DateTime)
    notes: Optional[str] = None


# -------------------------------------------------
# Public leads & access control
# -------------------------------------------------
class Inquiry(SQLModel, table=True):
    __tablename__ = "inquiries"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    contact: str
    email: Optional[str] = None
    referral_source: Optional[str] = None
    clubhouse: Optional[str] = None
    preferred_plan: str = "monthly"
    message: Optional[str] = None
    status: str = "received"
    tracker_token: str = Field(index=True, unique=True)
    token_expiry: datetime = Field(sa_type=DateTime)
    booking_id: Optional[str] = Field(default=None, foreign_key="bookings.id")
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class BannedUser(SQLModel, table=True):
    __tablename__ = "banned_users"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    reason: str
    banned_date: datetime = Field(default_factory=datetime.now, sa_type=DateTime)
    banned_by: str = Field(foreign_key="users.id")


class MasterCode(SQLModel, table=True):
    __tablename__ = "master_codes"

    id: str = Field(default_factory=new_id, primary_key=True)
    property_id: str = Field(foreign_key="properties.id")
    room_id: Optional[str] = Field(default=None, foreign_key="rooms.id")
    master_code: str
    notes: Optional[str] = None
    created_by: Optional[str] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class AuditLog(SQLModel, table=True):
    __tablename__ = "audit_logs"

    id: str = Field(default_factory=new_id, primary_key=True)
    # None = system event (e.g. blocked public inquiry)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id")
    action: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


# -------------------------------------------------
# Cash drawer & house bank ledgers
# -------------------------------------------------
class CashTurnIn(SQLModel, table=True):
    __tablename__ = "cash_turn_ins"

    id: str = Field(default_factory=new_id, primary_key=True)
    manager_id: str = Field(foreign_key="users.id", index=True)
    manager_name: str
    property_id: Optional[str] = None
    amount: Decimal = Field(**MONEY)
    notes: Optional[str] = None
    received_by: Optional[str] = Field(default=None, foreign_key="users.id")
    turn_in_date: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class AdminDrawerTransaction(SQLModel, table=True):
    __tablename__ = "admin_cash_drawer"

    id: str = Field(default_factory=new_id, primary_key=True)
    type: str
    # Always positive; the type decides whether it adds or deducts
    amount: Decimal = Field(**MONEY)
    source: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = Field(default=None, foreign_key="users.id")
    transaction_date: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class HouseBankTransaction(SQLModel, table=True):
    __tablename__ = "house_bank"

    id: str = Field(default_factory=new_id, primary_key=True)
    type: str
    amount: Decimal = Field(**MONEY)
    category: str = "other"
    vendor: Optional[str] = None
    description: Optional[str] = None
    receipt_url: Optional[str] = None
    created_by: Optional[str] = Field(default=None, foreign_key="users.id")
    transaction_date: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


ALL_TABLES = (
    User,
    Property,
    Room,
    Guest,
    Booking,
    Payment,
    CleaningTask,
    InventoryItem,
    MaintenanceItem,
    Inquiry,
    BannedUser,
    MasterCode,
    AuditLog,
    CashTurnIn,
    AdminDrawerTransaction,
    HouseBankTransaction,
)
