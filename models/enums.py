from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USERS
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Staff role. Managers are bound to a single property."""

    admin = "admin"
    manager = "manager"
    helper = "helper"


# -----------------------------------------------------
# ROOMS
# -----------------------------------------------------
class RoomStatus(BaseStrEnum):
    available = "available"
    occupied = "occupied"
    cleaning = "cleaning"
    maintenance = "maintenance"


class CleaningStatus(BaseStrEnum):
    clean = "clean"
    dirty = "dirty"
    in_progress = "in_progress"


class LinenStatus(BaseStrEnum):
    fresh = "fresh"
    used = "used"
    needs_replacement = "needs_replacement"


class CodeDuration(BaseStrEnum):
    """Lifetime tier used when issuing a door code."""

    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


# -----------------------------------------------------
# GUESTS / BOOKINGS / PAYMENTS
# -----------------------------------------------------
class ContactType(BaseStrEnum):
    phone = "phone"
    email = "email"


class BookingPlan(BaseStrEnum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class BookingStatus(BaseStrEnum):
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class PaymentStatus(BaseStrEnum):
    pending = "pending"
    paid = "paid"
    overdue = "overdue"


class PaymentMethod(BaseStrEnum):
    cash = "cash"
    cash_app = "cash_app"


# -----------------------------------------------------
# OPERATIONS
# -----------------------------------------------------
class TaskType(BaseStrEnum):
    room_cleaning = "room_cleaning"
    linen_change = "linen_change"
    common_area = "common_area"
    trash_pickup = "trash_pickup"
    general = "general"


class TaskStatus(BaseStrEnum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class Priority(BaseStrEnum):
    """Shared by cleaning tasks and maintenance. 'medium' is read as normal."""

    low = "low"
    normal = "normal"
    high = "high"
    critical = "critical"

    @classmethod
    def normalize(cls, value):
        if isinstance(value, str) and value.strip().lower() == "medium":
            return cls.normal.value
        return value


class MaintenanceStatus(BaseStrEnum):
    open = "open"
    in_progress = "in_progress"
    completed = "completed"


# -----------------------------------------------------
# INQUIRIES
# -----------------------------------------------------
class InquiryStatus(BaseStrEnum):
    received = "received"
    payment_confirmed = "payment_confirmed"
    booking_confirmed = "booking_confirmed"
    cancelled = "cancelled"


# -----------------------------------------------------
# CASH DRAWER / HOUSE BANK
# -----------------------------------------------------
class DrawerTransactionType(BaseStrEnum):
    cash_received = "cash_received"
    cashapp_received = "cashapp_received"
    bank_deposit_cash = "bank_deposit_cash"
    bank_deposit_cashapp = "bank_deposit_cashapp"
    house_bank_transfer = "house_bank_transfer"


class DepositType(BaseStrEnum):
    bank_deposit_cash = "bank_deposit_cash"
    bank_deposit_cashapp = "bank_deposit_cashapp"


class ExpenseCategory(BaseStrEnum):
    supplies = "supplies"
    contractors = "contractors"
    maintenance = "maintenance"
    utilities = "utilities"
    other = "other"


class HouseBankTransactionType(BaseStrEnum):
    transfer_in = "transfer_in"
    expense_supplies = "expense_supplies"
    expense_contractor = "expense_contractor"
    expense_maintenance = "expense_maintenance"
    expense_utilities = "expense_utilities"
    expense_other = "expense_other"

    @classmethod
    def for_category(cls, category: str) -> "HouseBankTransactionType":
        if category == ExpenseCategory.contractors.value:
            return cls.expense_contractor
        return cls(f"expense_{category}")
