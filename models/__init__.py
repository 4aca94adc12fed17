# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    BookingPlan,
    BookingStatus,
    CleaningStatus,
    CodeDuration,
    ContactType,
    DepositType,
    DrawerTransactionType,
    ExpenseCategory,
    HouseBankTransactionType,
    InquiryStatus,
    LinenStatus,
    MaintenanceStatus,
    PaymentMethod,
    PaymentStatus,
    Priority,
    Role,
    RoomStatus,
    TaskStatus,
    TaskType,
)

# -------------------------
# Base
# -------------------------
from .base import CamelModel, SuccessResponse

# -------------------------
# Users & Auth
# -------------------------
from .user import UserCreate, UserRead, PasswordChange, PrivilegesUpdate, PrivilegesUpdated
from .auth import LoginRequest, TokenResponse, VerifyResponse

# -------------------------
# Properties & Rooms
# -------------------------
from .property import PropertyCreate, PropertyRead, PropertyUpdate, FrontDoorCodeUpdate, FrontDoorCodeResponse
from .room import (
    RoomCreate,
    RoomRead,
    RoomUpdate,
    GenerateCodeRequest,
    GeneratedCodeResponse,
    RoomMasterCodeUpdate,
    RoomMasterCodeResponse,
)

# -------------------------
# Guests, Bookings, Payments
# -------------------------
from .guest import GuestCreate, GuestRead
from .booking import BookingCreate, BookingRead, BookingUpdate, RoomAvailability
from .payment import PaymentCreate, PaymentRead, PaymentDetailedRead

# -------------------------
# Operations
# -------------------------
from .cleaning_task import CleaningTaskCreate, CleaningTaskRead, CleaningTaskUpdate, TaskAssign
from .inventory import InventoryCreate, InventoryRead, InventoryUpdate
from .maintenance import MaintenanceCreate, MaintenanceRead, MaintenanceUpdate

# -------------------------
# Inquiries & Access Control
# -------------------------
from .inquiry import (
    InquiryCreate,
    InquiryCreated,
    InquiryRead,
    InquiryUpdate,
    InquiryTrackResponse,
    AssignRoomRequest,
    AssignRoomResponse,
)
from .banned_user import BannedUserCreate, BannedUserRead
from .master_code import MasterCodeCreate, MasterCodeRead
from .audit_log import AuditLogRead

# -------------------------
# Cash & Ledgers
# -------------------------
from .cash import (
    CashTurnInCreate,
    CashTurnInRead,
    DrawerTransactionRead,
    BankDepositRequest,
    CashAppPaymentRecord,
    HouseBankTransactionRead,
    HouseBankTransferRequest,
    HouseBankExpenseRequest,
)
from .stats import (
    AdminDrawerStats,
    CashDrawerStat,
    DashboardStats,
    HouseBankStats,
)
from .reports import Analytics, Report

__all__ = [
    # Enums
    "BaseStrEnum", "BookingPlan", "BookingStatus", "CleaningStatus", "CodeDuration",
    "ContactType", "DepositType", "DrawerTransactionType", "ExpenseCategory",
    "HouseBankTransactionType", "InquiryStatus", "LinenStatus", "MaintenanceStatus",
    "PaymentMethod", "PaymentStatus", "Priority", "Role", "RoomStatus", "TaskStatus", "TaskType",

    # Base
    "CamelModel", "SuccessResponse",

    # Users & Auth
    "UserCreate", "UserRead", "PasswordChange", "PrivilegesUpdate", "PrivilegesUpdated",
    "LoginRequest", "TokenResponse", "VerifyResponse",

    # Properties & Rooms
    "PropertyCreate", "PropertyRead", "PropertyUpdate", "FrontDoorCodeUpdate", "FrontDoorCodeResponse",
    "RoomCreate", "RoomRead", "RoomUpdate", "GenerateCodeRequest", "GeneratedCodeResponse",
    "RoomMasterCodeUpdate", "RoomMasterCodeResponse",

    # Guests, Bookings, Payments
    "GuestCreate", "GuestRead",
    "BookingCreate", "BookingRead", "BookingUpdate", "RoomAvailability",
    "PaymentCreate", "PaymentRead", "PaymentDetailedRead",

    # Operations
    "CleaningTaskCreate", "CleaningTaskRead", "CleaningTaskUpdate", "TaskAssign",
    "InventoryCreate", "InventoryRead", "InventoryUpdate",
    "MaintenanceCreate", "MaintenanceRead", "MaintenanceUpdate",

    # Inquiries & Access Control
    "InquiryCreate", "InquiryCreated", "InquiryRead", "InquiryUpdate", "InquiryTrackResponse",
    "AssignRoomRequest", "AssignRoomResponse",
    "BannedUserCreate", "BannedUserRead",
    "MasterCodeCreate", "MasterCodeRead",
    "AuditLogRead",

    # Cash & Ledgers
    "CashTurnInCreate", "CashTurnInRead", "DrawerTransactionRead", "BankDepositRequest",
    "CashAppPaymentRecord", "HouseBankTransactionRead", "HouseBankTransferRequest",
    "HouseBankExpenseRequest",
    "AdminDrawerStats", "CashDrawerStat", "DashboardStats", "HouseBankStats",
    "Analytics", "Report",
]
