# storage/base.py
"""
Repository interface shared by every storage adapter.

Adapters implement five primitives (`_list`, `_get`, `_insert`, `_update`,
`_delete`) plus `transaction()`. Everything the routers and services call is
built on top of those here, so MemStorage and SqlStorage behave identically.
"""

import re
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlmodel import SQLModel

from models.enums import BookingStatus, MaintenanceStatus, Role, TaskStatus
from storage.tables import (
    AdminDrawerTransaction,
    AuditLog,
    BannedUser,
    Booking,
    CashTurnIn,
    CleaningTask,
    Guest,
    HouseBankTransaction,
    Inquiry,
    InventoryItem,
    MaintenanceItem,
    MasterCode,
    Payment,
    Property,
    Room,
    User,
)

T = TypeVar("T", bound=SQLModel)


def _digits(value: Optional[str]) -> str:
    return re.sub(r"\D", "", value or "")


class Storage(ABC):

    # =========================================================
    # PRIMITIVES (adapter-specific)
    # =========================================================
    @abstractmethod
    def _list(self, model: Type[T], **equals: Any) -> List[T]:
        """All rows of `model` whose columns equal the given values."""

    @abstractmethod
    def _get(self, model: Type[T], record_id: str) -> Optional[T]:
        ...

    @abstractmethod
    def _insert(self, record: T) -> T:
        ...

    @abstractmethod
    def _update(self, model: Type[T], record_id: str, changes: Dict[str, Any]) -> Optional[T]:
        """Apply `changes`; returns None when the row does not exist."""

    @abstractmethod
    def _delete(self, model: Type[T], record_id: str) -> bool:
        ...

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """
        Unit of work. Every write made inside the block is kept only if the
        block finishes without raising. Nested use joins the outer unit.
        """

    def create_all(self) -> None:
        """Prepare the backing store (no-op for adapters without a schema)."""

    def _create(self, model: Type[T], data: Dict[str, Any]) -> T:
        return self._insert(model.model_validate(data))

    # =========================================================
    # USERS
    # =========================================================
    def get_users(self) -> List[User]:
        return self._list(User)

    def get_user(self, user_id: str) -> Optional[User]:
        return self._get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        matches = self._list(User, username=username)
        return matches[0] if matches else None

    def get_users_by_role(self, role: str, property_id: Optional[str] = None) -> List[User]:
        filters = {"role": role}
        if property_id is not None:
            filters["property_id"] = property_id
        return self._list(User, **filters)

    def get_managers(self) -> List[User]:
        return self.get_users_by_role(Role.manager.value)

    def create_user(self, data: Dict[str, Any]) -> User:
        return self._create(User, data)

    def update_user(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        return self._update(User, user_id, changes)

    # =========================================================
    # PROPERTIES
    # =========================================================
    def get_properties(self) -> List[Property]:
        return sorted(self._list(Property), key=lambda p: p.id)

    def get_property(self, property_id: str) -> Optional[Property]:
        return self._get(Property, property_id)

    def create_property(self, data: Dict[str, Any]) -> Property:
        return self._create(Property, data)

    def update_property(self, property_id: str, changes: Dict[str, Any]) -> Optional[Property]:
        return self._update(Property, property_id, changes)

    # =========================================================
    # ROOMS
    # =========================================================
    def get_rooms(self) -> List[Room]:
        return sorted(self._list(Room), key=lambda r: (r.property_id, r.room_number))

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._get(Room, room_id)

    def get_rooms_by_property(self, property_id: str) -> List[Room]:
        return sorted(self._list(Room, property_id=property_id), key=lambda r: r.room_number)

    def create_room(self, data: Dict[str, Any]) -> Room:
        return self._create(Room, data)

    def update_room(self, room_id: str, changes: Dict[str, Any]) -> Optional[Room]:
        return self._update(Room, room_id, changes)

    # =========================================================
    # GUESTS
    # =========================================================
    def get_guests(self) -> List[Guest]:
        return self._list(Guest)

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        return self._get(Guest, guest_id)

    def create_guest(self, data: Dict[str, Any]) -> Guest:
        return self._create(Guest, data)

    # =========================================================
    # BOOKINGS
    # =========================================================
    def get_bookings(self) -> List[Booking]:
        return self._list(Booking)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self._get(Booking, booking_id)

    def get_active_bookings(self) -> List[Booking]:
        return self._list(Booking, status=BookingStatus.active.value)

    def get_bookings_for_room(self, room_id: str) -> List[Booking]:
        return self._list(Booking, room_id=room_id)

    def find_overlapping_bookings(
        self,
        room_id: str,
        start_date: datetime,
        end_date: Optional[datetime],
        exclude_id: Optional[str] = None,
    ) -> List[Booking]:
        """
        Active bookings on `room_id` whose stay intersects [start_date, end_date).
        An open end date runs forever.
        """
        overlapping = []
        for booking in self._list(Booking, room_id=room_id, status=BookingStatus.active.value):
            if booking.id == exclude_id:
                continue
            starts_before_end = end_date is None or booking.start_date < end_date
            ends_after_start = booking.end_date is None or booking.end_date > start_date
            if starts_before_end and ends_after_start:
                overlapping.append(booking)
        return overlapping

    def create_booking(self, data: Dict[str, Any]) -> Booking:
        return self._create(Booking, data)

    def update_booking(self, booking_id: str, changes: Dict[str, Any]) -> Optional[Booking]:
        return self._update(Booking, booking_id, changes)

    # =========================================================
    # PAYMENTS
    # =========================================================
    def get_payments(self) -> List[Payment]:
        return self._list(Payment)

    def get_payment(self, payment_id: str) -> Optional[Payment]:
        return self._get(Payment, payment_id)

    def get_payments_for_booking(self, booking_id: str) -> List[Payment]:
        return self._list(Payment, booking_id=booking_id)

    def create_payment(self, data: Dict[str, Any]) -> Payment:
        return self._create(Payment, data)

    # =========================================================
    # CLEANING TASKS
    # =========================================================
    def get_cleaning_tasks(self) -> List[CleaningTask]:
        return self._list(CleaningTask)

    def get_cleaning_task(self, task_id: str) -> Optional[CleaningTask]:
        return self._get(CleaningTask, task_id)

    def get_cleaning_tasks_by_property(self, property_id: str) -> List[CleaningTask]:
        room_ids = {room.id for room in self.get_rooms_by_property(property_id)}
        return [
            task for task in self._list(CleaningTask)
            if task.property_id == property_id or task.room_id in room_ids
        ]

    def get_cleaning_tasks_by_assignee(self, user_id: str) -> List[CleaningTask]:
        return self._list(CleaningTask, assigned_to=user_id)

    def get_pending_cleaning_tasks(self) -> List[CleaningTask]:
        return self._list(CleaningTask, status=TaskStatus.pending.value)

    def create_cleaning_task(self, data: Dict[str, Any]) -> CleaningTask:
        return self._create(CleaningTask, data)

    def update_cleaning_task(self, task_id: str, changes: Dict[str, Any]) -> Optional[CleaningTask]:
        return self._update(CleaningTask, task_id, changes)

    # =========================================================
    # INVENTORY
    # =========================================================
    def get_inventory(self) -> List[InventoryItem]:
        return self._list(InventoryItem)

    def get_inventory_item(self, item_id: str) -> Optional[InventoryItem]:
        return self._get(InventoryItem, item_id)

    def get_inventory_by_property(self, property_id: str) -> List[InventoryItem]:
        return self._list(InventoryItem, property_id=property_id)

    def get_low_stock_items(self) -> List[InventoryItem]:
        return [item for item in self._list(InventoryItem) if item.quantity <= item.threshold]

    def create_inventory_item(self, data: Dict[str, Any]) -> InventoryItem:
        return self._create(InventoryItem, data)

    def update_inventory_item(self, item_id: str, changes: Dict[str, Any]) -> Optional[InventoryItem]:
        return self._update(InventoryItem, item_id, {**changes, "last_updated": datetime.now()})

    def delete_inventory_item(self, item_id: str) -> bool:
        return self._delete(InventoryItem, item_id)

    # =========================================================
    # MAINTENANCE
    # =========================================================
    def get_maintenance(self) -> List[MaintenanceItem]:
        return self._list(MaintenanceItem)

    def get_maintenance_item(self, item_id: str) -> Optional[MaintenanceItem]:
        return self._get(MaintenanceItem, item_id)

    def get_maintenance_by_property(self, property_id: str) -> List[MaintenanceItem]:
        room_ids = {room.id for room in self.get_rooms_by_property(property_id)}
        return [
            item for item in self._list(MaintenanceItem)
            if item.property_id == property_id or item.room_id in room_ids
        ]

    def get_open_maintenance(self) -> List[MaintenanceItem]:
        return [
            item for item in self._list(MaintenanceItem)
            if item.status != MaintenanceStatus.completed.value
        ]

    def create_maintenance_item(self, data: Dict[str, Any]) -> MaintenanceItem:
        return self._create(MaintenanceItem, data)

    def update_maintenance_item(self, item_id: str, changes: Dict[str, Any]) -> Optional[MaintenanceItem]:
        return self._update(MaintenanceItem, item_id, changes)

    # =========================================================
    # INQUIRIES
    # =========================================================
    def get_inquiries(self) -> List[Inquiry]:
        return sorted(self._list(Inquiry), key=lambda i: i.created_at, reverse=True)

    def get_inquiry(self, inquiry_id: str) -> Optional[Inquiry]:
        return self._get(Inquiry, inquiry_id)

    def get_inquiry_by_token(self, token: str) -> Optional[Inquiry]:
        matches = self._list(Inquiry, tracker_token=token)
        return matches[0] if matches else None

    def create_inquiry(self, data: Dict[str, Any]) -> Inquiry:
        return self._create(Inquiry, data)

    def update_inquiry(self, inquiry_id: str, changes: Dict[str, Any]) -> Optional[Inquiry]:
        return self._update(Inquiry, inquiry_id, changes)

    # =========================================================
    # BANNED USERS
    # =========================================================
    def get_banned_users(self) -> List[BannedUser]:
        return self._list(BannedUser)

    def get_banned_user(self, banned_id: str) -> Optional[BannedUser]:
        return self._get(BannedUser, banned_id)

    def find_banned_user(self, email: Optional[str] = None, phone: Optional[str] = None) -> Optional[BannedUser]:
        """Match on email (case-insensitive) or phone (digits only)."""
        email_key = (email or "").strip().lower()
        phone_key = _digits(phone)
        for banned in self._list(BannedUser):
            if email_key and (banned.email or "").strip().lower() == email_key:
                return banned
            if phone_key and _digits(banned.phone) == phone_key:
                return banned
        return None

    def create_banned_user(self, data: Dict[str, Any]) -> BannedUser:
        return self._create(BannedUser, data)

    def delete_banned_user(self, banned_id: str) -> bool:
        return self._delete(BannedUser, banned_id)

    # =========================================================
    # MASTER CODES
    # =========================================================
    def get_master_codes(self) -> List[MasterCode]:
        return self._list(MasterCode)

    def create_master_code(self, data: Dict[str, Any]) -> MasterCode:
        return self._create(MasterCode, data)

    # =========================================================
    # AUDIT LOG
    # =========================================================
    def get_audit_logs(self, limit: Optional[int] = None) -> List[AuditLog]:
        logs = sorted(self._list(AuditLog), key=lambda log: log.timestamp, reverse=True)
        return logs[:limit] if limit else logs

    def create_audit_log(self, user_id: Optional[str], action: str, details: Optional[str] = None) -> AuditLog:
        return self._create(AuditLog, {"user_id": user_id, "action": action, "details": details})

    # =========================================================
    # CASH TURN-INS / ADMIN DRAWER / HOUSE BANK
    # =========================================================
    def get_cash_turn_ins(self) -> List[CashTurnIn]:
        return sorted(self._list(CashTurnIn), key=lambda t: t.turn_in_date, reverse=True)

    def get_cash_turn_ins_by_manager(self, manager_id: str) -> List[CashTurnIn]:
        return sorted(
            self._list(CashTurnIn, manager_id=manager_id),
            key=lambda t: t.turn_in_date,
            reverse=True,
        )

    def create_cash_turn_in(self, data: Dict[str, Any]) -> CashTurnIn:
        return self._create(CashTurnIn, data)

    def get_admin_drawer_transactions(self) -> List[AdminDrawerTransaction]:
        return sorted(
            self._list(AdminDrawerTransaction),
            key=lambda t: t.transaction_date,
            reverse=True,
        )

    def create_admin_drawer_transaction(self, data: Dict[str, Any]) -> AdminDrawerTransaction:
        return self._create(AdminDrawerTransaction, data)

    def get_house_bank_transactions(self) -> List[HouseBankTransaction]:
        return sorted(
            self._list(HouseBankTransaction),
            key=lambda t: t.transaction_date,
            reverse=True,
        )

    def create_house_bank_transaction(self, data: Dict[str, Any]) -> HouseBankTransaction:
        return self._create(HouseBankTransaction, data)
