# routers/reports.py

from fastapi import APIRouter, Depends, Query

from core.logging_config import logger
from core.permissions import is_admin
from dependencies.auth import get_storage, requires_role
from models.reports import Analytics, Report
from services.reports import DEFAULT_RANGE, build_analytics, build_report
from services.scoping import scope_for, scope_payments
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api",
    tags=["Reports"],
)


# ============================================================
# ADMIN REPORT
# ============================================================
@router.get("/reports", response_model=Report, summary="Operational report")
def get_report(
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    storage.create_audit_log(
        current_user.id, "accessed_reports", f"Admin {current_user.username} accessed comprehensive reports"
    )

    return build_report(
        low_stock=storage.get_low_stock_items(),
        open_maintenance=storage.get_open_maintenance(),
        payments=storage.get_payments(),
        bookings=storage.get_bookings(),
        inquiries=storage.get_inquiries(),
        rooms=storage.get_rooms(),
        properties=storage.get_properties(),
    )


# ============================================================
# ANALYTICS
# ============================================================
@router.get("/analytics", response_model=Analytics, summary="Revenue, occupancy and operations insights")
def get_analytics(
    range_key: str = Query(DEFAULT_RANGE, alias="range", pattern=r"^(7d|30d|90d|1y)$"),
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    """Managers get figures for their own property only."""
    all_rooms = storage.get_rooms()
    all_bookings = storage.get_bookings()

    bookings = scope_for(current_user, "bookings", all_bookings, all_rooms)
    guests = storage.get_guests()
    if not is_admin(current_user):
        guest_ids = {b.guest_id for b in bookings}
        guests = [g for g in guests if g.id in guest_ids]

    logger.info(f"Analytics ({range_key}) requested by {current_user.username}")

    return build_analytics(
        range_key,
        bookings=bookings,
        payments=scope_payments(current_user, storage.get_payments(), all_bookings, all_rooms),
        rooms=scope_for(current_user, "rooms", all_rooms),
        inventory=scope_for(current_user, "inventory", storage.get_inventory()),
        maintenance=scope_for(current_user, "maintenance", storage.get_maintenance(), all_rooms),
        guests=guests,
        tasks=scope_for(current_user, "cleaning_tasks", storage.get_cleaning_tasks(), all_rooms),
    )
