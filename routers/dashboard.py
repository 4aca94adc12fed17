# routers/dashboard.py

from fastapi import APIRouter, Depends

from core.permissions import is_admin
from dependencies.auth import get_current_user, get_storage
from models.enums import BookingStatus
from models.stats import DashboardStats
from services.cash import cash_drawer_snapshot
from services.ledger import compute_dashboard_stats
from services.scoping import scope_for, scope_payments
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"],
)


@router.get("/stats", response_model=DashboardStats, summary="Dashboard figures for the caller's scope")
def dashboard_stats(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Every figure is computed from the caller's visible rows only.
    Admins additionally get the per-manager cash drawers.
    """
    all_rooms = storage.get_rooms()
    all_bookings = storage.get_bookings()

    bookings = scope_for(current_user, "bookings", all_bookings, all_rooms)
    stats = compute_dashboard_stats(
        rooms=scope_for(current_user, "rooms", all_rooms),
        bookings=[b for b in bookings if b.status == BookingStatus.active.value],
        tasks=scope_for(current_user, "cleaning_tasks", storage.get_cleaning_tasks(), all_rooms),
        payments=scope_payments(current_user, storage.get_payments(), all_bookings, all_rooms),
        all_bookings=bookings,
    )

    if is_admin(current_user):
        stats.cash_drawer_stats = cash_drawer_snapshot(storage)
    return stats
