# routers/bookings.py

from fastapi import APIRouter, Depends, Response
from typing import List

from dependencies.auth import get_storage, requires_role
from models.booking import BookingCreate, BookingRead, BookingUpdate
from services import bookings as booking_service
from services.scoping import scope_for
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/bookings",
    tags=["Bookings"],
)

staff = requires_role(["admin", "manager"])


# ============================================================
# LIST / GET
# ============================================================
@router.get("", response_model=List[BookingRead], summary="List bookings")
def list_bookings(
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return scope_for(current_user, "bookings", storage.get_bookings(), storage.get_rooms())


@router.get("/{booking_id}", response_model=BookingRead, summary="Get booking")
def get_booking(
    booking_id: str,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return booking_service.get_booking_for_user(storage, current_user, booking_id)


# ============================================================
# CREATE
# ============================================================
@router.post("", response_model=BookingRead, status_code=201, summary="Create booking")
def create_booking(
    payload: BookingCreate,
    response: Response,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    """
    Replaying an identical request returns the existing booking with 200
    instead of creating a second one.
    """
    booking, created = booking_service.create_booking(storage, current_user, payload)
    if not created:
        response.status_code = 200
    return booking


# ============================================================
# UPDATE / CANCEL
# ============================================================
@router.put("/{booking_id}", response_model=BookingRead, summary="Update booking")
def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return booking_service.update_booking(storage, current_user, booking_id, payload)


@router.delete("/{booking_id}", response_model=BookingRead, summary="Cancel booking")
def cancel_booking(
    booking_id: str,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return booking_service.cancel_booking(storage, current_user, booking_id)


# ============================================================
# CHECK-IN / CHECK-OUT
# ============================================================
@router.post("/{booking_id}/check-in", response_model=BookingRead, summary="Check guest in")
def check_in(
    booking_id: str,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return booking_service.check_in(storage, current_user, booking_id)


@router.post("/{booking_id}/check-out", response_model=BookingRead, summary="Check guest out")
def check_out(
    booking_id: str,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return booking_service.check_out(storage, current_user, booking_id)
