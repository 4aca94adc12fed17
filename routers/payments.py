# routers/payments.py

from fastapi import APIRouter, Depends
from typing import List

from dependencies.auth import get_storage, requires_role
from models.payment import PaymentCreate, PaymentDetailedRead, PaymentRead
from services.payments import record_payment
from services.scoping import scope_payments
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
)

staff = requires_role(["admin", "manager"])


def _visible_payments(storage: Storage, user):
    return scope_payments(user, storage.get_payments(), storage.get_bookings(), storage.get_rooms())


@router.get("", response_model=List[PaymentRead], summary="List payments")
def list_payments(
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return _visible_payments(storage, current_user)


@router.get("/detailed", response_model=List[PaymentDetailedRead], summary="List payments with receiver names")
def list_payments_detailed(
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    names = {u.id: u.name for u in storage.get_users()}
    return [
        PaymentDetailedRead(
            **PaymentRead.model_validate(p).model_dump(),
            received_by_name=names.get(p.received_by, "Unknown"),
        )
        for p in _visible_payments(storage, current_user)
    ]


@router.post("", response_model=PaymentRead, status_code=201, summary="Record payment")
def create_payment(
    payload: PaymentCreate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return record_payment(storage, current_user, payload)
