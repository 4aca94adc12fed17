# routers/guests.py

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from dependencies.auth import get_storage, requires_role
from models.guest import GuestCreate, GuestRead
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/guests",
    tags=["Guests"],
)


@router.get("", response_model=List[GuestRead], summary="List guests")
def list_guests(
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    return storage.get_guests()


@router.get("/{guest_id}", response_model=GuestRead, summary="Get guest")
def get_guest(
    guest_id: str,
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    guest = storage.get_guest(guest_id)
    if guest is None:
        raise HTTPException(status_code=404, detail="Guest not found")
    return guest


@router.post("", response_model=GuestRead, status_code=201, summary="Create guest")
def create_guest(
    payload: GuestCreate,
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    return storage.create_guest(payload.model_dump())
