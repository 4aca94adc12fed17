# routers/banned_users.py

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from dependencies.auth import get_storage, requires_role
from models.banned_user import BannedUserCreate, BannedUserRead
from models.base import SuccessResponse
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/banned-users",
    tags=["Banned Users"],
)


@router.get("", response_model=List[BannedUserRead], summary="List banned users")
def list_banned_users(
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    return storage.get_banned_users()


@router.post("", response_model=BannedUserRead, status_code=201, summary="Ban a user")
def ban_user(
    payload: BannedUserCreate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    with storage.transaction():
        banned = storage.create_banned_user({**payload.model_dump(), "banned_by": current_user.id})
        storage.create_audit_log(
            current_user.id, "banned_user", f"Banned user: {banned.name} - {banned.email or banned.phone}"
        )
    return banned


@router.delete("/{banned_id}", response_model=SuccessResponse, summary="Lift a ban")
def unban_user(
    banned_id: str,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    with storage.transaction():
        banned = storage.get_banned_user(banned_id)
        if banned is None:
            raise HTTPException(status_code=404, detail="Banned user not found")
        storage.delete_banned_user(banned_id)
        storage.create_audit_log(current_user.id, "unbanned_user", f"Lifted ban on {banned.name}")
    return SuccessResponse()
