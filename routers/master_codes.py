# routers/master_codes.py

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from dependencies.auth import get_storage, requires_role
from models.master_code import MasterCodeCreate, MasterCodeRead
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/master-codes",
    tags=["Master Codes"],
)


@router.get("", response_model=List[MasterCodeRead], summary="List master codes")
def list_master_codes(
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    return storage.get_master_codes()


@router.post("", response_model=MasterCodeRead, status_code=201, summary="Create master code")
def create_master_code(
    payload: MasterCodeCreate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    if storage.get_property(payload.property_id) is None:
        raise HTTPException(status_code=404, detail="Property not found")
    if payload.room_id and storage.get_room(payload.room_id) is None:
        raise HTTPException(status_code=404, detail="Room not found")

    with storage.transaction():
        code = storage.create_master_code({**payload.model_dump(), "created_by": current_user.id})
        scope = payload.room_id or payload.property_id
        storage.create_audit_log(current_user.id, "master_code_created", f"Master code created for {scope}")
    return code
