# routers/rooms.py

from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from core.errors import handle_storage_error
from core.permissions import require_property_access
from dependencies.auth import get_current_user, get_storage, requires_role
from models.base import to_naive_local
from models.booking import RoomAvailability
from models.room import (
    GenerateCodeRequest,
    GeneratedCodeResponse,
    RoomCreate,
    RoomMasterCodeResponse,
    RoomMasterCodeUpdate,
    RoomRead,
    RoomUpdate,
)
from services.access_codes import issue_code
from services.scoping import scope_for
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/rooms",
    tags=["Rooms"],
)


def _get_room_for_user(storage: Storage, user, room_id: str):
    room = storage.get_room(room_id)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")
    require_property_access(user, room.property_id)
    return room


# ============================================================
# LIST / GET
# ============================================================
@router.get("", response_model=List[RoomRead], summary="List rooms")
def list_rooms(
    property_id: Optional[str] = Query(None, alias="propertyId"),
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    rooms = scope_for(current_user, "rooms", storage.get_rooms())
    if property_id:
        rooms = [r for r in rooms if r.property_id == property_id]
    return rooms


@router.get("/{room_id}", response_model=RoomRead, summary="Get room")
def get_room(
    room_id: str,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return _get_room_for_user(storage, current_user, room_id)


@router.get("/{room_id}/availability", response_model=RoomAvailability, summary="Room bookings in a window")
def room_availability(
    room_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    """
    Active bookings overlapping [start, end). Without a window every active
    booking of the room is returned.
    """
    room = _get_room_for_user(storage, current_user, room_id)
    window_start = to_naive_local(start) if start else datetime.min
    window_end = to_naive_local(end) if end else None
    bookings = storage.find_overlapping_bookings(room.id, window_start, window_end)
    return RoomAvailability(room_id=room.id, bookings=bookings)


# ============================================================
# CREATE (admin)
# ============================================================
@router.post("", response_model=RoomRead, status_code=201, summary="Create room")
def create_room(
    payload: RoomCreate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    if storage.get_property(payload.property_id) is None:
        raise HTTPException(status_code=404, detail="Property not found")

    data = payload.model_dump()
    data["id"] = data.get("id") or f"{payload.property_id}-R{payload.room_number}"
    if storage.get_room(data["id"]) is not None:
        raise HTTPException(status_code=400, detail="Room already exists")

    try:
        return storage.create_room(data)
    except Exception as e:
        raise handle_storage_error(e, "Failed to create room")


# ============================================================
# UPDATE (admin, or the property's manager)
# ============================================================
@router.put("/{room_id}", response_model=RoomRead, summary="Update room")
def update_room(
    room_id: str,
    payload: RoomUpdate,
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    _get_room_for_user(storage, current_user, room_id)
    return storage.update_room(room_id, payload.model_dump(exclude_unset=True))


# ============================================================
# DOOR CODES
# ============================================================
@router.post("/{room_id}/generate-code", response_model=GeneratedCodeResponse, summary="Issue a door code")
def generate_code(
    room_id: str,
    payload: Optional[GenerateCodeRequest] = None,
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    """Only the code and its expiry change; room status is left alone."""
    _get_room_for_user(storage, current_user, room_id)
    issued = issue_code((payload or GenerateCodeRequest()).duration)

    with storage.transaction():
        room = storage.update_room(room_id, {"door_code": issued.code, "code_expiry": issued.expiry})
        storage.create_audit_log(
            current_user.id, "door_code_generated", f"{current_user.name} issued a new door code for {room_id}"
        )

    return GeneratedCodeResponse(
        door_code=issued.code,
        code_expiry=issued.expiry,
        room=RoomRead.model_validate(room),
    )


@router.put("/{room_id}/master-code", response_model=RoomMasterCodeResponse, summary="Set room master code")
def set_master_code(
    room_id: str,
    payload: RoomMasterCodeUpdate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    if storage.get_room(room_id) is None:
        raise HTTPException(status_code=404, detail="Room not found")

    with storage.transaction():
        room = storage.update_room(room_id, {"master_code": payload.master_code})
        storage.create_audit_log(current_user.id, "master_code_updated", f"Master code updated for {room_id}")

    return RoomMasterCodeResponse(room=RoomRead.model_validate(room), master_code=payload.master_code)
