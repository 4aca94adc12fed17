# routers/maintenance.py

from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends
from typing import List

from core.permissions import require_property_access
from dependencies.auth import get_current_user, get_storage, requires_role
from models.enums import MaintenanceStatus
from models.maintenance import MaintenanceCreate, MaintenanceRead, MaintenanceUpdate
from services.scoping import scope_for
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/maintenance",
    tags=["Maintenance"],
)

staff = requires_role(["admin", "manager"])


def _item_property(storage: Storage, item):
    if item.property_id:
        return item.property_id
    room = storage.get_room(item.room_id) if item.room_id else None
    return room.property_id if room else None


@router.get("", response_model=List[MaintenanceRead], summary="List maintenance items")
def list_maintenance(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return scope_for(current_user, "maintenance", storage.get_maintenance(), storage.get_rooms())


@router.get("/open", response_model=List[MaintenanceRead], summary="Open maintenance items")
def open_maintenance(
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    return storage.get_open_maintenance()


@router.post("", response_model=MaintenanceRead, status_code=201, summary="Report maintenance issue")
def create_maintenance(
    payload: MaintenanceCreate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    data = payload.model_dump()
    if data.get("room_id"):
        room = storage.get_room(data["room_id"])
        if room is None:
            raise HTTPException(status_code=404, detail="Room not found")
        data["property_id"] = data.get("property_id") or room.property_id
    require_property_access(current_user, data.get("property_id"))

    with storage.transaction():
        item = storage.create_maintenance_item({**data, "reported_by": current_user.id})
        storage.create_audit_log(
            current_user.id, "maintenance_reported", f"{current_user.name} reported: {item.issue} ({item.priority})"
        )
    return item


@router.put("/{item_id}", response_model=MaintenanceRead, summary="Update maintenance item")
def update_maintenance(
    item_id: str,
    payload: MaintenanceUpdate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    item = storage.get_maintenance_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Maintenance item not found")
    require_property_access(current_user, _item_property(storage, item))

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("status") == MaintenanceStatus.completed.value and item.status != MaintenanceStatus.completed.value:
        changes["date_completed"] = datetime.now()
    return storage.update_maintenance_item(item_id, changes)
