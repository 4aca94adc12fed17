# routers/properties.py

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from core.errors import handle_storage_error
from core.permissions import require_property_access
from dependencies.auth import get_current_user, get_storage, requires_role
from models.property import (
    FrontDoorCodeResponse,
    FrontDoorCodeUpdate,
    PropertyCreate,
    PropertyRead,
    PropertyUpdate,
)
from services.access_codes import code_expiry, issue_code
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/properties",
    tags=["Properties"],
)


def _get_property_or_404(storage: Storage, property_id: str):
    prop = storage.get_property(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


# ============================================================
# READ (any authenticated user)
# ============================================================
@router.get("", response_model=List[PropertyRead], summary="List properties")
def list_properties(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.get_properties()


@router.get("/{property_id}", response_model=PropertyRead, summary="Get property")
def get_property(
    property_id: str,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return _get_property_or_404(storage, property_id)


# ============================================================
# WRITE (admin)
# ============================================================
@router.post("", response_model=PropertyRead, status_code=201, summary="Create property")
def create_property(
    payload: PropertyCreate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    if storage.get_property(payload.id) is not None:
        raise HTTPException(status_code=400, detail="Property already exists")

    try:
        with storage.transaction():
            prop = storage.create_property(payload.model_dump())
            storage.create_audit_log(current_user.id, "property_created", f"Created property {prop.id} ({prop.name})")
    except HTTPException:
        raise
    except Exception as e:
        raise handle_storage_error(e, "Failed to create property")
    return prop


@router.put("/{property_id}", response_model=PropertyRead, summary="Update property")
def update_property(
    property_id: str,
    payload: PropertyUpdate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    _get_property_or_404(storage, property_id)
    return storage.update_property(property_id, payload.model_dump(exclude_unset=True))


# ============================================================
# FRONT DOOR CODE (admin, or the property's manager)
# ============================================================
@router.put("/{property_id}/front-door-code", response_model=FrontDoorCodeResponse, summary="Set front door code")
def set_front_door_code(
    property_id: str,
    payload: FrontDoorCodeUpdate,
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    """
    Store the supplied code, or issue a fresh one when none is given.
    Expiry follows the requested duration either way.
    """
    _get_property_or_404(storage, property_id)
    require_property_access(current_user, property_id)

    if payload.front_door_code:
        code, expiry = payload.front_door_code, code_expiry(payload.duration)
    else:
        code, expiry = issue_code(payload.duration)

    with storage.transaction():
        prop = storage.update_property(property_id, {"front_door_code": code, "code_expiry": expiry})
        storage.create_audit_log(
            current_user.id, "front_door_code_updated", f"{current_user.name} updated the front door code for {property_id}"
        )

    return FrontDoorCodeResponse(
        property_record=PropertyRead.model_validate(prop),
        front_door_code=code,
        code_expiry=expiry,
    )
