# routers/inventory.py

from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends
from typing import List

from core.permissions import require_property_access
from dependencies.auth import get_current_user, get_storage, requires_role
from models.base import SuccessResponse
from models.inventory import InventoryCreate, InventoryRead, InventoryUpdate
from services.scoping import scope_for
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/inventory",
    tags=["Inventory"],
)

staff = requires_role(["admin", "manager"])


def _get_item_for_user(storage: Storage, user, item_id: str):
    item = storage.get_inventory_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    require_property_access(user, item.property_id)
    return item


@router.get("", response_model=List[InventoryRead], summary="List inventory")
def list_inventory(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return scope_for(current_user, "inventory", storage.get_inventory())


@router.get("/low-stock", response_model=List[InventoryRead], summary="Items at or below threshold")
def low_stock(
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    return storage.get_low_stock_items()


@router.post("", response_model=InventoryRead, status_code=201, summary="Create inventory item")
def create_item(
    payload: InventoryCreate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    if storage.get_property(payload.property_id) is None:
        raise HTTPException(status_code=404, detail="Property not found")
    require_property_access(current_user, payload.property_id)
    return storage.create_inventory_item(payload.model_dump())


@router.put("/{item_id}", response_model=InventoryRead, summary="Update inventory item")
def update_item(
    item_id: str,
    payload: InventoryUpdate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    _get_item_for_user(storage, current_user, item_id)
    changes = payload.model_dump(exclude_unset=True)
    changes["last_updated"] = datetime.now()
    return storage.update_inventory_item(item_id, changes)


@router.delete("/{item_id}", response_model=SuccessResponse, summary="Delete inventory item")
def delete_item(
    item_id: str,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    item = _get_item_for_user(storage, current_user, item_id)

    with storage.transaction():
        storage.delete_inventory_item(item.id)
        storage.create_audit_log(
            current_user.id, "inventory_deleted", f"{current_user.name} removed {item.item} from {item.property_id}"
        )
    return SuccessResponse()
