# routers/users.py

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from core.errors import handle_storage_error
from core.permissions import is_manager
from core.security import hash_password
from dependencies.auth import get_storage, requires_role
from models.enums import Role
from models.user import (
    PasswordChange,
    PrivilegesUpdate,
    PrivilegesUpdated,
    UserCreate,
    UserRead,
)
from models.base import SuccessResponse
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api",
    tags=["Users"],
)


def _require_known_property(storage: Storage, property_id):
    if property_id and storage.get_property(property_id) is None:
        raise HTTPException(status_code=400, detail=f"Unknown property '{property_id}'")


# ============================================================
# LIST USERS (admin)
# ============================================================
@router.get("/users", response_model=List[UserRead], summary="List staff accounts")
def list_users(
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    return storage.get_users()


# ============================================================
# CREATE USER (admin)
# ============================================================
@router.post("/users", response_model=UserRead, status_code=201, summary="Create staff account")
def create_user(
    payload: UserCreate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    if storage.get_user_by_username(payload.username) is not None:
        raise HTTPException(status_code=400, detail="Username already exists")
    _require_known_property(storage, payload.property_id)

    data = payload.model_dump(exclude={"password"})
    data["password_hash"] = hash_password(payload.password)

    try:
        with storage.transaction():
            user = storage.create_user(data)
            storage.create_audit_log(
                current_user.id,
                "user_created",
                f"Created {user.role} account '{user.username}'",
            )
    except HTTPException:
        raise
    except Exception as e:
        raise handle_storage_error(e, "Failed to create user")

    return user


# ============================================================
# PASSWORD RESET (admin)
# ============================================================
@router.put("/users/{user_id}/password", response_model=SuccessResponse, summary="Set a user's password")
def change_password(
    user_id: str,
    payload: PasswordChange,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    with storage.transaction():
        user = storage.update_user(user_id, {"password_hash": hash_password(payload.new_password)})
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        storage.create_audit_log(
            current_user.id, "password_changed", f"Password reset for '{user.username}'"
        )
    return SuccessResponse()


# ============================================================
# ROLE / PROPERTY CHANGE (admin)
# ============================================================
@router.put("/users/{user_id}/privileges", response_model=PrivilegesUpdated, summary="Change role or property")
def update_privileges(
    user_id: str,
    payload: PrivilegesUpdate,
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    _require_known_property(storage, payload.property_id)

    with storage.transaction():
        existing = storage.get_user(user_id)
        if existing is None:
            raise HTTPException(status_code=404, detail="User not found")

        user = storage.update_user(user_id, {
            "role": payload.role,
            # Only managers are property-bound
            "property_id": payload.property_id if payload.role == Role.manager.value else None,
        })
        storage.create_audit_log(
            current_user.id,
            "privileges_changed",
            f"'{user.username}' changed from {existing.role} to {user.role}"
            f"{f' ({user.property_id})' if user.property_id else ''}",
        )
    return PrivilegesUpdated(user=UserRead.model_validate(user))


# ============================================================
# HELPERS (assignable cleaning staff)
# ============================================================
@router.get("/helpers", response_model=List[UserRead], summary="List helpers")
def list_helpers(
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    """
    Managers see helpers attached to their property plus unattached ones.
    """
    helpers = storage.get_users_by_role(Role.helper.value)
    if is_manager(current_user):
        helpers = [h for h in helpers if h.property_id in (None, current_user.property_id)]
    return helpers
