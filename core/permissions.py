# core/permissions.py

from typing import Optional
from fastapi import HTTPException

from models.enums import Role


# ============================================================
# ROLE HELPERS
# ============================================================

def is_admin(user) -> bool:
    """Admins bypass every property restriction."""
    return user.role == Role.admin.value


def is_manager(user) -> bool:
    return user.role == Role.manager.value


def is_helper(user) -> bool:
    return user.role == Role.helper.value


def require_admin(user):
    if not is_admin(user):
        raise HTTPException(status_code=403, detail="Admin role required")


# ============================================================
# PROPERTY-LEVEL ACCESS
# ============================================================

def can_access_property(user, property_id: Optional[str]) -> bool:
    """
    Managers may only touch resources of their own property.
    A manager without a property can touch nothing.
    Admins and helpers are not property-bound.
    """
    if not is_manager(user):
        return True
    if not user.property_id:
        return False
    return user.property_id == property_id


def require_property_access(user, property_id: Optional[str]):
    """Raise 403 if a manager reaches outside their property."""
    if not can_access_property(user, property_id):
        raise HTTPException(
            status_code=403,
            detail="Access denied",
        )
