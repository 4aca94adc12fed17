# models/user.py

from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator

from models.base import CamelModel
from models.enums import Role


def _require_property_for_manager(role, property_id):
    if role == Role.manager.value and not property_id:
        raise ValueError("Property is required for manager role")


# ===============================================================
# READ
# ===============================================================
class UserRead(CamelModel):
    """
    Public view of a staff account. Never carries the password hash.
    """
    id: str
    username: str
    role: Role
    property_id: Optional[str] = Field(default=None, alias="property")
    name: str
    created_at: Optional[datetime] = None


# ===============================================================
# CREATE (admin only)
# ===============================================================
class UserCreate(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6)
    role: Role = Role.helper
    property_id: Optional[str] = Field(default=None, alias="property")
    name: str = Field(min_length=1)

    @model_validator(mode="after")
    def check_manager_property(self):
        _require_property_for_manager(self.role, self.property_id)
        return self


# ===============================================================
# UPDATES
# ===============================================================
class PasswordChange(CamelModel):
    new_password: str = Field(min_length=6)


class PrivilegesUpdate(CamelModel):
    role: Role
    property_id: Optional[str] = Field(default=None, alias="property")

    @model_validator(mode="after")
    def check_manager_property(self):
        _require_property_for_manager(self.role, self.property_id)
        return self


class PrivilegesUpdated(CamelModel):
    success: bool = True
    user: UserRead
