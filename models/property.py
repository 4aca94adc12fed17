# models/property.py

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field

from models.base import CamelModel, FOUR_DIGITS, LocalDateTime, Money
from models.enums import CodeDuration


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class PropertyBase(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    rate_daily: Money = Decimal("0")
    rate_weekly: Money = Decimal("0")
    rate_monthly: Money = Decimal("0")


# -------------------------------------------------
# Create
# -------------------------------------------------
class PropertyCreate(PropertyBase):
    """Property ids are short codes chosen by the admin (e.g. P3)."""
    id: str = Field(min_length=1, max_length=16, pattern=r"^[A-Za-z0-9_-]+$")
    front_door_code: Optional[str] = Field(default=None, pattern=FOUR_DIGITS)
    code_expiry: Optional[LocalDateTime] = None


# -------------------------------------------------
# Read
# -------------------------------------------------
class PropertyRead(PropertyBase):
    id: str
    front_door_code: Optional[str] = None
    code_expiry: Optional[datetime] = None


# -------------------------------------------------
# Update
# -------------------------------------------------
class PropertyUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    rate_daily: Optional[Money] = None
    rate_weekly: Optional[Money] = None
    rate_monthly: Optional[Money] = None


class FrontDoorCodeUpdate(CamelModel):
    """A code is generated when none is supplied."""
    front_door_code: Optional[str] = Field(default=None, pattern=FOUR_DIGITS)
    duration: CodeDuration = CodeDuration.monthly


class FrontDoorCodeResponse(CamelModel):
    property_record: PropertyRead = Field(alias="property")
    front_door_code: str
    code_expiry: datetime
