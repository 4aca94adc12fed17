# models/master_code.py

from datetime import datetime
from typing import Optional
from pydantic import Field

from models.base import CamelModel, FOUR_DIGITS


class MasterCodeCreate(CamelModel):
    property_id: str
    room_id: Optional[str] = None
    master_code: str = Field(pattern=FOUR_DIGITS)
    notes: Optional[str] = None


class MasterCodeRead(CamelModel):
    id: str
    property_id: str
    room_id: Optional[str] = None
    master_code: str
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
