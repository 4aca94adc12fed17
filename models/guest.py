# models/guest.py

from datetime import datetime
from typing import Optional
from pydantic import Field

from models.base import CamelModel
from models.enums import ContactType


class GuestBase(CamelModel):
    name: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    contact_type: ContactType = ContactType.phone
    referral_source: Optional[str] = None
    cash_app_tag: Optional[str] = None
    notes: Optional[str] = None


class GuestCreate(GuestBase):
    pass


class GuestRead(GuestBase):
    id: str
    created_at: Optional[datetime] = None
