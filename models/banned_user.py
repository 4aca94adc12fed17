# models/banned_user.py

from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator

from models.base import CamelModel


class BannedUserCreate(CamelModel):
    name: str = Field(min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    reason: str = Field(min_length=1)

    @model_validator(mode="after")
    def needs_identifier(self):
        if not (self.phone or self.email):
            raise ValueError("Either phone or email is required")
        return self


class BannedUserRead(CamelModel):
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    reason: str
    banned_date: datetime
    banned_by: str
