# models/maintenance.py

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from models.base import CamelModel
from models.enums import MaintenanceStatus, Priority


class MaintenanceCreate(CamelModel):
    room_id: Optional[str] = None
    property_id: Optional[str] = None
    issue: str = Field(min_length=1)
    description: Optional[str] = None
    priority: Priority = Priority.normal
    status: MaintenanceStatus = MaintenanceStatus.open
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        return Priority.normalize(v)


class MaintenanceRead(CamelModel):
    id: str
    room_id: Optional[str] = None
    property_id: Optional[str] = None
    issue: str
    description: Optional[str] = None
    priority: Priority
    status: MaintenanceStatus
    reported_by: str
    assigned_to: Optional[str] = None
    date_reported: datetime
    date_completed: Optional[datetime] = None
    notes: Optional[str] = None


class MaintenanceUpdate(CamelModel):
    issue: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[MaintenanceStatus] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        return Priority.normalize(v)
