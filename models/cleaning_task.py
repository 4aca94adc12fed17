# models/cleaning_task.py

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from models.base import CamelModel, LocalDateTime
from models.enums import Priority, TaskStatus, TaskType


class CleaningTaskBase(CamelModel):
    room_id: Optional[str] = None
    property_id: Optional[str] = None
    type: TaskType = TaskType.general
    title: str = Field(min_length=1)
    description: Optional[str] = None
    priority: Priority = Priority.normal
    assigned_to: Optional[str] = None
    due_date: Optional[LocalDateTime] = None
    notes: Optional[str] = None

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        return Priority.normalize(v)


class CleaningTaskCreate(CleaningTaskBase):
    status: TaskStatus = TaskStatus.pending


class CleaningTaskRead(CleaningTaskBase):
    id: str
    status: TaskStatus
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    created_at: Optional[datetime] = None


class CleaningTaskUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[str] = None
    due_date: Optional[LocalDateTime] = None
    notes: Optional[str] = None

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        return Priority.normalize(v)


class TaskAssign(CamelModel):
    helper_id: str
