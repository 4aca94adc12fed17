# services/cleaning.py

from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from core.logging_config import logger
from core.permissions import is_helper, is_manager, require_property_access
from models.cleaning_task import CleaningTaskCreate, CleaningTaskUpdate
from models.enums import CleaningStatus, LinenStatus, Role, RoomStatus, TaskStatus, TaskType
from storage.base import Storage
from storage.tables import CleaningTask


def _task_property(storage: Storage, task) -> Optional[str]:
    if task.property_id:
        return task.property_id
    if task.room_id:
        room = storage.get_room(task.room_id)
        return room.property_id if room else None
    return None


def get_task_for_user(storage: Storage, user, task_id: str) -> CleaningTask:
    """Managers may touch their property's tasks; helpers only their own."""
    task = storage.get_cleaning_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")

    if is_manager(user):
        require_property_access(user, _task_property(storage, task))
    elif is_helper(user) and task.assigned_to != user.id:
        raise HTTPException(status_code=403, detail="Access denied")
    return task


def create_cleaning_task(storage: Storage, user, payload: CleaningTaskCreate) -> CleaningTask:
    data = payload.model_dump()

    with storage.transaction():
        if data.get("room_id"):
            room = storage.get_room(data["room_id"])
            if room is None:
                raise HTTPException(status_code=404, detail="Room not found")
            data["property_id"] = data.get("property_id") or room.property_id
        require_property_access(user, data.get("property_id"))

        task = storage.create_cleaning_task(data)
        where = f" for room {task.room_id}" if task.room_id else ""
        storage.create_audit_log(user.id, "task_created", f"Created {task.type} task: {task.title}{where}")
    return task


def update_cleaning_task(
    storage: Storage,
    user,
    task_id: str,
    payload: CleaningTaskUpdate,
    now: Optional[datetime] = None,
) -> CleaningTask:
    """
    Apply a partial update. Moving a task to completed stamps completed_at/by;
    for a room_cleaning task the room is also marked clean with fresh linen.
    """
    now = now or datetime.now()
    changes = payload.model_dump(exclude_unset=True)

    with storage.transaction():
        task = get_task_for_user(storage, user, task_id)

        completing = (
            changes.get("status") == TaskStatus.completed.value
            and task.status != TaskStatus.completed.value
        )
        if completing:
            changes["completed_at"] = now
            changes["completed_by"] = user.id

            if task.room_id and task.type == TaskType.room_cleaning.value:
                room = storage.get_room(task.room_id)
                if room is not None:
                    room_changes = {
                        "cleaning_status": CleaningStatus.clean.value,
                        "linen_status": LinenStatus.fresh.value,
                        "last_cleaned": now,
                        "last_linen_change": now,
                    }
                    if room.status == RoomStatus.cleaning.value:
                        room_changes["status"] = RoomStatus.available.value
                    storage.update_room(room.id, room_changes)

        updated = storage.update_cleaning_task(task.id, changes)
        if completing:
            storage.create_audit_log(user.id, "task_completed", f"{user.name} completed task: {task.title}")

    if completing:
        logger.info(f"Cleaning task {task.id} completed by {user.username}")
    return updated


def assign_helper(storage: Storage, user, task_id: str, helper_id: str) -> CleaningTask:
    with storage.transaction():
        task = get_task_for_user(storage, user, task_id)

        helper = storage.get_user(helper_id)
        if helper is None or helper.role != Role.helper.value:
            raise HTTPException(status_code=404, detail="Helper not found")

        updated = storage.update_cleaning_task(task.id, {"assigned_to": helper.id})
        storage.create_audit_log(
            user.id, "task_assigned", f"{user.name} assigned task '{task.title}' to {helper.name}"
        )
    return updated


def unassign_helper(storage: Storage, user, task_id: str) -> CleaningTask:
    with storage.transaction():
        task = get_task_for_user(storage, user, task_id)
        updated = storage.update_cleaning_task(task.id, {"assigned_to": None})
        storage.create_audit_log(user.id, "task_unassigned", f"{user.name} unassigned task '{task.title}'")
    return updated
