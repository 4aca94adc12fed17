# routers/cleaning_tasks.py

from fastapi import APIRouter, Depends
from typing import List

from dependencies.auth import get_current_user, get_storage, requires_role
from models.cleaning_task import CleaningTaskCreate, CleaningTaskRead, CleaningTaskUpdate, TaskAssign
from services import cleaning
from services.scoping import scope_for
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/cleaning-tasks",
    tags=["Cleaning Tasks"],
)

staff = requires_role(["admin", "manager"])


@router.get("", response_model=List[CleaningTaskRead], summary="List cleaning tasks")
def list_tasks(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Helpers only ever see the tasks assigned to them."""
    return scope_for(current_user, "cleaning_tasks", storage.get_cleaning_tasks(), storage.get_rooms())


@router.post("", response_model=CleaningTaskRead, status_code=201, summary="Create cleaning task")
def create_task(
    payload: CleaningTaskCreate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return cleaning.create_cleaning_task(storage, current_user, payload)


@router.put("/{task_id}", response_model=CleaningTaskRead, summary="Update cleaning task")
def update_task(
    task_id: str,
    payload: CleaningTaskUpdate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return cleaning.update_cleaning_task(storage, current_user, task_id, payload)


@router.post("/{task_id}/assign", response_model=CleaningTaskRead, summary="Assign helper")
def assign_task(
    task_id: str,
    payload: TaskAssign,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return cleaning.assign_helper(storage, current_user, task_id, payload.helper_id)


@router.post("/{task_id}/unassign", response_model=CleaningTaskRead, summary="Unassign helper")
def unassign_task(
    task_id: str,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return cleaning.unassign_helper(storage, current_user, task_id)
