# routers/audit_logs.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import get_storage, requires_role
from models.audit_log import AuditLogRead
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/audit-logs",
    tags=["Audit Logs"],
)


@router.get("", response_model=List[AuditLogRead], summary="Recent audit log entries")
def list_audit_logs(
    limit: Optional[int] = Query(100, ge=1, le=1000),
    current_user: User = Depends(requires_role(["admin"])),
    storage: Storage = Depends(get_storage),
):
    return storage.get_audit_logs(limit=limit)
