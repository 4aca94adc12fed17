# models/audit_log.py

from datetime import datetime
from typing import Optional

from models.base import CamelModel


class AuditLogRead(CamelModel):
    id: str
    user_id: Optional[str] = None
    action: str
    details: Optional[str] = None
    timestamp: datetime
